"""API route handlers."""
from . import assistant, plaid, profile, settings, vendor_bills

__all__ = ["assistant", "plaid", "profile", "settings", "vendor_bills"]
