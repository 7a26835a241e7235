"""SQLAlchemy ORM models."""

from .accounting_settings import AccountingSettings
from .ai_config import AIConfig
from .bank_transaction import BankTransaction
from .connected_bank import ConnectedBank
from .ledger_account import LedgerAccount
from .plaid_account import PlaidAccount
from .user_profile import UserProfile
from .vendor_bill import VendorBill
from .utils import generate_uuid

__all__ = ["AccountingSettings", "AIConfig", "BankTransaction", "ConnectedBank", "LedgerAccount", "PlaidAccount", "UserProfile", "VendorBill", "generate_uuid"]
