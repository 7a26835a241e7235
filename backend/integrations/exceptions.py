"""Typed exception hierarchy for external API errors.

Provides structured exceptions for the upstream services the handlers
proxy (Plaid, OpenAI, Anthropic), carrying the message unwrapped from
the upstream error body when one is available.
"""


class ProviderError(Exception):
    """Base exception for all provider-related errors.

    Carries the provider name so callers can identify which provider failed.
    """

    def __init__(self, message: str, provider_name: str = ""):
        self.provider_name = provider_name
        super().__init__(message)


class ProviderConfigurationError(ProviderError):
    """Credentials for the provider are missing or the provider is unknown."""

    pass


class ProviderAPIError(ProviderError):
    """HTTP 4xx/5xx responses (or transport failures) from the provider API."""

    def __init__(
        self,
        message: str,
        provider_name: str = "",
        status_code: int | None = None,
        error_code: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message, provider_name)
