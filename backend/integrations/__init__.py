"""External API integrations.

This package contains:
- Provider protocol: normalized bank records and the client contract
- Plaid client: Integration with the Plaid API
- LLM clients: OpenAI and Anthropic completion clients for the assistant
"""

from integrations.provider_protocol import (
    AccountsResult,
    BankAccountData,
    BankDataClient,
    BankTransactionData,
    InstitutionInfo,
    TransactionsResult,
)

__all__ = [
    "AccountsResult",
    "BankAccountData",
    "BankDataClient",
    "BankTransactionData",
    "InstitutionInfo",
    "TransactionsResult",
]
