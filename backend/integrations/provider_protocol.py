"""Bank-data provider definitions.

Normalized records returned by the Plaid client, and the protocol the
services depend on so tests can substitute a mock client.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Protocol


@dataclass
class BankAccountData:
    """Normalized account data from ``/accounts/get``."""

    account_id: str  # Plaid's external account id
    name: str
    official_name: str | None = None
    type: str | None = None  # e.g., "depository"
    subtype: str | None = None  # e.g., "checking"
    mask: str | None = None  # Last 2-4 digits of the account number
    current_balance: Decimal | None = None
    available_balance: Decimal | None = None
    credit_limit: Decimal | None = None
    currency_code: str | None = None


@dataclass
class AccountsResult:
    """Accounts for one Item plus the Item's institution id."""

    accounts: list[BankAccountData] = field(default_factory=list)
    institution_id: str | None = None


@dataclass
class InstitutionInfo:
    """Display metadata for a financial institution."""

    name: str
    logo: str | None = None  # Base64-encoded PNG
    primary_color: str | None = None
    url: str | None = None


@dataclass
class BankTransactionData:
    """Normalized transaction data from ``/transactions/get``.

    ``amount`` keeps Plaid's sign convention (positive = money out).
    """

    transaction_id: str
    account_id: str
    date: date
    amount: Decimal
    name: str | None = None
    merchant_name: str | None = None
    original_description: str | None = None
    authorized_date: date | None = None
    category_primary: str | None = None
    category_detailed: str | None = None
    payment_channel: str | None = None
    pending: bool = False
    pending_transaction_id: str | None = None
    iso_currency_code: str | None = None
    location_address: str | None = None
    location_city: str | None = None
    location_region: str | None = None
    location_postal_code: str | None = None
    location_country: str | None = None


@dataclass
class TransactionsResult:
    """Transactions for one window.

    ``skipped`` counts rows Plaid returned that could not be normalized
    (no id, date or amount); they are still part of what was fetched.
    """

    transactions: list[BankTransactionData] = field(default_factory=list)
    skipped: int = 0

    @property
    def fetched(self) -> int:
        return len(self.transactions) + self.skipped


class BankDataClient(Protocol):
    """Contract the bank services rely on.

    Every method raises ``ProviderAPIError`` when the upstream call fails.
    """

    def is_configured(self) -> bool:
        """Check if credentials are present."""
        ...

    def create_link_token(self, user_id: str) -> dict:
        """Create a Link token payload for ``user_id``."""
        ...

    def exchange_public_token(self, public_token: str) -> dict:
        """Exchange a public token for ``{"access_token", "item_id"}``."""
        ...

    def get_accounts(self, access_token: str) -> AccountsResult:
        """Fetch the Item's accounts with live balances."""
        ...

    def get_institution(self, institution_id: str) -> InstitutionInfo:
        """Fetch display metadata for an institution."""
        ...

    def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        account_ids: list[str] | None = None,
    ) -> TransactionsResult:
        """Fetch every transaction in ``[start_date, end_date]``."""
        ...
