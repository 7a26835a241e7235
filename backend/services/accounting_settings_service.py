"""Accounting settings service - per-user preferences and account mappings."""

import logging

from sqlalchemy.orm import Session

from models import AccountingSettings, LedgerAccount
from services.exceptions import InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

CURRENCIES = ("USD", "CAD", "GBP", "EUR")
ACCOUNTING_METHODS = ("Cash", "Accrual")
TIME_ZONES = (
    "US/Eastern",
    "US/Central",
    "US/Mountain",
    "US/Pacific",
    "Canada/Eastern",
    "Canada/Central",
    "Europe/London",
    "Europe/Paris",
)
LEDGER_ACCOUNT_TYPES = ("Revenue", "Expense", "Asset", "Liability", "Equity")

DEFAULTS: dict = {
    "base_currency": "USD",
    "accounting_method": "Accrual",
    "time_zone": "US/Eastern",
    "company_legal_name": "",
    "sales_revenue_account": None,
    "purchases_account": None,
    "discounts_account": None,
    "accounts_receivable_account": None,
    "accounts_payable_account": None,
    "taxes_payable_account": None,
    "retained_earnings_account": None,
    "bank_name": "",
    "branch_name": "",
    "account_number": "",
    "is_default_bank": False,
}

# Mappings that must be set before settings can be saved as a whole
REQUIRED_ACCOUNTS: dict[str, str] = {
    "sales_revenue_account": "Sales Revenue Account",
    "purchases_account": "Purchases Account",
    "accounts_receivable_account": "Accounts Receivable Account",
    "accounts_payable_account": "Accounts Payable Account",
    "taxes_payable_account": "Taxes Payable Account",
    "retained_earnings_account": "Retained Earnings Account",
}

ACCOUNT_FIELDS: dict[str, str] = {
    **REQUIRED_ACCOUNTS,
    "discounts_account": "Discounts Account",
}

# Logical groups the settings page saves independently
CARDS: dict[str, tuple[str, ...]] = {
    "company": ("base_currency", "accounting_method", "time_zone", "company_legal_name"),
    "accounts": tuple(ACCOUNT_FIELDS),
    "bank": ("bank_name", "branch_name", "account_number", "is_default_bank"),
}


class AccountingSettingsService:
    """Read and write a user's accounting settings."""

    @staticmethod
    def get(db: Session, user_id: str) -> AccountingSettings | None:
        """Return the stored settings row, or None."""
        return (
            db.query(AccountingSettings)
            .filter(AccountingSettings.user_id == user_id)
            .first()
        )

    @staticmethod
    def defaults() -> dict:
        """Settings shown before the user saved anything."""
        return dict(DEFAULTS)

    @staticmethod
    def list_ledger_accounts(db: Session, user_id: str) -> dict[str, list[LedgerAccount]]:
        """Return the user's ledger accounts grouped by type, ordered by name."""
        grouped: dict[str, list[LedgerAccount]] = {t: [] for t in LEDGER_ACCOUNT_TYPES}
        rows = (
            db.query(LedgerAccount)
            .filter(LedgerAccount.user_id == user_id)
            .order_by(LedgerAccount.account_name)
            .all()
        )
        for row in rows:
            grouped.setdefault(row.account_type, []).append(row)
        return grouped

    @staticmethod
    def _validate_choices(values: dict) -> list[str]:
        errors = []
        if "base_currency" in values and values["base_currency"] not in CURRENCIES:
            errors.append(f"Unsupported base currency: {values['base_currency']}")
        if "accounting_method" in values and values["accounting_method"] not in ACCOUNTING_METHODS:
            errors.append(f"Unsupported accounting method: {values['accounting_method']}")
        if "time_zone" in values and values["time_zone"] not in TIME_ZONES:
            errors.append(f"Unsupported time zone: {values['time_zone']}")
        return errors

    @staticmethod
    def _validate_accounts(
        db: Session, user_id: str, values: dict, required: tuple[str, ...]
    ) -> list[str]:
        """Check that mapped ledger accounts exist and required ones are set."""
        errors = []
        known_ids = {
            row.id
            for row in db.query(LedgerAccount.id).filter(LedgerAccount.user_id == user_id)
        }
        for field_name, display_name in ACCOUNT_FIELDS.items():
            value = values.get(field_name)
            if not value:
                if field_name in required:
                    errors.append(f"{display_name} is required")
            elif value not in known_ids:
                errors.append(f"Selected {display_name} is invalid or no longer exists")
        return errors

    def _write(self, db: Session, user_id: str, values: dict) -> AccountingSettings:
        settings = self.get(db, user_id)
        if settings is None:
            settings = AccountingSettings(user_id=user_id, **DEFAULTS)
            db.add(settings)
        for key, value in values.items():
            setattr(settings, key, value)
        db.flush()
        return settings

    def save(self, db: Session, user_id: str, values: dict) -> AccountingSettings:
        """Upsert every settings field at once.

        Raises:
            InvalidRequestError: Listing every invalid or missing value.
        """
        merged = {**DEFAULTS, **values}
        # Empty selections mean "no account"
        for field_name in ACCOUNT_FIELDS:
            merged[field_name] = merged[field_name] or None

        errors = self._validate_choices(merged)
        errors += self._validate_accounts(db, user_id, merged, tuple(REQUIRED_ACCOUNTS))
        if errors:
            raise InvalidRequestError("Invalid accounting settings", details="\n".join(errors))

        settings = self._write(db, user_id, merged)
        logger.info("Accounting settings saved for user %s", user_id)
        return settings

    def save_card(self, db: Session, user_id: str, card: str, values: dict) -> AccountingSettings:
        """Update only the fields of one settings card.

        Raises:
            NotFoundError: Unknown card name.
            InvalidRequestError: A value in the card is invalid.
        """
        if card not in CARDS:
            raise NotFoundError(f"Unknown settings card: {card}")

        card_values = {k: v for k, v in values.items() if k in CARDS[card]}
        if card == "accounts":
            for field_name in card_values:
                card_values[field_name] = card_values[field_name] or None
            errors = self._validate_accounts(db, user_id, card_values, required=())
        else:
            # Only account mappings are nullable; null elsewhere means "unchanged"
            card_values = {k: v for k, v in card_values.items() if v is not None}
            errors = self._validate_choices(card_values)
        if errors:
            raise InvalidRequestError("Invalid accounting settings", details="\n".join(errors))

        settings = self._write(db, user_id, card_values)
        logger.info("Accounting settings card %r saved for user %s", card, user_id)
        return settings
