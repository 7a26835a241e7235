"""Data access for connected banks, Plaid accounts and bank transactions.

All writes are insert-or-update keyed on the external ids Plaid issues, so
re-running an import with overlapping data never duplicates rows. Methods
``flush()`` but never ``commit()``; the caller owns the transaction.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from integrations.provider_protocol import BankAccountData, BankTransactionData
from models import BankTransaction, ConnectedBank, PlaidAccount
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class AccountWithBank:
    """A PlaidAccount together with the ConnectedBank that owns it."""

    account: PlaidAccount
    bank: ConnectedBank


class BankStore:
    """Queries and idempotent upserts for the bank tables."""

    @staticmethod
    def get_account_with_bank(
        db: Session, plaid_account_id: str, user_id: str
    ) -> AccountWithBank:
        """Load an account and its bank in one joined query.

        Raises:
            NotFoundError: If the user has no such account.
        """
        row = (
            db.query(PlaidAccount, ConnectedBank)
            .join(ConnectedBank, PlaidAccount.connected_bank_id == ConnectedBank.id)
            .filter(
                PlaidAccount.plaid_account_id == plaid_account_id,
                PlaidAccount.user_id == user_id,
            )
            .first()
        )
        if row is None:
            raise NotFoundError("Account not found")
        account, bank = row
        return AccountWithBank(account=account, bank=bank)

    @staticmethod
    def list_banks(db: Session, user_id: str, bank_id: str | None = None) -> list[ConnectedBank]:
        """List a user's connected banks, optionally narrowed to one id."""
        query = db.query(ConnectedBank).filter(ConnectedBank.user_id == user_id)
        if bank_id:
            query = query.filter(ConnectedBank.id == bank_id)
        return query.order_by(ConnectedBank.created_at).all()

    @staticmethod
    def has_imported_transactions(db: Session, user_id: str, plaid_account_id: str) -> bool:
        """Return True if at least one transaction was imported for the account."""
        return (
            db.query(BankTransaction.id)
            .filter(
                BankTransaction.user_id == user_id,
                BankTransaction.plaid_account_id == plaid_account_id,
            )
            .first()
            is not None
        )

    @staticmethod
    def upsert_connected_bank(
        db: Session,
        *,
        user_id: str,
        institution_name: str,
        item_id: str,
        access_token: str,
    ) -> ConnectedBank:
        """Create or refresh the bank row for (user, institution)."""
        bank = (
            db.query(ConnectedBank)
            .filter(
                ConnectedBank.user_id == user_id,
                ConnectedBank.institution_name == institution_name,
            )
            .first()
        )
        if bank:
            bank.item_id = item_id
            bank.access_token = access_token
            bank.updated_at = datetime.now(timezone.utc)
            logger.info("Updated ConnectedBank %s for user %s", institution_name, user_id)
        else:
            bank = ConnectedBank(
                user_id=user_id,
                institution_name=institution_name,
                item_id=item_id,
                access_token=access_token,
            )
            db.add(bank)
            logger.info("Created ConnectedBank %s for user %s", institution_name, user_id)
        db.flush()
        return bank

    @staticmethod
    def sync_plaid_account_data(
        db: Session, bank: ConnectedBank, data: BankAccountData
    ) -> PlaidAccount:
        """Insert or update an account keyed on (plaid_account_id, connected_bank_id).

        Refreshes cached balances and metadata, stamps both sync timestamps
        and reactivates the account.
        """
        now = datetime.now(timezone.utc)
        account = (
            db.query(PlaidAccount)
            .filter(
                PlaidAccount.plaid_account_id == data.account_id,
                PlaidAccount.connected_bank_id == bank.id,
            )
            .first()
        )
        if account is None:
            account = PlaidAccount(
                connected_bank_id=bank.id,
                user_id=bank.user_id,
                plaid_account_id=data.account_id,
            )
            db.add(account)

        account.plaid_item_id = bank.item_id
        account.name = data.name
        account.official_name = data.official_name
        account.type = data.type
        account.subtype = data.subtype
        account.mask = data.mask
        account.current_balance = data.current_balance
        account.available_balance = data.available_balance
        account.credit_limit = data.credit_limit
        account.currency_code = data.currency_code or "USD"
        account.is_active = True
        account.last_balance_update = now
        account.last_plaid_sync = now
        db.flush()
        return account

    @staticmethod
    def upsert_plaid_transaction(
        db: Session,
        *,
        user_id: str,
        account: PlaidAccount,
        bank_name: str | None,
        txn: BankTransactionData,
    ) -> BankTransaction:
        """Insert or update a transaction keyed on (user_id, plaid_transaction_id).

        An existing row keeps its id and creation time; only the fields Plaid
        may revise (amount, pending state, descriptions, category, location)
        are refreshed.
        """
        row = (
            db.query(BankTransaction)
            .filter(
                BankTransaction.user_id == user_id,
                BankTransaction.plaid_transaction_id == txn.transaction_id,
            )
            .first()
        )
        if row is None:
            row = BankTransaction(
                user_id=user_id,
                plaid_transaction_id=txn.transaction_id,
                plaid_account_id=account.plaid_account_id,
                plaid_item_id=account.plaid_item_id,
            )
            db.add(row)

        row.date = txn.date
        row.authorized_date = txn.authorized_date
        row.description = txn.name
        row.merchant_name = txn.merchant_name
        row.original_description = txn.original_description
        row.amount = txn.amount
        row.category_primary = txn.category_primary
        row.category_detailed = txn.category_detailed
        row.payment_channel = txn.payment_channel
        row.pending = txn.pending
        row.pending_transaction_id = txn.pending_transaction_id
        row.iso_currency_code = txn.iso_currency_code or "USD"
        row.location_address = txn.location_address
        row.location_city = txn.location_city
        row.location_region = txn.location_region
        row.location_postal_code = txn.location_postal_code
        row.location_country = txn.location_country
        row.bank_name = bank_name
        row.account_number = account.mask or "Unknown"
        db.flush()
        return row

    @staticmethod
    def touch_account_sync(db: Session, account: PlaidAccount, when: datetime) -> None:
        """Stamp the account's sync and balance timestamps."""
        account.last_plaid_sync = when
        account.last_balance_update = when
        db.flush()
