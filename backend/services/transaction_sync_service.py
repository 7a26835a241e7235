"""Transaction sync service - imports one account's Plaid transactions."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Callable

from sqlalchemy.orm import Session

from integrations.parsing_utils import as_utc
from integrations.provider_protocol import BankDataClient
from services.bank_store import BankStore
from services.exceptions import InvalidRequestError

logger = logging.getLogger(__name__)

DEFAULT_DAYS_TO_FETCH = 30

# An incremental fetch is only trusted if the last sync is at most this old
INCREMENTAL_MAX_AGE = timedelta(days=30)

# Re-fetch one day before the last sync to pick up late-posting transactions
INCREMENTAL_OVERLAP = timedelta(days=1)

PREVIEW_SIZE = 10


class FetchStrategy:
    """Names reported in ``fetch_strategy``."""

    INCREMENTAL = "incremental"
    FULL_INITIAL = "full_initial"
    FULL_REFRESH = "full_refresh"
    FULL_STALE = "full_stale"


@dataclass
class FetchWindow:
    """The date range requested from Plaid and why it was chosen."""

    strategy: str
    start: date
    end: date


@dataclass
class SyncResult:
    """Outcome of syncing one account."""

    account_name: str
    institution_name: str | None
    window: FetchWindow
    fetched: int = 0
    success_count: int = 0
    error_count: int = 0
    preview: list[dict] = field(default_factory=list)


def choose_fetch_window(
    now: datetime,
    *,
    has_prior_transactions: bool,
    last_sync: datetime | None,
    force_refresh: bool = False,
    days_to_fetch: int = DEFAULT_DAYS_TO_FETCH,
) -> FetchWindow:
    """Pick an incremental or full date window.

    Incremental applies only when not forced, something was imported
    before, and the last sync is at most 30 days old; it starts one day
    before the last sync. Everything else fetches ``days_to_fetch`` days.
    """
    end = now.date()
    last_sync = as_utc(last_sync)

    if (
        not force_refresh
        and has_prior_transactions
        and last_sync is not None
        and now - last_sync <= INCREMENTAL_MAX_AGE
    ):
        return FetchWindow(
            strategy=FetchStrategy.INCREMENTAL,
            start=(last_sync - INCREMENTAL_OVERLAP).date(),
            end=end,
        )

    if force_refresh:
        strategy = FetchStrategy.FULL_REFRESH
    elif has_prior_transactions:
        strategy = FetchStrategy.FULL_STALE
    else:
        strategy = FetchStrategy.FULL_INITIAL
    return FetchWindow(
        strategy=strategy,
        start=(now - timedelta(days=days_to_fetch)).date(),
        end=end,
    )


class TransactionSyncService:
    """Fetch transactions for one account from Plaid and store them idempotently."""

    def __init__(
        self,
        plaid_client: BankDataClient,
        store: BankStore | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._plaid = plaid_client
        self._store = store or BankStore()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def sync_account(
        self,
        db: Session,
        *,
        plaid_account_id: str,
        user_id: str,
        force_refresh: bool = False,
        days_to_fetch: int = DEFAULT_DAYS_TO_FETCH,
    ) -> SyncResult:
        """Import transactions for one account and commit.

        Rows are upserted one by one, each in its own savepoint: a row that
        fails is rolled back and counted while the rest of the batch is
        kept. Rows Plaid returned without an id, date or amount count as
        errors too. The account's sync timestamps are stamped afterwards
        whether or not rows failed.

        Raises:
            NotFoundError: The user has no such account.
            InvalidRequestError: The account's bank has no access token.
            ProviderAPIError: The Plaid call failed; nothing is written.
        """
        found = self._store.get_account_with_bank(db, plaid_account_id, user_id)
        account, bank = found.account, found.bank
        if not bank.access_token:
            raise InvalidRequestError("No access token found for this account")

        now = self._clock()
        window = choose_fetch_window(
            now,
            has_prior_transactions=self._store.has_imported_transactions(
                db, user_id, plaid_account_id
            ),
            last_sync=account.last_plaid_sync,
            force_refresh=force_refresh,
            days_to_fetch=days_to_fetch,
        )
        logger.info(
            "Syncing transactions for account %s (%s): %s %s..%s",
            plaid_account_id, account.name, window.strategy, window.start, window.end,
        )

        batch = self._plaid.get_transactions(
            bank.access_token,
            window.start,
            window.end,
            account_ids=[plaid_account_id],
        )

        result = SyncResult(
            account_name=account.name,
            institution_name=bank.institution_name,
            window=window,
            fetched=batch.fetched,
            error_count=batch.skipped,
        )
        if batch.skipped:
            logger.warning(
                "Skipped %d malformed transactions for account %s",
                batch.skipped, plaid_account_id,
            )

        for txn in batch.transactions:
            try:
                with db.begin_nested():
                    row = self._store.upsert_plaid_transaction(
                        db,
                        user_id=user_id,
                        account=account,
                        bank_name=bank.institution_name,
                        txn=txn,
                    )
            except Exception:
                logger.warning(
                    "Failed to store transaction %s", txn.transaction_id, exc_info=True
                )
                result.error_count += 1
                continue

            result.success_count += 1
            if len(result.preview) < PREVIEW_SIZE:
                result.preview.append({
                    "id": row.id,
                    "plaid_transaction_id": row.plaid_transaction_id,
                    "description": row.description,
                    "amount": row.amount,
                    "date": row.date,
                })

        self._store.touch_account_sync(db, account, self._clock())
        db.commit()

        logger.info(
            "Transaction sync completed for %s. Success: %d, Errors: %d",
            plaid_account_id, result.success_count, result.error_count,
        )
        return result
