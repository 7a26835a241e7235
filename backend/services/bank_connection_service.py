"""Bank connection service - linking banks and refreshing their accounts."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from integrations.provider_protocol import AccountsResult, BankDataClient, InstitutionInfo
from models import ConnectedBank
from services.bank_store import BankStore
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ExchangeResult:
    """Outcome of exchanging a public token."""

    bank: ConnectedBank
    accounts_stored: int = 0


@dataclass
class RemoteBankData:
    """What Plaid returned for one bank during an account refresh."""

    accounts: AccountsResult | None = None
    institution: InstitutionInfo | None = None
    error: str | None = None


@dataclass
class BankAccountsView:
    """A connected bank merged with its freshly fetched accounts."""

    bank: ConnectedBank
    accounts: list[dict] = field(default_factory=list)
    institution: InstitutionInfo | None = None
    data_source: str = "plaid_fresh"
    error: str | None = None


class BankConnectionService:
    """Create Link tokens, store exchanged credentials, refresh balances."""

    def __init__(
        self,
        plaid_client: BankDataClient,
        store: BankStore | None = None,
        max_workers: int = 8,
    ):
        self._plaid = plaid_client
        self._store = store or BankStore()
        self._max_workers = max(1, max_workers)

    def create_link_token(self, user_id: str) -> dict:
        """Return Plaid's Link token payload for the user."""
        logger.info("Creating link token for user %s", user_id)
        return self._plaid.create_link_token(user_id)

    # ------------------------------------------------------------------
    # Token exchange
    # ------------------------------------------------------------------

    def exchange_public_token(
        self,
        db: Session,
        *,
        public_token: str,
        user_id: str,
        institution_name: str,
    ) -> ExchangeResult:
        """Exchange a public token, store the bank, then import its accounts.

        The bank row is committed first; the connection counts as successful
        from then on. Importing the accounts is best effort: failures there
        are logged and leave ``accounts_stored`` short.
        """
        exchanged = self._plaid.exchange_public_token(public_token)

        bank = self._store.upsert_connected_bank(
            db,
            user_id=user_id,
            institution_name=institution_name,
            item_id=exchanged["item_id"],
            access_token=exchanged["access_token"],
        )
        db.commit()
        result = ExchangeResult(bank=bank)

        try:
            remote = self._plaid.get_accounts(bank.access_token)
            logger.info("Found %d accounts for new bank %s", len(remote.accounts), institution_name)
        except Exception:
            logger.warning(
                "Failed to fetch accounts for new bank %s", institution_name, exc_info=True
            )
            return result

        for data in remote.accounts:
            try:
                with db.begin_nested():
                    self._store.sync_plaid_account_data(db, bank, data)
                result.accounts_stored += 1
            except Exception:
                logger.warning("Failed to store account %s", data.account_id, exc_info=True)
        db.commit()
        return result

    # ------------------------------------------------------------------
    # Account refresh
    # ------------------------------------------------------------------

    def _fetch_remote(self, access_token: str) -> RemoteBankData:
        """Fetch accounts and institution metadata for one bank.

        Runs on a worker thread, so it only talks to Plaid and never to the
        database session. Errors are returned, not raised.
        """
        try:
            accounts = self._plaid.get_accounts(access_token)
        except Exception as e:
            logger.warning("Failed to fetch accounts from Plaid: %s", e)
            return RemoteBankData(error=str(e))

        institution = None
        if accounts.institution_id:
            try:
                institution = self._plaid.get_institution(accounts.institution_id)
            except Exception as e:
                logger.warning(
                    "Failed to fetch institution %s: %s", accounts.institution_id, e
                )
        return RemoteBankData(accounts=accounts, institution=institution)

    def fetch_accounts(
        self, db: Session, *, user_id: str, bank_id: str | None = None
    ) -> list[BankAccountsView]:
        """Refresh every (or one) connected bank of a user from Plaid.

        Plaid calls for different banks run concurrently; results are then
        written sequentially. A bank whose accounts call fails is returned
        with no accounts and an ``error`` instead of failing the request.

        Raises:
            NotFoundError: The user has no (matching) connected bank.
        """
        banks = self._store.list_banks(db, user_id, bank_id)
        if not banks:
            raise NotFoundError("No connected banks found for user")

        tokens = [bank.access_token for bank in banks]
        workers = min(self._max_workers, len(tokens))
        logger.info("Fetching accounts for %d connected banks", len(banks))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            remote_results = list(pool.map(self._fetch_remote, tokens))

        views: list[BankAccountsView] = []
        for bank, remote in zip(banks, remote_results):
            if remote.error is not None:
                views.append(BankAccountsView(bank=bank, data_source="error", error=remote.error))
                continue

            now = datetime.now(timezone.utc)
            accounts = []
            for data in remote.accounts.accounts:
                try:
                    with db.begin_nested():
                        self._store.sync_plaid_account_data(db, bank, data)
                except Exception:
                    logger.warning("Failed to store account %s", data.account_id, exc_info=True)
                accounts.append({
                    "account_id": data.account_id,
                    "name": data.name,
                    "official_name": data.official_name,
                    "type": data.type,
                    "subtype": data.subtype,
                    "mask": data.mask,
                    "balances": {
                        "available": data.available_balance,
                        "current": data.current_balance,
                        "limit": data.credit_limit,
                        "iso_currency_code": data.currency_code,
                    },
                    "last_plaid_sync": now,
                })
            bank.last_sync = now
            bank.updated_at = now
            views.append(BankAccountsView(
                bank=bank,
                accounts=accounts,
                institution=remote.institution,
            ))

        db.commit()
        return views
