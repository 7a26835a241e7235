"""Tests for TransactionSyncService and fetch window selection."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from integrations.exceptions import ProviderAPIError
from models import BankTransaction
from services.bank_store import BankStore
from services.exceptions import InvalidRequestError, NotFoundError
from services.transaction_sync_service import (
    FetchStrategy,
    TransactionSyncService,
    choose_fetch_window,
)
from tests.fixtures import USER_ID
from tests.fixtures.mocks import MockPlaidClient, make_transaction_data

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _service(plaid_client) -> TransactionSyncService:
    return TransactionSyncService(plaid_client, clock=lambda: NOW)


def _sync(service, db, **kwargs):
    params = {"plaid_account_id": "acc_checking", "user_id": USER_ID}
    params.update(kwargs)
    return service.sync_account(db, **params)


class TestChooseFetchWindow:
    def test_first_import_is_full_initial(self):
        window = choose_fetch_window(NOW, has_prior_transactions=False, last_sync=None)

        assert window.strategy == FetchStrategy.FULL_INITIAL
        assert window.start == date(2026, 9, 17)
        assert window.end == date(2026, 10, 17)

    def test_recent_sync_is_incremental_with_one_day_overlap(self):
        window = choose_fetch_window(
            NOW,
            has_prior_transactions=True,
            last_sync=NOW - timedelta(days=3),
        )

        assert window.strategy == FetchStrategy.INCREMENTAL
        assert window.start == date(2026, 10, 13)
        assert window.end == date(2026, 10, 17)

    def test_sync_exactly_thirty_days_old_is_still_incremental(self):
        window = choose_fetch_window(
            NOW, has_prior_transactions=True, last_sync=NOW - timedelta(days=30)
        )
        assert window.strategy == FetchStrategy.INCREMENTAL

    def test_stale_sync_is_full(self):
        window = choose_fetch_window(
            NOW, has_prior_transactions=True, last_sync=NOW - timedelta(days=31)
        )

        assert window.strategy == FetchStrategy.FULL_STALE
        assert window.start == date(2026, 9, 17)

    def test_missing_last_sync_with_prior_transactions_is_full(self):
        window = choose_fetch_window(NOW, has_prior_transactions=True, last_sync=None)
        assert window.strategy == FetchStrategy.FULL_STALE

    def test_force_refresh_always_full(self):
        window = choose_fetch_window(
            NOW,
            has_prior_transactions=True,
            last_sync=NOW - timedelta(hours=1),
            force_refresh=True,
            days_to_fetch=90,
        )

        assert window.strategy == FetchStrategy.FULL_REFRESH
        assert window.start == date(2026, 7, 19)

    def test_naive_last_sync_treated_as_utc(self):
        window = choose_fetch_window(
            NOW,
            has_prior_transactions=True,
            last_sync=datetime(2026, 10, 15, 8, 0),
        )

        assert window.strategy == FetchStrategy.INCREMENTAL
        assert window.start == date(2026, 10, 14)

    @pytest.mark.parametrize("days", [1, 30, 365, 730])
    def test_full_window_length_matches_days_to_fetch(self, days):
        window = choose_fetch_window(
            NOW, has_prior_transactions=False, last_sync=None, days_to_fetch=days
        )
        assert window.end - window.start == timedelta(days=days)


class TestSyncAccount:
    def test_imports_transactions(self, db, plaid_account):
        plaid = MockPlaidClient(transactions=[
            make_transaction_data("t1", amount="12.50"),
            make_transaction_data("t2", amount="-1500.00", name="Payroll"),
        ])

        result = _sync(_service(plaid), db)

        assert result.fetched == 2
        assert result.success_count == 2
        assert result.error_count == 0
        assert result.account_name == "Plaid Checking"
        assert result.institution_name == "First Platypus Bank"
        assert result.window.strategy == FetchStrategy.FULL_INITIAL

        rows = db.query(BankTransaction).order_by(BankTransaction.plaid_transaction_id).all()
        assert [r.plaid_transaction_id for r in rows] == ["t1", "t2"]
        assert rows[1].amount == Decimal("-1500.00")
        assert rows[0].bank_name == "First Platypus Bank"
        assert rows[0].account_number == "0000"
        assert rows[0].plaid_item_id == "item-sandbox-test"

    def test_requests_window_for_one_account(self, db, plaid_account):
        plaid = MockPlaidClient()

        _sync(_service(plaid), db, days_to_fetch=60)

        name, (token, start, end, account_ids) = plaid.calls[0]
        assert name == "get_transactions"
        assert token == "access-sandbox-test"
        assert start == date(2026, 8, 18)
        assert end == date(2026, 10, 17)
        assert account_ids == ["acc_checking"]

    def test_rerun_is_idempotent_and_refreshes_mutable_fields(self, db, plaid_account):
        first = MockPlaidClient(transactions=[
            make_transaction_data("t1", amount="12.50", pending=True),
            make_transaction_data("t2"),
        ])
        _sync(_service(first), db)
        original_id = db.query(BankTransaction).filter_by(plaid_transaction_id="t1").one().id

        second = MockPlaidClient(transactions=[
            make_transaction_data("t1", amount="13.75", pending=False),
            make_transaction_data("t2"),
        ])
        result = _sync(_service(second), db)

        assert result.success_count == 2
        assert db.query(BankTransaction).count() == 2
        t1 = db.query(BankTransaction).filter_by(plaid_transaction_id="t1").one()
        assert t1.id == original_id
        assert t1.amount == Decimal("13.75")
        assert t1.pending is False

    def test_second_run_is_incremental(self, db, plaid_account):
        plaid = MockPlaidClient(transactions=[make_transaction_data("t1")])
        _sync(_service(plaid), db)

        result = _sync(_service(plaid), db)

        assert result.window.strategy == FetchStrategy.INCREMENTAL
        assert result.window.start == date(2026, 10, 16)

    def test_force_refresh_after_recent_sync(self, db, plaid_account):
        plaid = MockPlaidClient(transactions=[make_transaction_data("t1")])
        _sync(_service(plaid), db)

        result = _sync(_service(plaid), db, force_refresh=True)

        assert result.window.strategy == FetchStrategy.FULL_REFRESH

    def test_failing_row_is_counted_and_batch_continues(self, db, plaid_account):
        broken = make_transaction_data("t2")
        broken.amount = None  # violates NOT NULL on flush
        plaid = MockPlaidClient(transactions=[
            make_transaction_data("t1"),
            broken,
            make_transaction_data("t3"),
        ])

        result = _sync(_service(plaid), db)

        assert result.success_count == 2
        assert result.error_count == 1
        assert result.success_count + result.error_count == result.fetched
        stored = {r.plaid_transaction_id for r in db.query(BankTransaction).all()}
        assert stored == {"t1", "t3"}

    def test_store_errors_do_not_abort(self, db, plaid_account):
        class FlakyStore(BankStore):
            @staticmethod
            def upsert_plaid_transaction(db, *, user_id, account, bank_name, txn):
                if txn.transaction_id.endswith("bad"):
                    raise RuntimeError("database went away")
                return BankStore.upsert_plaid_transaction(
                    db, user_id=user_id, account=account, bank_name=bank_name, txn=txn
                )

        plaid = MockPlaidClient(transactions=[
            make_transaction_data("t1-bad"),
            make_transaction_data("t2"),
            make_transaction_data("t3-bad"),
        ])
        service = TransactionSyncService(plaid, store=FlakyStore(), clock=lambda: NOW)

        result = _sync(service, db)

        assert (result.success_count, result.error_count, result.fetched) == (1, 2, 3)

    def test_unmappable_upstream_rows_count_as_errors(self, db, plaid_account):
        plaid = MockPlaidClient(
            transactions=[make_transaction_data("t1"), make_transaction_data("t2")],
            skipped_transactions=1,
        )

        result = _sync(_service(plaid), db)

        assert (result.success_count, result.error_count, result.fetched) == (2, 1, 3)
        assert db.query(BankTransaction).count() == 2

    def test_sync_timestamp_updated_even_with_failures(self, db, plaid_account):
        broken = make_transaction_data("t1")
        broken.amount = None
        plaid = MockPlaidClient(transactions=[broken])

        _sync(_service(plaid), db)

        db.refresh(plaid_account)
        assert plaid_account.last_plaid_sync is not None
        assert plaid_account.last_balance_update is not None

    def test_preview_is_capped(self, db, plaid_account):
        plaid = MockPlaidClient(transactions=[
            make_transaction_data(f"t{i:02d}") for i in range(12)
        ])

        result = _sync(_service(plaid), db)

        assert result.success_count == 12
        assert len(result.preview) == 10
        assert result.preview[0]["plaid_transaction_id"] == "t00"
        assert set(result.preview[0]) == {"id", "plaid_transaction_id", "description", "amount", "date"}

    def test_unknown_account_raises_not_found(self, db, plaid_account):
        with pytest.raises(NotFoundError, match="Account not found"):
            _sync(_service(MockPlaidClient()), db, plaid_account_id="acc_missing")

    def test_other_users_account_is_not_found(self, db, plaid_account):
        with pytest.raises(NotFoundError):
            _sync(_service(MockPlaidClient()), db, user_id="someone-else")

    def test_missing_access_token(self, db, plaid_account, connected_bank):
        connected_bank.access_token = ""
        db.commit()

        with pytest.raises(InvalidRequestError, match="No access token"):
            _sync(_service(MockPlaidClient()), db)

    def test_plaid_failure_aborts_without_writes(self, db, plaid_account):
        plaid = MockPlaidClient(should_fail=True, failure_message="ITEM_LOGIN_REQUIRED")

        with pytest.raises(ProviderAPIError):
            _sync(_service(plaid), db)

        db.refresh(plaid_account)
        assert plaid_account.last_plaid_sync is None
        assert db.query(BankTransaction).count() == 0
