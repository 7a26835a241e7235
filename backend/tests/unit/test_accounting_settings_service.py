"""Tests for AccountingSettingsService."""

import pytest

from models import AccountingSettings, LedgerAccount
from services.accounting_settings_service import AccountingSettingsService
from services.exceptions import InvalidRequestError, NotFoundError
from tests.fixtures import USER_ID


def _mappings(ledger_accounts) -> dict:
    return {field_name: ledger.id for field_name, ledger in ledger_accounts.items()}


@pytest.fixture
def service():
    return AccountingSettingsService()


class TestSave:
    def test_creates_row_with_defaults_for_omitted_fields(self, db, service, ledger_accounts):
        settings = service.save(db, USER_ID, {
            **_mappings(ledger_accounts),
            "company_legal_name": "Acme Bakery LLC",
        })
        db.commit()

        assert settings.base_currency == "USD"
        assert settings.accounting_method == "Accrual"
        assert settings.time_zone == "US/Eastern"
        assert settings.company_legal_name == "Acme Bakery LLC"
        assert settings.sales_revenue_account == ledger_accounts["sales_revenue_account"].id

    def test_second_save_updates_same_row(self, db, service, ledger_accounts):
        service.save(db, USER_ID, _mappings(ledger_accounts))
        service.save(db, USER_ID, {**_mappings(ledger_accounts), "base_currency": "CAD"})
        db.commit()

        rows = db.query(AccountingSettings).all()
        assert len(rows) == 1
        assert rows[0].base_currency == "CAD"

    def test_missing_required_mappings_are_all_listed(self, db, service, ledger_accounts):
        values = _mappings(ledger_accounts)
        del values["purchases_account"]
        values["taxes_payable_account"] = None

        with pytest.raises(InvalidRequestError) as exc_info:
            service.save(db, USER_ID, values)

        assert "Purchases Account is required" in exc_info.value.details
        assert "Taxes Payable Account is required" in exc_info.value.details
        assert db.query(AccountingSettings).count() == 0

    def test_discounts_account_is_optional(self, db, service, ledger_accounts):
        values = _mappings(ledger_accounts)
        del values["discounts_account"]

        settings = service.save(db, USER_ID, values)

        assert settings.discounts_account is None

    def test_other_users_ledger_account_is_rejected(self, db, service, ledger_accounts):
        foreign = LedgerAccount(user_id="user-456", account_name="Sales", account_type="Revenue")
        db.add(foreign)
        db.commit()
        values = {**_mappings(ledger_accounts), "sales_revenue_account": foreign.id}

        with pytest.raises(InvalidRequestError) as exc_info:
            service.save(db, USER_ID, values)

        assert "Selected Sales Revenue Account is invalid" in exc_info.value.details

    @pytest.mark.parametrize("field_name,value", [
        ("base_currency", "JPY"),
        ("accounting_method", "Modified Cash"),
        ("time_zone", "Asia/Tokyo"),
    ])
    def test_unsupported_choices(self, db, service, ledger_accounts, field_name, value):
        with pytest.raises(InvalidRequestError):
            service.save(db, USER_ID, {**_mappings(ledger_accounts), field_name: value})


class TestSaveCard:
    def test_company_card_creates_row_without_mappings(self, db, service):
        settings = service.save_card(db, USER_ID, "company", {
            "base_currency": "GBP",
            "time_zone": "Europe/London",
        })
        db.commit()

        assert settings.base_currency == "GBP"
        assert settings.time_zone == "Europe/London"
        assert settings.accounting_method == "Accrual"
        assert settings.sales_revenue_account is None

    def test_card_ignores_fields_of_other_cards(self, db, service):
        settings = service.save_card(db, USER_ID, "bank", {
            "bank_name": "First Platypus Bank",
            "is_default_bank": True,
            "base_currency": "EUR",
        })

        assert settings.bank_name == "First Platypus Bank"
        assert settings.is_default_bank is True
        assert settings.base_currency == "USD"

    def test_accounts_card_validates_ids(self, db, service, ledger_accounts):
        with pytest.raises(InvalidRequestError):
            service.save_card(db, USER_ID, "accounts", {"purchases_account": 9999})

    def test_accounts_card_allows_partial_mapping(self, db, service, ledger_accounts):
        settings = service.save_card(db, USER_ID, "accounts", {
            "purchases_account": ledger_accounts["purchases_account"].id,
        })

        assert settings.purchases_account == ledger_accounts["purchases_account"].id
        assert settings.sales_revenue_account is None

    def test_unknown_card(self, db, service):
        with pytest.raises(NotFoundError):
            service.save_card(db, USER_ID, "payroll", {})


class TestLedgerAccounts:
    def test_grouped_by_type_with_every_group_present(self, db, ledger_accounts):
        grouped = AccountingSettingsService.list_ledger_accounts(db, USER_ID)

        assert list(grouped) == ["Revenue", "Expense", "Asset", "Liability", "Equity"]
        assert [a.account_name for a in grouped["Expense"]] == ["Discounts", "Purchases"]
        assert [a.account_name for a in grouped["Liability"]] == [
            "Accounts Payable", "Sales Tax Payable",
        ]

    def test_user_without_accounts(self, db):
        grouped = AccountingSettingsService.list_ledger_accounts(db, "nobody")
        assert all(v == [] for v in grouped.values())
