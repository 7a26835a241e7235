"""Pydantic schemas for accounting settings."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CompanyCard(BaseModel):
    """Company card fields."""

    base_currency: Optional[str] = None
    accounting_method: Optional[str] = None
    time_zone: Optional[str] = None
    company_legal_name: Optional[str] = None


class AccountsCard(BaseModel):
    """Chart-of-accounts mappings; values are ledger account ids."""

    sales_revenue_account: Optional[int] = None
    purchases_account: Optional[int] = None
    discounts_account: Optional[int] = None
    accounts_receivable_account: Optional[int] = None
    accounts_payable_account: Optional[int] = None
    taxes_payable_account: Optional[int] = None
    retained_earnings_account: Optional[int] = None


class BankCard(BaseModel):
    """Default bank details printed on documents."""

    bank_name: Optional[str] = None
    branch_name: Optional[str] = None
    account_number: Optional[str] = None
    is_default_bank: Optional[bool] = None


class AccountingSettingsUpdate(CompanyCard, AccountsCard, BankCard):
    """Request body for saving every card at once."""

    pass


class AccountingSettingsResponse(BaseModel):
    """Stored settings, or defaults with ``id`` null."""

    id: Optional[str] = None
    user_id: str
    base_currency: str
    accounting_method: str
    time_zone: str
    company_legal_name: str
    sales_revenue_account: Optional[int] = None
    purchases_account: Optional[int] = None
    discounts_account: Optional[int] = None
    accounts_receivable_account: Optional[int] = None
    accounts_payable_account: Optional[int] = None
    taxes_payable_account: Optional[int] = None
    retained_earnings_account: Optional[int] = None
    bank_name: str
    branch_name: str
    account_number: str
    is_default_bank: bool

    model_config = ConfigDict(from_attributes=True)


class LedgerAccountResponse(BaseModel):
    id: int
    account_name: str
    account_type: str

    model_config = ConfigDict(from_attributes=True)
