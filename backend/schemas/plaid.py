"""Pydantic schemas for the Plaid bank endpoints.

The dashboard posts camelCase keys for some fields; snake_case is
accepted as well.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LinkTokenRequest(BaseModel):
    """Request body for creating a Link token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)


class ExchangeTokenRequest(BaseModel):
    """Request body for exchanging a Link public token."""

    model_config = ConfigDict(populate_by_name=True)

    public_token: str = Field(..., min_length=1)
    user_id: str = Field(..., alias="userId", min_length=1)
    institution_name: str = Field(..., alias="institutionName", min_length=1)


class ExchangeTokenResponse(BaseModel):
    """Result of a token exchange. The access token is never included."""

    success: bool = True
    item_id: str
    bank_id: str
    institution_name: str
    accounts_stored: int


class TransactionSyncRequest(BaseModel):
    """Request body for importing one account's transactions."""

    plaid_account_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    force_refresh: bool = False
    days_to_fetch: int = Field(30, ge=1, le=730)


class DateRange(BaseModel):
    start: date
    end: date


class TransactionPreview(BaseModel):
    id: str
    plaid_transaction_id: str
    description: Optional[str] = None
    amount: Decimal
    date: date


class TransactionSyncResponse(BaseModel):
    """Summary of a transaction import."""

    success: bool = True
    message: str
    transactions_count: int
    errors_count: int
    transactions_fetched: int
    account_name: Optional[str] = None
    institution_name: Optional[str] = None
    fetch_strategy: str
    date_range: DateRange
    transactions: list[TransactionPreview]


class AccountsRequest(BaseModel):
    """Request body for refreshing connected bank accounts."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    bank_id: Optional[str] = Field(None, alias="bankId")


class AccountBalances(BaseModel):
    available: Optional[Decimal] = None
    current: Optional[Decimal] = None
    limit: Optional[Decimal] = None
    iso_currency_code: Optional[str] = None


class PlaidAccountResponse(BaseModel):
    account_id: str
    name: str
    official_name: Optional[str] = None
    type: Optional[str] = None
    subtype: Optional[str] = None
    mask: Optional[str] = None
    balances: AccountBalances
    last_plaid_sync: Optional[datetime] = None


class InstitutionResponse(BaseModel):
    name: Optional[str] = None
    logo: Optional[str] = None
    primary_color: Optional[str] = None
    url: Optional[str] = None


class ConnectedBankResponse(BaseModel):
    """One connected bank with its live accounts."""

    id: str
    user_id: str
    item_id: str
    institution_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_sync: Optional[datetime] = None
    accounts: list[PlaidAccountResponse]
    institution: Optional[InstitutionResponse] = None
    data_source: str
    error: Optional[str] = None


class AccountsResponse(BaseModel):
    banks: list[ConnectedBankResponse]
