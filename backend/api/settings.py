"""Accounting settings API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import handler_errors
from database import get_db
from schemas.settings import (
    AccountingSettingsResponse,
    AccountingSettingsUpdate,
    LedgerAccountResponse,
)
from services.accounting_settings_service import AccountingSettingsService

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/{user_id}", response_model=AccountingSettingsResponse)
def read_settings(user_id: str, db: Session = Depends(get_db)):
    """Get the user's accounting settings, or the defaults if none are saved."""
    settings = AccountingSettingsService.get(db, user_id)
    if settings is None:
        return AccountingSettingsResponse(user_id=user_id, **AccountingSettingsService.defaults())
    return settings


@router.put("/{user_id}", response_model=AccountingSettingsResponse)
def save_settings(
    user_id: str,
    body: AccountingSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Save every settings card; all required account mappings must be set."""
    with handler_errors("Failed to save settings"):
        settings = AccountingSettingsService().save(
            db, user_id, body.model_dump(exclude_none=True)
        )
        db.commit()
        db.refresh(settings)
    return settings


@router.patch("/{user_id}/{card}", response_model=AccountingSettingsResponse)
def save_settings_card(
    user_id: str,
    card: str,
    body: AccountingSettingsUpdate,
    db: Session = Depends(get_db),
):
    """Save one card (``company``, ``accounts`` or ``bank``)."""
    with handler_errors("Failed to save settings"):
        settings = AccountingSettingsService().save_card(
            db, user_id, card, body.model_dump(exclude_unset=True)
        )
        db.commit()
        db.refresh(settings)
    return settings


@router.get("/{user_id}/ledger-accounts", response_model=dict[str, list[LedgerAccountResponse]])
def list_ledger_accounts(user_id: str, db: Session = Depends(get_db)):
    """List the user's ledger accounts grouped by account type."""
    return AccountingSettingsService.list_ledger_accounts(db, user_id)
