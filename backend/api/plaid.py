"""Plaid API endpoints.

Server side of the Plaid Link flow (link token, public token exchange)
plus transaction import and live account refresh for connected banks.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import handler_errors
from config import Settings, get_settings
from database import get_db
from integrations.exceptions import ProviderAPIError
from integrations.plaid_client import PlaidClient
from integrations.provider_protocol import BankDataClient
from schemas.plaid import (
    AccountsRequest,
    AccountsResponse,
    ExchangeTokenRequest,
    ExchangeTokenResponse,
    LinkTokenRequest,
    TransactionSyncRequest,
    TransactionSyncResponse,
)
from services.bank_connection_service import BankAccountsView, BankConnectionService
from services.exceptions import InvalidRequestError
from services.transaction_sync_service import TransactionSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plaid", tags=["plaid"])


def get_plaid_client(settings: Settings = Depends(get_settings)) -> BankDataClient:
    """Dependency for injecting the Plaid client (overridable in tests)."""
    return PlaidClient(settings)


def get_bank_connection_service(
    client: BankDataClient = Depends(get_plaid_client),
    settings: Settings = Depends(get_settings),
) -> BankConnectionService:
    return BankConnectionService(client, max_workers=settings.ACCOUNT_FETCH_WORKERS)


def get_transaction_sync_service(
    client: BankDataClient = Depends(get_plaid_client),
) -> TransactionSyncService:
    return TransactionSyncService(client)


def _require_configured(client: BankDataClient) -> None:
    if not client.is_configured():
        raise InvalidRequestError("Plaid is not configured")


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------


@router.post("/link-token")
def create_link_token(
    body: LinkTokenRequest,
    client: BankDataClient = Depends(get_plaid_client),
    service: BankConnectionService = Depends(get_bank_connection_service),
):
    """Create a Plaid Link token for the frontend.

    The payload is returned as Plaid sent it (``link_token``,
    ``expiration``, ``request_id``).
    """
    _require_configured(client)

    with handler_errors("Failed to create link token"):
        try:
            return service.create_link_token(body.user_id)
        except ProviderAPIError as e:
            # Surface actionable hint for the most common error
            if e.error_code == "INVALID_API_KEYS":
                hint = (
                    "Plaid rejected the credentials. Check that PLAID_ENVIRONMENT "
                    "matches your keys (sandbox or production). "
                    "Each environment has different secrets."
                )
                logger.error("Plaid INVALID_API_KEYS: %s", hint)
                raise InvalidRequestError(hint, details=str(e)) from e
            raise


@router.post("/exchange-token", response_model=ExchangeTokenResponse)
def exchange_token(
    body: ExchangeTokenRequest,
    db: Session = Depends(get_db),
    client: BankDataClient = Depends(get_plaid_client),
    service: BankConnectionService = Depends(get_bank_connection_service),
):
    """Exchange a Plaid Link public token and store the connected bank."""
    _require_configured(client)

    with handler_errors("Failed to exchange token"):
        result = service.exchange_public_token(
            db,
            public_token=body.public_token,
            user_id=body.user_id,
            institution_name=body.institution_name,
        )

    return ExchangeTokenResponse(
        item_id=result.bank.item_id,
        bank_id=result.bank.id,
        institution_name=result.bank.institution_name,
        accounts_stored=result.accounts_stored,
    )


@router.post("/transactions", response_model=TransactionSyncResponse)
def sync_transactions(
    body: TransactionSyncRequest,
    db: Session = Depends(get_db),
    client: BankDataClient = Depends(get_plaid_client),
    service: TransactionSyncService = Depends(get_transaction_sync_service),
):
    """Import one account's transactions.

    Chooses an incremental or full window, stores every returned
    transaction idempotently and reports how many rows succeeded.
    """
    _require_configured(client)

    with handler_errors("Failed to fetch transactions"):
        result = service.sync_account(
            db,
            plaid_account_id=body.plaid_account_id,
            user_id=body.user_id,
            force_refresh=body.force_refresh,
            days_to_fetch=body.days_to_fetch,
        )

    return TransactionSyncResponse(
        message=f"Successfully synced {result.success_count} transactions",
        transactions_count=result.success_count,
        errors_count=result.error_count,
        transactions_fetched=result.fetched,
        account_name=result.account_name,
        institution_name=result.institution_name,
        fetch_strategy=result.window.strategy,
        date_range={"start": result.window.start, "end": result.window.end},
        transactions=result.preview,
    )


def _bank_response_dict(view: BankAccountsView) -> dict:
    bank = view.bank
    result = {
        "id": bank.id,
        "user_id": bank.user_id,
        "item_id": bank.item_id,
        "institution_name": bank.institution_name,
        "created_at": bank.created_at,
        "updated_at": bank.updated_at,
        "last_sync": bank.last_sync,
        "accounts": view.accounts,
        "institution": None,
        "data_source": view.data_source,
        "error": view.error,
    }
    if view.institution is not None:
        result["institution"] = {
            "name": view.institution.name,
            "logo": view.institution.logo,
            "primary_color": view.institution.primary_color,
            "url": view.institution.url,
        }
    return result


@router.post("/accounts", response_model=AccountsResponse)
def fetch_accounts(
    body: AccountsRequest,
    db: Session = Depends(get_db),
    client: BankDataClient = Depends(get_plaid_client),
    service: BankConnectionService = Depends(get_bank_connection_service),
):
    """Refresh balances for one or all of the user's connected banks.

    A bank whose refresh fails is returned with no accounts and an
    ``error`` instead of failing the whole response.
    """
    _require_configured(client)

    with handler_errors("Failed to fetch accounts"):
        views = service.fetch_accounts(db, user_id=body.user_id, bank_id=body.bank_id)

    return AccountsResponse(banks=[_bank_response_dict(view) for view in views])
