"""Plaid API client.

Wraps the plaid-python SDK for the calls the bank handlers make:
creating Link tokens, exchanging public tokens, listing accounts with
balances, looking up institutions, and fetching transaction history.

Every SDK ``ApiException`` is converted to a ``ProviderAPIError`` whose
message is the ``error_message`` Plaid put in the response body.
"""

import json
import logging
from datetime import date

from plaid import ApiException, Environment
from plaid.api.plaid_api import PlaidApi
from plaid.api_client import ApiClient
from plaid.configuration import Configuration
from plaid.model.accounts_get_request import AccountsGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.depository_account_subtype import DepositoryAccountSubtype
from plaid.model.depository_account_subtypes import DepositoryAccountSubtypes
from plaid.model.depository_filter import DepositoryFilter
from plaid.model.institutions_get_by_id_request import InstitutionsGetByIdRequest
from plaid.model.institutions_get_by_id_request_options import InstitutionsGetByIdRequestOptions
from plaid.model.item_public_token_exchange_request import ItemPublicTokenExchangeRequest
from plaid.model.link_token_account_filters import LinkTokenAccountFilters
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import TransactionsGetRequestOptions

from config import Settings
from integrations.exceptions import ProviderAPIError
from integrations.parsing_utils import enum_value, parse_date, to_decimal
from integrations.provider_protocol import (
    AccountsResult,
    BankAccountData,
    BankTransactionData,
    InstitutionInfo,
    TransactionsResult,
)

logger = logging.getLogger(__name__)

# Map PLAID_ENVIRONMENT setting to SDK host URLs.
# Plaid's Development environment is deprecated; only sandbox and production
# are supported.
_ENVIRONMENT_MAP: dict[str, str] = {
    "sandbox": Environment.Sandbox,
    "production": Environment.Production,
}

# Link is restricted to deposit accounts that carry transaction history
LINK_ACCOUNT_SUBTYPES = ("checking", "savings")

# Maximum page size accepted by /transactions/get
TRANSACTIONS_PAGE_SIZE = 500


class PlaidClient:
    """Wrapper around the Plaid API."""

    provider_name = "Plaid"

    def __init__(self, settings: Settings):
        self._client_id = settings.PLAID_CLIENT_ID
        self._secret = settings.PLAID_SECRET
        self._environment = settings.PLAID_ENVIRONMENT
        self._client_name = settings.PLAID_CLIENT_NAME
        self._country_codes = list(settings.PLAID_COUNTRY_CODES)
        self._language = settings.PLAID_LANGUAGE

        # Lazily created on first use
        self._api: PlaidApi | None = None

    def _get_api(self) -> PlaidApi:
        """Return (and cache) a PlaidApi instance."""
        if self._api is None:
            env_key = self._environment.lower()
            host = _ENVIRONMENT_MAP.get(env_key)
            if host is None:
                logger.warning(
                    "Unknown PLAID_ENVIRONMENT=%r, falling back to sandbox. "
                    "Valid values: sandbox, production",
                    self._environment,
                )
                host = Environment.Sandbox
            logger.info(
                "Plaid API client: environment=%s, host=%s, client_id=<configured>",
                env_key,
                host,
            )
            configuration = Configuration(
                host=host,
                api_key={
                    "clientId": self._client_id,
                    "secret": self._secret,
                },
            )
            api_client = ApiClient(configuration)
            self._api = PlaidApi(api_client)
        return self._api

    def is_configured(self) -> bool:
        """Check if Plaid credentials are configured."""
        return bool(self._client_id) and bool(self._secret)

    # ------------------------------------------------------------------
    # Link Token & Token Exchange
    # ------------------------------------------------------------------

    def create_link_token(self, user_id: str) -> dict:
        """Create a Plaid Link token for the browser-based auth flow.

        Args:
            user_id: Our user id, sent to Plaid as ``client_user_id``.

        Returns:
            The Plaid response payload (``link_token``, ``expiration``,
            ``request_id``).
        """
        api = self._get_api()
        request = LinkTokenCreateRequest(
            user=LinkTokenCreateRequestUser(client_user_id=user_id),
            client_name=self._client_name,
            products=[Products("transactions")],
            country_codes=[CountryCode(code) for code in self._country_codes],
            language=self._language,
            account_filters=LinkTokenAccountFilters(
                depository=DepositoryFilter(
                    account_subtypes=DepositoryAccountSubtypes(
                        [DepositoryAccountSubtype(s) for s in LINK_ACCOUNT_SUBTYPES]
                    )
                )
            ),
        )
        try:
            response = api.link_token_create(request)
        except ApiException as e:
            raise self._map_plaid_error(e) from e
        return _to_dict(response)

    def exchange_public_token(self, public_token: str) -> dict:
        """Exchange a Plaid Link public_token for a permanent access_token.

        Args:
            public_token: The public_token from Plaid Link on-success callback.

        Returns:
            Dict with ``access_token`` and ``item_id``.
        """
        api = self._get_api()
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        try:
            response = api.item_public_token_exchange(request)
        except ApiException as e:
            raise self._map_plaid_error(e) from e
        return {
            "access_token": response["access_token"],
            "item_id": response["item_id"],
        }

    # ------------------------------------------------------------------
    # Accounts & institutions
    # ------------------------------------------------------------------

    def get_accounts(self, access_token: str) -> AccountsResult:
        """Fetch the accounts (with live balances) for one Item."""
        api = self._get_api()
        try:
            response = api.accounts_get(AccountsGetRequest(access_token=access_token))
        except ApiException as e:
            raise self._map_plaid_error(e) from e

        accounts = [
            self._map_account(acct) for acct in response.get("accounts", []) or []
        ]
        item = response.get("item") or {}
        return AccountsResult(
            accounts=[a for a in accounts if a is not None],
            institution_id=item.get("institution_id"),
        )

    def get_institution(self, institution_id: str) -> InstitutionInfo:
        """Fetch name, logo and brand color for an institution."""
        api = self._get_api()
        request = InstitutionsGetByIdRequest(
            institution_id=institution_id,
            country_codes=[CountryCode(code) for code in self._country_codes],
            options=InstitutionsGetByIdRequestOptions(include_optional_metadata=True),
        )
        try:
            response = api.institutions_get_by_id(request)
        except ApiException as e:
            raise self._map_plaid_error(e) from e

        institution = response["institution"]
        return InstitutionInfo(
            name=institution.get("name") or "",
            logo=institution.get("logo"),
            primary_color=institution.get("primary_color"),
            url=institution.get("url"),
        )

    @staticmethod
    def _map_account(acct) -> BankAccountData | None:
        """Map a Plaid account object to a BankAccountData."""
        account_id = acct.get("account_id")
        if not account_id:
            return None
        balances = acct.get("balances") or {}
        return BankAccountData(
            account_id=account_id,
            name=acct.get("name") or acct.get("official_name") or "Plaid Account",
            official_name=acct.get("official_name"),
            type=enum_value(acct.get("type")),
            subtype=enum_value(acct.get("subtype")),
            mask=acct.get("mask"),
            current_balance=to_decimal(balances.get("current")),
            available_balance=to_decimal(balances.get("available")),
            credit_limit=to_decimal(balances.get("limit")),
            currency_code=balances.get("iso_currency_code"),
        )

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        account_ids: list[str] | None = None,
    ) -> TransactionsResult:
        """Fetch all transactions in a date window, following pagination.

        Args:
            access_token: The Item's access token.
            start_date: First day of the window (inclusive).
            end_date: Last day of the window (inclusive).
            account_ids: Restrict results to these Plaid account ids.

        Returns:
            TransactionsResult with the mapped rows in the order Plaid
            returned them, and how many rows could not be mapped.
        """
        api = self._get_api()
        result = TransactionsResult()
        total_transactions = None
        offset = 0

        while True:
            options = {"count": TRANSACTIONS_PAGE_SIZE, "offset": offset}
            if account_ids:
                options["account_ids"] = list(account_ids)
            request = TransactionsGetRequest(
                access_token=access_token,
                start_date=start_date,
                end_date=end_date,
                options=TransactionsGetRequestOptions(**options),
            )
            try:
                response = api.transactions_get(request)
            except ApiException as e:
                raise self._map_plaid_error(e) from e

            if total_transactions is None:
                total_transactions = response.get("total_transactions", 0) or 0

            page = response.get("transactions", []) or []
            for txn in page:
                mapped = self._map_transaction(txn)
                if mapped is None:
                    result.skipped += 1
                else:
                    result.transactions.append(mapped)

            offset += len(page)
            if not page or offset >= total_transactions:
                break

        logger.info(
            "Plaid: %d transactions fetched for %s..%s (%d skipped)",
            result.fetched, start_date, end_date, result.skipped,
        )
        return result

    @staticmethod
    def _map_transaction(txn) -> BankTransactionData | None:
        """Map a Plaid transaction object to a BankTransactionData."""
        transaction_id = txn.get("transaction_id")
        txn_date = parse_date(txn.get("date"))
        amount = to_decimal(txn.get("amount"))
        if not transaction_id or txn_date is None or amount is None:
            logger.warning("Skipping malformed Plaid transaction: %r", transaction_id)
            return None

        category = txn.get("personal_finance_category") or {}
        location = txn.get("location") or {}

        return BankTransactionData(
            transaction_id=transaction_id,
            account_id=txn.get("account_id", ""),
            date=txn_date,
            amount=amount,
            name=txn.get("name"),
            merchant_name=txn.get("merchant_name"),
            original_description=txn.get("original_description"),
            authorized_date=parse_date(txn.get("authorized_date")),
            category_primary=category.get("primary"),
            category_detailed=category.get("detailed"),
            payment_channel=enum_value(txn.get("payment_channel")),
            pending=bool(txn.get("pending")),
            pending_transaction_id=txn.get("pending_transaction_id"),
            iso_currency_code=txn.get("iso_currency_code"),
            location_address=location.get("address"),
            location_city=location.get("city"),
            location_region=location.get("region"),
            location_postal_code=location.get("postal_code"),
            location_country=location.get("country"),
        )

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _map_plaid_error(exc: ApiException) -> ProviderAPIError:
        """Map a Plaid ApiException to a ProviderAPIError."""
        message = str(exc)
        error_code = None
        try:
            body = json.loads(exc.body) if exc.body else {}
            error_code = body.get("error_code") or None
            error_message = body.get("error_message", "")
            if error_message:
                message = error_message
        except (TypeError, ValueError, AttributeError):
            pass

        logger.error("Plaid API error (%s): %s", error_code or exc.status, message)
        return ProviderAPIError(
            message,
            provider_name="Plaid",
            status_code=exc.status,
            error_code=error_code,
        )


def _to_dict(response) -> dict:
    """Convert an SDK response model to a plain dict."""
    if isinstance(response, dict):
        return response
    return response.to_dict()
