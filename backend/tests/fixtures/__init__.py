"""Test fixtures and sample data."""
import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from models import (
    AIConfig,
    BankTransaction,
    ConnectedBank,
    LedgerAccount,
    PlaidAccount,
    UserProfile,
    VendorBill,
)
from sqlalchemy.orm import Session

USER_ID = "user-123"


def create_bank_transaction(
    db: Session,
    account: PlaidAccount,
    plaid_transaction_id: str,
    amount: Decimal = Decimal("10.00"),
    txn_date: date = date(2026, 9, 1),
) -> BankTransaction:
    """Insert an already-imported transaction for ``account``."""
    row = BankTransaction(
        user_id=account.user_id,
        plaid_transaction_id=plaid_transaction_id,
        plaid_account_id=account.plaid_account_id,
        plaid_item_id=account.plaid_item_id,
        date=txn_date,
        amount=amount,
        description="Existing transaction",
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def create_ledger_accounts(db: Session, user_id: str = USER_ID) -> dict[str, LedgerAccount]:
    """Create one ledger account per required settings mapping, keyed by field."""
    specs = {
        "sales_revenue_account": ("Sales", "Revenue"),
        "purchases_account": ("Purchases", "Expense"),
        "discounts_account": ("Discounts", "Expense"),
        "accounts_receivable_account": ("Accounts Receivable", "Asset"),
        "accounts_payable_account": ("Accounts Payable", "Liability"),
        "taxes_payable_account": ("Sales Tax Payable", "Liability"),
        "retained_earnings_account": ("Retained Earnings", "Equity"),
    }
    accounts = {}
    for field_name, (name, account_type) in specs.items():
        ledger = LedgerAccount(user_id=user_id, account_name=name, account_type=account_type)
        db.add(ledger)
        accounts[field_name] = ledger
    db.commit()
    for ledger in accounts.values():
        db.refresh(ledger)
    return accounts


@pytest.fixture
def connected_bank(db: Session) -> ConnectedBank:
    """Create a connected bank for the test user."""
    bank = ConnectedBank(
        user_id=USER_ID,
        item_id="item-sandbox-test",
        access_token="access-sandbox-test",
        institution_name="First Platypus Bank",
    )
    db.add(bank)
    db.commit()
    db.refresh(bank)
    return bank


@pytest.fixture
def plaid_account(db: Session, connected_bank: ConnectedBank) -> PlaidAccount:
    """Create a never-synced checking account under the connected bank."""
    acc = PlaidAccount(
        connected_bank_id=connected_bank.id,
        user_id=USER_ID,
        plaid_account_id="acc_checking",
        plaid_item_id=connected_bank.item_id,
        name="Plaid Checking",
        type="depository",
        subtype="checking",
        mask="0000",
        current_balance=Decimal("110.00"),
        available_balance=Decimal("100.00"),
    )
    db.add(acc)
    db.commit()
    db.refresh(acc)
    return acc


@pytest.fixture
def recently_synced_account(db: Session, plaid_account: PlaidAccount) -> PlaidAccount:
    """The checking account with one imported transaction, synced 2 days ago."""
    plaid_account.last_plaid_sync = datetime.now(timezone.utc) - timedelta(days=2)
    db.commit()
    create_bank_transaction(db, plaid_account, "txn_existing")
    db.refresh(plaid_account)
    return plaid_account


@pytest.fixture
def ledger_accounts(db: Session) -> dict[str, LedgerAccount]:
    """Create a chart of accounts covering every settings mapping."""
    return create_ledger_accounts(db)


@pytest.fixture
def ai_config(db: Session) -> AIConfig:
    """Store an OpenAI configuration row."""
    config = AIConfig(api_key="sk-test", model_provider="openai", model_name=None)
    db.add(config)
    db.commit()
    db.refresh(config)
    return config


@pytest.fixture
def user_profile(db: Session) -> UserProfile:
    """Create a profile without a phone number."""
    profile = UserProfile(
        auth_id="auth-123",
        full_name="Ada Lovelace",
        email="ada@example.com",
        phone=None,
        address="12 Analytical Way",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def vendor_bill(db: Session) -> VendorBill:
    """Create a pending vendor bill."""
    bill = VendorBill(
        user_id=USER_ID,
        date=date(2026, 9, 15),
        vendor_name="Office Supplies Co",
        description="Paper and toner",
        amount=Decimal("245.80"),
        status="Pending",
    )
    db.add(bill)
    db.commit()
    db.refresh(bill)
    return bill
