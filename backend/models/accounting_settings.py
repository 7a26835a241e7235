"""AccountingSettings model - per-user accounting preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from database import Base
from models.utils import generate_uuid, utc_now


class AccountingSettings(Base):
    """Business profile and chart-of-accounts mappings for one user."""

    __tablename__ = "accounting_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, unique=True, index=True)

    # Company card
    base_currency = Column(String, nullable=False, default="USD")
    accounting_method = Column(String, nullable=False, default="Accrual")
    time_zone = Column(String, nullable=False, default="US/Eastern")
    company_legal_name = Column(String, nullable=False, default="")

    # Accounts card
    sales_revenue_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    purchases_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    discounts_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    accounts_receivable_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    accounts_payable_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    taxes_payable_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)
    retained_earnings_account = Column(Integer, ForeignKey("ledger_accounts.id"), nullable=True)

    # Bank card
    bank_name = Column(String, nullable=False, default="")
    branch_name = Column(String, nullable=False, default="")
    account_number = Column(String, nullable=False, default="")
    is_default_bank = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )
