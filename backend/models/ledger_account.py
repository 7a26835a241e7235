"""LedgerAccount model - the user's chart of accounts."""

from sqlalchemy import Column, Integer, String

from database import Base


class LedgerAccount(Base):
    """A chart-of-accounts entry that settings can map to."""

    __tablename__ = "ledger_accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    account_name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)  # Revenue | Expense | Asset | Liability | Equity
