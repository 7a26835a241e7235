"""PlaidAccount model - bank accounts discovered under a ConnectedBank."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utc_now


class PlaidAccount(Base):
    """A checking/savings account reported by Plaid, with cached balances.

    The Plaid account id is unique within its owning ConnectedBank.
    """

    __tablename__ = "plaid_accounts"
    __table_args__ = (
        UniqueConstraint(
            "plaid_account_id", "connected_bank_id", name="uix_plaid_account_bank"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    connected_bank_id = Column(
        String(36), ForeignKey("connected_banks.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(String, nullable=False, index=True)
    plaid_account_id = Column(String, nullable=False, index=True)
    plaid_item_id = Column(String, nullable=False)

    name = Column(String, nullable=False)
    official_name = Column(String, nullable=True)
    type = Column(String, nullable=True)  # e.g., "depository"
    subtype = Column(String, nullable=True)  # e.g., "checking", "savings"
    mask = Column(String, nullable=True)

    current_balance = Column(Numeric(15, 2), nullable=True)
    available_balance = Column(Numeric(15, 2), nullable=True)
    credit_limit = Column(Numeric(15, 2), nullable=True)
    currency_code = Column(String, default="USD")

    is_active = Column(Boolean, default=True)
    last_balance_update = Column(DateTime(timezone=True), nullable=True)
    last_plaid_sync = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )

    # Relationships
    connected_bank = relationship("ConnectedBank", back_populates="accounts")
