"""BankTransaction model - transactions imported from Plaid."""

from sqlalchemy import Boolean, Column, Date, DateTime, Numeric, String, UniqueConstraint

from database import Base
from models.utils import generate_uuid, utc_now


class BankTransaction(Base):
    """A transaction imported from Plaid.

    ``plaid_transaction_id`` is the idempotency key: re-importing the same
    transaction updates this row instead of inserting a new one.
    """

    __tablename__ = "bank_transactions"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "plaid_transaction_id", name="uix_user_plaid_transaction"
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)
    plaid_transaction_id = Column(String, nullable=False)
    plaid_account_id = Column(String, nullable=False, index=True)
    plaid_item_id = Column(String, nullable=True)

    date = Column(Date, nullable=False)
    authorized_date = Column(Date, nullable=True)
    description = Column(String, nullable=True)
    merchant_name = Column(String, nullable=True)
    original_description = Column(String, nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)  # Plaid sign: positive = money out
    category_primary = Column(String, nullable=True)
    category_detailed = Column(String, nullable=True)
    payment_channel = Column(String, nullable=True)
    pending = Column(Boolean, default=False)
    pending_transaction_id = Column(String, nullable=True)
    iso_currency_code = Column(String, default="USD")

    location_address = Column(String, nullable=True)
    location_city = Column(String, nullable=True)
    location_region = Column(String, nullable=True)
    location_postal_code = Column(String, nullable=True)
    location_country = Column(String, nullable=True)

    bank_name = Column(String, nullable=True)
    account_number = Column(String, nullable=True)  # Account mask
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )
