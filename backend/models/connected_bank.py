"""ConnectedBank model - one linked institution per user."""

from sqlalchemy import Column, DateTime, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base
from models.utils import generate_uuid, utc_now


class ConnectedBank(Base):
    """A financial institution a user linked through Plaid Link.

    Holds the durable Plaid access token used for every later data pull.
    Re-linking the same institution updates the existing row.
    """

    __tablename__ = "connected_banks"
    __table_args__ = (
        UniqueConstraint("user_id", "institution_name", name="uix_user_institution"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)
    item_id = Column(String, nullable=False, index=True)
    access_token = Column(String, nullable=False)
    institution_name = Column(String, nullable=False)
    last_sync = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )

    # Relationships
    accounts = relationship("PlaidAccount", back_populates="connected_bank")
