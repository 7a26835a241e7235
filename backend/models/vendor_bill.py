"""VendorBill model - bills received from vendors."""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String

from database import Base
from models.utils import utc_now


class VendorBill(Base):
    """A bill owed to a vendor."""

    __tablename__ = "vendor_bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    date = Column(Date, nullable=False)
    vendor_name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    amount = Column(Numeric(15, 2), nullable=False)
    status = Column(String, nullable=False, default="Pending")  # Pending | Paid | Overdue | Cancelled
    attachment_path = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
    )
