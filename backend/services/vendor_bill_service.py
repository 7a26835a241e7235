"""Vendor bill service."""

import logging

from sqlalchemy.orm import Session

from models import VendorBill
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

BILL_STATUSES = ("Pending", "Paid", "Overdue", "Cancelled")


class VendorBillService:
    """Service for vendor bill CRUD operations."""

    @staticmethod
    def list_bills(db: Session, user_id: str, status: str | None = None) -> list[VendorBill]:
        """List a user's bills, newest first."""
        query = db.query(VendorBill).filter(VendorBill.user_id == user_id)
        if status:
            query = query.filter(VendorBill.status == status)
        return query.order_by(VendorBill.date.desc(), VendorBill.id.desc()).all()

    @staticmethod
    def create_bill(db: Session, user_id: str, **fields) -> VendorBill:
        """Create a bill."""
        bill = VendorBill(user_id=user_id, **fields)
        db.add(bill)
        db.flush()
        logger.info("Vendor bill created: %s (id=%s)", bill.vendor_name, bill.id)
        return bill

    @staticmethod
    def update_bill(db: Session, bill_id: int, user_id: str, **fields) -> VendorBill:
        """Apply the given fields to a bill, or raise NotFoundError."""
        bill = (
            db.query(VendorBill)
            .filter(VendorBill.id == bill_id, VendorBill.user_id == user_id)
            .first()
        )
        if not bill:
            raise NotFoundError(f"Vendor bill not found: {bill_id}")
        for key, value in fields.items():
            setattr(bill, key, value)
        db.flush()
        return bill

    @staticmethod
    def delete_bills(db: Session, user_id: str, bill_ids: list[int]) -> int:
        """Delete the user's bills among ``bill_ids``; returns how many went."""
        if not bill_ids:
            return 0
        deleted = (
            db.query(VendorBill)
            .filter(VendorBill.user_id == user_id, VendorBill.id.in_(bill_ids))
            .delete(synchronize_session=False)
        )
        logger.info("Deleted %d vendor bills for user %s", deleted, user_id)
        return deleted
