"""Vendor bill API endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.errors import handler_errors
from database import get_db
from schemas.vendor_bill import (
    BillStatus,
    VendorBillCreate,
    VendorBillDeleteRequest,
    VendorBillDeleteResponse,
    VendorBillResponse,
    VendorBillUpdate,
)
from services.vendor_bill_service import VendorBillService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/vendor-bills", tags=["vendor-bills"])

# Only these may be cleared by sending null; null elsewhere means "unchanged"
NULLABLE_FIELDS = {"description", "attachment_path"}


@router.get("", response_model=list[VendorBillResponse])
def list_vendor_bills(
    user_id: str = Query(..., min_length=1),
    status: Optional[BillStatus] = None,
    db: Session = Depends(get_db),
):
    """List a user's vendor bills, newest first, optionally by status."""
    return VendorBillService.list_bills(db, user_id, status.value if status else None)


@router.post("", response_model=VendorBillResponse, status_code=201)
def create_vendor_bill(body: VendorBillCreate, db: Session = Depends(get_db)):
    """Create a vendor bill."""
    fields = body.model_dump(exclude={"user_id"})
    fields["status"] = body.status.value
    with handler_errors("Failed to create vendor bill"):
        bill = VendorBillService.create_bill(db, body.user_id, **fields)
        db.commit()
        db.refresh(bill)
    return bill


@router.put("/{bill_id}", response_model=VendorBillResponse)
def update_vendor_bill(bill_id: int, body: VendorBillUpdate, db: Session = Depends(get_db)):
    """Update the given fields of a vendor bill."""
    fields = {
        key: value
        for key, value in body.model_dump(exclude={"user_id"}, exclude_unset=True).items()
        if value is not None or key in NULLABLE_FIELDS
    }
    if body.status is not None:
        fields["status"] = body.status.value
    with handler_errors("Failed to update vendor bill"):
        bill = VendorBillService.update_bill(db, bill_id, body.user_id, **fields)
        db.commit()
        db.refresh(bill)
    return bill


@router.post("/delete", response_model=VendorBillDeleteResponse)
def delete_vendor_bills(body: VendorBillDeleteRequest, db: Session = Depends(get_db)):
    """Delete several of the user's vendor bills."""
    with handler_errors("Failed to delete vendor bills"):
        deleted = VendorBillService.delete_bills(db, body.user_id, body.ids)
        db.commit()
    return VendorBillDeleteResponse(deleted=deleted)
