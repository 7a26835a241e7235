"""Pydantic schemas for vendor bills."""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BillStatus(str, Enum):
    """Valid vendor bill statuses."""

    pending = "Pending"
    paid = "Paid"
    overdue = "Overdue"
    cancelled = "Cancelled"


class VendorBillCreate(BaseModel):
    """Schema for creating a vendor bill."""

    user_id: str = Field(..., min_length=1)
    date: datetime.date
    vendor_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    amount: Decimal
    status: BillStatus = BillStatus.pending
    attachment_path: Optional[str] = None


class VendorBillUpdate(BaseModel):
    """Schema for updating a vendor bill; omitted fields are unchanged."""

    user_id: str = Field(..., min_length=1)
    date: Optional[datetime.date] = None
    vendor_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    status: Optional[BillStatus] = None
    attachment_path: Optional[str] = None


class VendorBillResponse(BaseModel):
    id: int
    user_id: str
    date: datetime.date
    vendor_name: str
    description: Optional[str] = None
    amount: Decimal
    status: str
    attachment_path: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VendorBillDeleteRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    ids: list[int]


class VendorBillDeleteResponse(BaseModel):
    deleted: int
