"""Pydantic schemas for the AI assistant endpoint."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BusinessContextIn(BaseModel):
    """Business facts the dashboard sends along with a question."""

    model_config = ConfigDict(populate_by_name=True)

    company: Optional[str] = None
    industry: Optional[str] = None
    accounts_summary: Optional[str] = Field(None, alias="accountsSummary")
    recent_activity: Optional[str] = Field(None, alias="recentActivity")
    invoice_count: Optional[int] = Field(None, alias="invoiceCount")
    customer_count: Optional[int] = Field(None, alias="customerCount")
    total_revenue: Optional[float] = Field(None, alias="totalRevenue")


class AssistantRequest(BaseModel):
    question: str = Field(..., min_length=1)
    context: Optional[BusinessContextIn] = None


class AssistantResponse(BaseModel):
    response: str
