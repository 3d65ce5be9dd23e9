"""
API request and response type definitions.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CreateRecordRequest(BaseModel):
    """
    Request body for adding a queue record.

    Fields are accepted loosely and checked by the same validation as the
    board form, so both surfaces reject identical input.
    """

    customer_name: str = Field(default="", description="Customer display name")
    discord_id: str = Field(default="", description="Customer contact handle")
    price: str | float | int = Field(default="", description="Agreed price")
    description: str = Field(default="", description="Work description")
    deadline: str = Field(default="", description="Deadline as YYYY-MM-DD")


class UpdateStatusRequest(BaseModel):
    """Request body for changing a record's status."""

    status: str = Field(..., description="One of pending, in_progress, completed, cancelled")


class QueueRecordResponse(BaseModel):
    """Full queue record response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_name: str
    discord_id: str
    price: Decimal
    description: str
    deadline: date
    status: str
    created_at: datetime


class QueueStatsResponse(BaseModel):
    """Aggregate figures over the whole queue."""

    total: int
    pending: int
    in_progress: int
    completed: int
    revenue: Decimal


class QueueListResponse(BaseModel):
    """Ordered queue listing with its aggregates."""

    records: list[QueueRecordResponse]
    stats: QueueStatsResponse


class RejectionResponse(BaseModel):
    """A single validation rejection."""

    field: str
    reason: str


class ValidationErrorResponse(BaseModel):
    """Structured validation failure."""

    error: str = "validation_failed"
    rejections: list[RejectionResponse]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str
    storage: str
    timestamp: datetime
