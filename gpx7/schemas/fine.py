"""Schemas amendes / Fine schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from gpx7.models.fine import FineStatus
from gpx7.schemas.common import UtcDatetime


class FineCreate(BaseModel):
    vehicle_id: int = Field(gt=0)
    infraction_date: UtcDatetime
    description: str = Field(min_length=1)
    amount: float = Field(gt=0)
    due_date: UtcDatetime | None = None
    payment_status: FineStatus = FineStatus.PENDING
    payment_date: UtcDatetime | None = None
    notes: str | None = None


class FineStatusUpdate(BaseModel):
    payment_status: FineStatus
    payment_date: UtcDatetime | None = None


class FineRead(BaseModel):
    id: int
    vehicle_id: int | None = None
    vehicle_plate: str
    infraction_date: datetime
    description: str
    amount: float
    due_date: datetime | None = None
    payment_status: FineStatus
    payment_date: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
