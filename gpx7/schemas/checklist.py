"""Schemas checklist / Checklist schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from gpx7.models.checklist import ChecklistItemStatus, ChecklistStatus
from gpx7.schemas.common import UtcDatetime


class ChecklistStartRequest(BaseModel):
    """Demarre une checklist / Start a checklist."""
    vehicle_id: int = Field(gt=0)
    started_at: UtcDatetime | None = None  # defaut : maintenant / default: now
    performed_by: str | None = None
    notes: str | None = None


class ChecklistItemSubmit(BaseModel):
    label: str = Field(min_length=1, max_length=150)
    status: ChecklistItemStatus
    comment: str | None = None


class ChecklistCompleteRequest(BaseModel):
    """Enregistre le resultat / Register the result."""
    completed_at: UtcDatetime | None = None  # defaut : maintenant / default: now
    odometer: int = Field(ge=0)
    performed_by: str = Field(min_length=1, max_length=100)
    items: list[ChecklistItemSubmit] = Field(min_length=1)
    notes: str | None = None


class ChecklistItemRead(BaseModel):
    id: int
    label: str
    status: ChecklistItemStatus
    comment: str | None = None

    model_config = {"from_attributes": True}


class ChecklistRead(BaseModel):
    id: int
    vehicle_id: int
    vehicle_plate: str
    status: ChecklistStatus
    started_at: datetime
    completed_at: datetime | None = None
    odometer: int | None = None
    performed_by: str | None = None
    notes: str | None = None
    items: list[ChecklistItemRead] = []

    model_config = {"from_attributes": True}
