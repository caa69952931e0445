"""Schemas entretien / Maintenance schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from gpx7.models.maintenance import MaintenanceType
from gpx7.schemas.common import UtcDatetime


class MaintenanceCreate(BaseModel):
    vehicle_id: int = Field(gt=0)
    maintenance_type: MaintenanceType = MaintenanceType.GENERAL
    description: str | None = None
    performed_at: UtcDatetime
    cost: float | None = Field(None, gt=0)
    odometer: int | None = Field(None, ge=0)
    performed_by: str | None = None
    notes: str | None = None
    # Prochaine vidange saisie par l'utilisateur / User-supplied next oil change
    next_oil_change_odometer: int | None = Field(None, ge=0)
    next_oil_change_date: UtcDatetime | None = None

    @field_validator("maintenance_type", mode="before")
    @classmethod
    def classify_type(cls, value):
        """Accepter les libelles libres historiques / Accept legacy free-text labels."""
        if isinstance(value, str) and value not in MaintenanceType.__members__:
            return MaintenanceType.from_text(value)
        return value


class MaintenanceRead(BaseModel):
    id: int
    vehicle_id: int
    vehicle_plate: str
    maintenance_type: MaintenanceType
    description: str | None = None
    performed_at: datetime
    cost: float | None = None
    odometer: int | None = None
    performed_by: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
