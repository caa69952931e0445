"""Schémas Véhicule / Vehicle schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gpx7.schemas.common import UtcDatetime
from gpx7.utils.text import normalize_plate

MAINTENANCE_INFO_FIELDS = (
    "next_oil_change_odometer",
    "next_oil_change_date",
    "checklist_frequency_days",
    "next_checklist_date",
    "last_oil_change_odometer",
    "last_oil_change_date",
    "last_checklist_date",
)


class MaintenanceInfo(BaseModel):
    """Instantane d'entretien / Maintenance snapshot."""
    next_oil_change_odometer: int | None = Field(None, ge=0)
    next_oil_change_date: UtcDatetime | None = None
    checklist_frequency_days: int | None = Field(None, gt=0)
    next_checklist_date: UtcDatetime | None = None
    last_oil_change_odometer: int | None = Field(None, ge=0)
    last_oil_change_date: UtcDatetime | None = None
    last_checklist_date: UtcDatetime | None = None


def _plate(value: str) -> str:
    plate = normalize_plate(value)
    if not plate:
        raise ValueError("plate must contain letters or digits")
    return plate


class VehicleCreate(BaseModel):
    plate: str
    make: str = Field(min_length=1, max_length=60)
    model: str = Field(min_length=1, max_length=60)
    manufacture_year: int = Field(ge=1900, le=2100)
    model_year: int = Field(ge=1900, le=2100)
    color: str | None = None
    chassis: str | None = None
    registration_number: str | None = None
    odometer_current: int = Field(0, ge=0)
    maintenance_info: MaintenanceInfo | None = None
    notes: str | None = None

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value: str) -> str:
        return _plate(value)


class VehicleUpdate(BaseModel):
    plate: str | None = None
    make: str | None = Field(None, min_length=1, max_length=60)
    model: str | None = Field(None, min_length=1, max_length=60)
    manufacture_year: int | None = Field(None, ge=1900, le=2100)
    model_year: int | None = Field(None, ge=1900, le=2100)
    color: str | None = None
    chassis: str | None = None
    registration_number: str | None = None
    odometer_current: int | None = Field(None, ge=0)
    maintenance_info: MaintenanceInfo | None = None
    notes: str | None = None

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value: str | None) -> str | None:
        return None if value is None else _plate(value)


class VehicleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plate: str
    make: str
    model: str
    manufacture_year: int
    model_year: int
    color: str | None = None
    chassis: str | None = None
    registration_number: str | None = None
    odometer_current: int
    maintenance_info: MaintenanceInfo
    notes: str | None = None
    created_at: datetime | None = None


def vehicle_to_read(vehicle) -> VehicleRead:
    """Convertir vehicule ORM en schema Read / Convert ORM vehicle to Read schema."""
    return VehicleRead(
        id=vehicle.id,
        plate=vehicle.plate,
        make=vehicle.make,
        model=vehicle.model,
        manufacture_year=vehicle.manufacture_year,
        model_year=vehicle.model_year,
        color=vehicle.color,
        chassis=vehicle.chassis,
        registration_number=vehicle.registration_number,
        odometer_current=vehicle.odometer_current or 0,
        maintenance_info=MaintenanceInfo(
            **{name: getattr(vehicle, name) for name in MAINTENANCE_INFO_FIELDS}
        ),
        notes=vehicle.notes,
        created_at=vehicle.created_at,
    )
