"""Schemas carburant / Fueling schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from gpx7.schemas.common import UtcDatetime


class FuelingCreate(BaseModel):
    vehicle_id: int = Field(gt=0)
    fueled_at: UtcDatetime
    odometer: int = Field(ge=0)
    liters: float = Field(gt=0)
    price_per_liter: float = Field(gt=0)
    total_cost: float | None = Field(None, gt=0)  # defaut : litres x prix / default: liters x price
    station: str | None = None
    notes: str | None = None


class FuelingRead(BaseModel):
    id: int
    vehicle_id: int
    vehicle_plate: str
    fueled_at: datetime
    odometer: int
    liters: float
    price_per_liter: float
    total_cost: float
    station: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class FuelingCreated(FuelingRead):
    """Plein cree + alerte vidange eventuelle / Created fueling + optional oil warning."""
    warning: str | None = None


# --- Rapport consommation / Fuel economy report ---

class FuelTripRead(BaseModel):
    id: int | None = None
    vehicle_id: int
    plate: str | None = None
    fueled_at: datetime
    odometer: int
    liters: float
    price_per_liter: float
    total_cost: float
    station: str | None = None
    distance: float | None = None
    consumption: float | None = None

    model_config = {"from_attributes": True}


class FuelSummaryRead(BaseModel):
    total_cost: float = 0
    total_liters: float = 0
    total_distance: float = 0
    average_consumption: float | None = None
    cost_per_km: float | None = None
    average_price_per_liter: float | None = None

    model_config = {"from_attributes": True}


class FuelReportResponse(BaseModel):
    trips: list[FuelTripRead] = []
    summary: FuelSummaryRead

    model_config = {"from_attributes": True}
