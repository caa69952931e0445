"""Routes carburant / Fueling routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gpx7.config import settings
from gpx7.database import get_db
from gpx7.errors import NotFoundError
from gpx7.models.fueling import FuelingEvent
from gpx7.rate_limit import limiter
from gpx7.schemas.fueling import FuelingCreate, FuelingCreated, FuelingRead, FuelReportResponse
from gpx7.services.event_recorder import EventRecorder
from gpx7.services.fuel_economy import FuelEconomyService
from gpx7.services.period import Period
from gpx7.api.deps import get_period, get_recorder

router = APIRouter()


def _fueling_query(vehicle_id: int | None, period: Period | None):
    query = select(FuelingEvent)
    if vehicle_id is not None:
        query = query.where(FuelingEvent.vehicle_id == vehicle_id)
    if period is not None:
        query = query.where(FuelingEvent.fueled_at.between(period.start, period.end))
    return query


@router.get("/", response_model=list[FuelingRead])
async def list_fueling(
    vehicle_id: int | None = None,
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    query = _fueling_query(vehicle_id, period).order_by(
        FuelingEvent.fueled_at.desc(), FuelingEvent.odometer.desc()
    )
    result = await db.execute(query.limit(500))
    return result.scalars().all()


@router.get("/report", response_model=FuelReportResponse)
async def fuel_report(
    vehicle_id: int | None = None,
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    """Consommation par trajet et synthese / Per-trip consumption and summary."""
    result = await db.execute(_fueling_query(vehicle_id, period))
    report = FuelEconomyService.analyze(result.scalars().all())
    return FuelReportResponse.model_validate(report, from_attributes=True)


@router.post("/", response_model=FuelingCreated, status_code=201)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def create_fueling(
    request: Request,
    data: FuelingCreate,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Enregistrer un plein / Record a fueling.

    Le compteur doit etre >= au compteur actuel du vehicule.
    The odometer must be >= the vehicle's current odometer.
    """
    fueling, warning = await recorder.record_fueling(data)
    created = FuelingCreated.model_validate(fueling)
    created.warning = warning
    return created


@router.delete("/{fueling_id}", status_code=204)
async def delete_fueling(
    fueling_id: int,
    db: AsyncSession = Depends(get_db),
):
    fueling = await db.get(FuelingEvent, fueling_id)
    if not fueling:
        raise NotFoundError("Fueling not found")
    await db.delete(fueling)
