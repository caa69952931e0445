"""Routes entretien / Maintenance routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gpx7.config import settings
from gpx7.database import get_db
from gpx7.errors import NotFoundError
from gpx7.models.maintenance import MaintenanceEvent, MaintenanceType
from gpx7.rate_limit import limiter
from gpx7.schemas.maintenance import MaintenanceCreate, MaintenanceRead
from gpx7.services.event_recorder import EventRecorder
from gpx7.api.deps import get_recorder

router = APIRouter()


@router.get("/", response_model=list[MaintenanceRead])
async def list_maintenance(
    vehicle_id: int | None = None,
    maintenance_type: MaintenanceType | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(MaintenanceEvent).order_by(MaintenanceEvent.performed_at.desc(), MaintenanceEvent.id.desc())
    if vehicle_id is not None:
        query = query.where(MaintenanceEvent.vehicle_id == vehicle_id)
    if maintenance_type is not None:
        query = query.where(MaintenanceEvent.maintenance_type == maintenance_type)
    result = await db.execute(query.limit(500))
    return result.scalars().all()


@router.get("/{event_id}", response_model=MaintenanceRead)
async def get_maintenance(
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    event = await db.get(MaintenanceEvent, event_id)
    if not event:
        raise NotFoundError("Maintenance record not found")
    return event


@router.post("/", response_model=MaintenanceRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def create_maintenance(
    request: Request,
    data: MaintenanceCreate,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Enregistrer un entretien (+ instantane vidange) / Record maintenance (+ oil snapshot)."""
    return await recorder.record_maintenance(data)


@router.delete("/{event_id}", status_code=204)
async def delete_maintenance(
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    event = await db.get(MaintenanceEvent, event_id)
    if not event:
        raise NotFoundError("Maintenance record not found")
    await db.delete(event)
