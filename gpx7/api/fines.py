"""Routes amendes / Fine routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gpx7.config import settings
from gpx7.database import get_db
from gpx7.errors import NotFoundError
from gpx7.models.fine import FineEvent, FineStatus
from gpx7.rate_limit import limiter
from gpx7.schemas.fine import FineCreate, FineRead, FineStatusUpdate
from gpx7.services.event_recorder import EventRecorder
from gpx7.api.deps import get_recorder

router = APIRouter()


@router.get("/", response_model=list[FineRead])
async def list_fines(
    vehicle_id: int | None = None,
    payment_status: FineStatus | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(FineEvent).order_by(FineEvent.infraction_date.desc(), FineEvent.id.desc())
    if vehicle_id is not None:
        query = query.where(FineEvent.vehicle_id == vehicle_id)
    if payment_status is not None:
        query = query.where(FineEvent.payment_status == payment_status)
    result = await db.execute(query.limit(500))
    return result.scalars().all()


@router.post("/", response_model=FineRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def create_fine(
    request: Request,
    data: FineCreate,
    recorder: EventRecorder = Depends(get_recorder),
):
    return await recorder.record_fine(data)


@router.put("/{fine_id}/status", response_model=FineRead)
async def update_fine_status(
    fine_id: int,
    data: FineStatusUpdate,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Changer le statut de paiement / Change payment status."""
    return await recorder.update_fine_status(fine_id, data)


@router.delete("/{fine_id}", status_code=204)
async def delete_fine(
    fine_id: int,
    db: AsyncSession = Depends(get_db),
):
    fine = await db.get(FineEvent, fine_id)
    if not fine:
        raise NotFoundError("Fine not found")
    await db.delete(fine)
