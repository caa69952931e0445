"""Routes checklists vehicule / Vehicle checklist routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gpx7.config import settings
from gpx7.database import get_db
from gpx7.models.checklist import ChecklistEvent, ChecklistStatus
from gpx7.rate_limit import limiter
from gpx7.schemas.checklist import ChecklistCompleteRequest, ChecklistRead, ChecklistStartRequest
from gpx7.services.event_recorder import EventRecorder
from gpx7.api.deps import get_recorder

router = APIRouter()


@router.get("/", response_model=list[ChecklistRead])
async def list_checklists(
    vehicle_id: int | None = None,
    status: ChecklistStatus | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = (
        select(ChecklistEvent)
        .options(selectinload(ChecklistEvent.items))
        .order_by(ChecklistEvent.started_at.desc(), ChecklistEvent.id.desc())
    )
    if vehicle_id is not None:
        query = query.where(ChecklistEvent.vehicle_id == vehicle_id)
    if status is not None:
        query = query.where(ChecklistEvent.status == status)
    result = await db.execute(query.limit(200))
    return result.scalars().all()


@router.get("/{checklist_id}", response_model=ChecklistRead)
async def get_checklist(
    checklist_id: int,
    recorder: EventRecorder = Depends(get_recorder),
):
    return await recorder.get_checklist(checklist_id)


@router.post("/start", response_model=ChecklistRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def start_checklist(
    request: Request,
    data: ChecklistStartRequest,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Demarrer une checklist (statut pending) / Start a checklist (pending status)."""
    return await recorder.start_checklist(data)


@router.post("/{checklist_id}/complete", response_model=ChecklistRead)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def complete_checklist(
    request: Request,
    checklist_id: int,
    data: ChecklistCompleteRequest,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Enregistrer le resultat d'une checklist en attente / Register a pending checklist result."""
    return await recorder.complete_checklist(checklist_id, data)
