"""Routes Vehicules / Vehicle API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gpx7.database import get_db
from gpx7.errors import ConflictError, NotFoundError, ValidationError
from gpx7.models.checklist import ChecklistEvent
from gpx7.models.fueling import FuelingEvent
from gpx7.models.maintenance import MaintenanceEvent
from gpx7.models.vehicle import Vehicle
from gpx7.schemas.checklist import ChecklistRead
from gpx7.schemas.fueling import FuelingRead
from gpx7.schemas.maintenance import MaintenanceRead
from gpx7.schemas.report import VehicleHistoryResponse
from gpx7.schemas.vehicle import VehicleCreate, VehicleRead, VehicleUpdate, vehicle_to_read
from gpx7.services.event_recorder import EventRecorder
from gpx7.api.deps import get_recorder
from gpx7.utils.dates import utcnow

router = APIRouter()


async def _ensure_plate_free(db: AsyncSession, plate: str, vehicle_id: int | None = None) -> None:
    query = select(Vehicle.id).where(Vehicle.plate == plate)
    if vehicle_id is not None:
        query = query.where(Vehicle.id != vehicle_id)
    if (await db.execute(query)).first():
        raise ConflictError(f"A vehicle with plate {plate} already exists")


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(
    q: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Lister / rechercher les vehicules / List or search vehicles."""
    query = select(Vehicle).order_by(Vehicle.plate)
    if q:
        pattern = f"%{q.strip()}%"
        query = query.where(or_(
            Vehicle.plate.ilike(pattern),
            Vehicle.make.ilike(pattern),
            Vehicle.model.ilike(pattern),
        ))
    result = await db.execute(query)
    return [vehicle_to_read(v) for v in result.scalars().all()]


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Voir un vehicule / Get vehicle detail."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise NotFoundError("Vehicle not found")
    return vehicle_to_read(vehicle)


@router.get("/{vehicle_id}/history", response_model=VehicleHistoryResponse)
async def get_vehicle_history(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Historique complet du vehicule / Full vehicle history."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise NotFoundError("Vehicle not found")

    maintenances = await db.execute(
        select(MaintenanceEvent)
        .where(MaintenanceEvent.vehicle_id == vehicle_id)
        .order_by(MaintenanceEvent.performed_at.desc())
    )
    checklists = await db.execute(
        select(ChecklistEvent)
        .options(selectinload(ChecklistEvent.items))
        .where(ChecklistEvent.vehicle_id == vehicle_id)
        .order_by(ChecklistEvent.started_at.desc())
    )
    fuelings = await db.execute(
        select(FuelingEvent)
        .where(FuelingEvent.vehicle_id == vehicle_id)
        .order_by(FuelingEvent.fueled_at.desc())
    )
    return VehicleHistoryResponse(
        vehicle=vehicle_to_read(vehicle),
        maintenances=[MaintenanceRead.model_validate(m) for m in maintenances.scalars().all()],
        checklists=[ChecklistRead.model_validate(c) for c in checklists.scalars().all()],
        fuelings=[FuelingRead.model_validate(f) for f in fuelings.scalars().all()],
    )


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(
    data: VehicleCreate,
    db: AsyncSession = Depends(get_db),
):
    """Creer un vehicule / Create vehicle."""
    await _ensure_plate_free(db, data.plate)
    dump = data.model_dump(exclude={"maintenance_info"})
    if data.maintenance_info is not None:
        dump.update(data.maintenance_info.model_dump())
    dump["created_at"] = utcnow()
    vehicle = Vehicle(**dump)
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle_to_read(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(
    vehicle_id: int,
    data: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Modifier un vehicule / Update vehicle."""
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise NotFoundError("Vehicle not found")

    updates = data.model_dump(exclude_unset=True, exclude={"maintenance_info"})
    if data.maintenance_info is not None:
        updates.update(data.maintenance_info.model_dump(exclude_unset=True))

    # Le compteur ne recule jamais / Odometer never goes back
    new_km = updates.get("odometer_current")
    if new_km is not None and new_km < (vehicle.odometer_current or 0):
        raise ValidationError(
            f"Odometer cannot decrease ({vehicle.odometer_current} km -> {new_km} km)"
        )
    if updates.get("plate") and updates["plate"] != vehicle.plate:
        await _ensure_plate_free(db, updates["plate"], vehicle_id)

    for key, value in updates.items():
        if value is None and key in {"plate", "make", "model", "manufacture_year", "model_year", "odometer_current"}:
            continue
        setattr(vehicle, key, value)

    await db.flush()
    await db.refresh(vehicle)
    return vehicle_to_read(vehicle)


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(
    vehicle_id: int,
    recorder: EventRecorder = Depends(get_recorder),
):
    """Supprimer un vehicule et son historique / Delete vehicle and its history."""
    await recorder.delete_vehicle(vehicle_id)
