"""
Enregistrement des evenements / Event recording.

Chaque methode est une unite d'ecriture : insertion de l'evenement et mise a
jour de l'instantane du vehicule dans la meme session. get_db() valide ou
annule la transaction entiere.
Each method is one write unit: event insert and vehicle snapshot update share
the same session. get_db() commits or rolls back the whole transaction.
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gpx7.errors import NotFoundError
from gpx7.models.checklist import ChecklistEvent, ChecklistItem, ChecklistStatus
from gpx7.models.fine import FineEvent, FineStatus
from gpx7.models.fueling import FuelingEvent
from gpx7.models.maintenance import MaintenanceEvent
from gpx7.models.vehicle import Vehicle
from gpx7.schemas.checklist import ChecklistCompleteRequest, ChecklistStartRequest
from gpx7.schemas.fine import FineCreate, FineStatusUpdate
from gpx7.schemas.fueling import FuelingCreate
from gpx7.schemas.maintenance import MaintenanceCreate
from gpx7.services.alert_service import AlertService
from gpx7.services.snapshot_service import SnapshotService
from gpx7.utils.dates import utcnow

logger = logging.getLogger(__name__)


def payment_date_for(status: FineStatus, payment_date: datetime | None, now: datetime) -> datetime | None:
    """Date de paiement selon le statut / Payment date according to status.

    Payee sans date -> maintenant ; tout autre statut -> None.
    Paid without a date -> now; any other status -> None.
    """
    if status != FineStatus.PAID:
        return None
    return payment_date or now


def vehicle_query(vehicle_id: int, lock: bool = False):
    """Requete vehicule, verrouillee pour les ecritures d'instantane.
    Vehicle query, row-locked for snapshot writes.

    SELECT ... FOR UPDATE sous PostgreSQL ; ignore par SQLite.
    SELECT ... FOR UPDATE on PostgreSQL; ignored by SQLite.
    """
    query = select(Vehicle).where(Vehicle.id == vehicle_id)
    if lock:
        query = query.with_for_update().execution_options(populate_existing=True)
    return query


class EventRecorder:
    """Unites d'ecriture sur une session injectee / Write units over an injected session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_vehicle(self, vehicle_id: int, lock: bool = False) -> Vehicle:
        result = await self.db.execute(vehicle_query(vehicle_id, lock))
        vehicle = result.scalar_one_or_none()
        if not vehicle:
            raise NotFoundError("Vehicle not found")
        return vehicle

    async def record_maintenance(self, data: MaintenanceCreate) -> MaintenanceEvent:
        vehicle = await self.get_vehicle(data.vehicle_id, lock=True)
        event = MaintenanceEvent(
            vehicle_id=vehicle.id,
            vehicle_plate=vehicle.plate,
            maintenance_type=data.maintenance_type,
            description=data.description,
            performed_at=data.performed_at,
            cost=data.cost,
            odometer=data.odometer,
            performed_by=data.performed_by,
            notes=data.notes,
            created_at=utcnow(),
        )
        self.db.add(event)
        updated = SnapshotService.apply_maintenance(
            vehicle,
            data.maintenance_type,
            data.performed_at,
            odometer=data.odometer,
            next_oil_change_odometer=data.next_oil_change_odometer,
            next_oil_change_date=data.next_oil_change_date,
        )
        await self.db.flush()
        await self.db.refresh(event)
        logger.info(
            "Maintenance %s recorded for %s (snapshot updated: %s)",
            event.maintenance_type.value, vehicle.plate, updated,
        )
        return event

    async def start_checklist(self, data: ChecklistStartRequest) -> ChecklistEvent:
        vehicle = await self.get_vehicle(data.vehicle_id, lock=True)
        started_at = data.started_at or utcnow()
        checklist = ChecklistEvent(
            vehicle_id=vehicle.id,
            vehicle_plate=vehicle.plate,
            status=ChecklistStatus.PENDING,
            started_at=started_at,
            performed_by=data.performed_by,
            notes=data.notes,
            items=[],
        )
        self.db.add(checklist)
        SnapshotService.apply_checklist_start(vehicle, started_at)
        await self.db.flush()
        logger.info("Checklist %s started for %s", checklist.id, vehicle.plate)
        return checklist

    async def get_checklist(self, checklist_id: int, status: ChecklistStatus | None = None) -> ChecklistEvent:
        query = (
            select(ChecklistEvent)
            .options(selectinload(ChecklistEvent.items))
            .where(ChecklistEvent.id == checklist_id)
        )
        if status is not None:
            query = query.where(ChecklistEvent.status == status)
        result = await self.db.execute(query)
        checklist = result.scalar_one_or_none()
        if not checklist:
            raise NotFoundError("Checklist not found" if status is None else "Pending checklist not found")
        return checklist

    async def complete_checklist(self, checklist_id: int, data: ChecklistCompleteRequest) -> ChecklistEvent:
        """Une seule finalisation possible / Completion happens once."""
        checklist = await self.get_checklist(checklist_id, status=ChecklistStatus.PENDING)
        vehicle = await self.get_vehicle(checklist.vehicle_id, lock=True)

        completed_at = data.completed_at or utcnow()
        checklist.status = ChecklistStatus.COMPLETED
        checklist.completed_at = completed_at
        checklist.odometer = data.odometer
        checklist.performed_by = data.performed_by
        if data.notes is not None:
            checklist.notes = data.notes
        for item in data.items:
            checklist.items.append(ChecklistItem(
                label=item.label,
                status=item.status,
                comment=item.comment,
            ))
        SnapshotService.apply_checklist_completion(vehicle, completed_at, data.odometer)
        await self.db.flush()
        logger.info("Checklist %s completed for %s", checklist.id, vehicle.plate)
        return checklist

    async def record_fueling(self, data: FuelingCreate) -> tuple[FuelingEvent, str | None]:
        """Plein + compteur ; retourne l'alerte vidange eventuelle.
        Fueling + odometer; returns the oil-change warning if any.
        """
        vehicle = await self.get_vehicle(data.vehicle_id, lock=True)
        SnapshotService.apply_fueling(vehicle, data.odometer)

        total_cost = data.total_cost
        if total_cost is None:
            total_cost = round(data.liters * data.price_per_liter, 2)
        fueling = FuelingEvent(
            vehicle_id=vehicle.id,
            vehicle_plate=vehicle.plate,
            fueled_at=data.fueled_at,
            odometer=data.odometer,
            liters=data.liters,
            price_per_liter=data.price_per_liter,
            total_cost=total_cost,
            station=data.station,
            notes=data.notes,
            created_at=utcnow(),
        )
        self.db.add(fueling)
        await self.db.flush()
        await self.db.refresh(fueling)

        warning = AlertService.oil_warning(vehicle)
        if warning:
            logger.warning(warning)
        logger.info("Fueling %s recorded for %s at %s km", fueling.id, vehicle.plate, data.odometer)
        return fueling, warning

    async def record_fine(self, data: FineCreate) -> FineEvent:
        vehicle = await self.get_vehicle(data.vehicle_id)
        fine = FineEvent(
            vehicle_id=vehicle.id,
            vehicle_plate=vehicle.plate,
            infraction_date=data.infraction_date,
            description=data.description,
            amount=data.amount,
            due_date=data.due_date,
            payment_status=data.payment_status,
            payment_date=payment_date_for(data.payment_status, data.payment_date, utcnow()),
            notes=data.notes,
            created_at=utcnow(),
        )
        self.db.add(fine)
        await self.db.flush()
        await self.db.refresh(fine)
        logger.info("Fine %s recorded for %s", fine.id, vehicle.plate)
        return fine

    async def update_fine_status(self, fine_id: int, data: FineStatusUpdate) -> FineEvent:
        fine = await self.db.get(FineEvent, fine_id)
        if not fine:
            raise NotFoundError("Fine not found")
        fine.payment_status = data.payment_status
        fine.payment_date = payment_date_for(data.payment_status, data.payment_date, utcnow())
        await self.db.flush()
        await self.db.refresh(fine)
        return fine

    async def delete_vehicle(self, vehicle_id: int) -> None:
        """Supprime le vehicule et ses entretiens, checklists et pleins.
        Deletes the vehicle with its maintenance, checklists and fuelings.

        Les amendes restent, detachees du vehicule / Fines stay, detached from the vehicle.
        """
        vehicle = await self.get_vehicle(vehicle_id)
        plate = vehicle.plate
        await self.db.delete(vehicle)
        await self.db.flush()
        logger.info("Vehicle %s deleted with its event history", plate)
