"""
Activite recente / Recent activity.
Fil du tableau de bord : derniers pleins, entretiens, amendes et checklists.
Dashboard feed: latest fuelings, maintenance, fines and checklists.
"""

import enum
from dataclasses import dataclass
from datetime import datetime

from gpx7.models.checklist import ChecklistStatus


class ActivityKind(str, enum.Enum):
    """Nature de l'activite / Activity kind."""
    FUELING = "fueling"
    MAINTENANCE = "maintenance"
    FINE = "fine"
    CHECKLIST = "checklist"


@dataclass
class ActivityItem:
    kind: ActivityKind
    source_id: int
    description: str
    date: datetime
    vehicle_id: int | None
    plate: str | None


class ActivityService:
    """Construction du fil d'activite / Activity feed building."""

    @staticmethod
    def from_fuelings(fuelings) -> list[ActivityItem]:
        return [
            ActivityItem(
                kind=ActivityKind.FUELING,
                source_id=f.id,
                description=f"Fueling {f.vehicle_plate}: {float(f.liters):.2f} L ({float(f.total_cost):.2f})",
                date=f.fueled_at,
                vehicle_id=f.vehicle_id,
                plate=f.vehicle_plate,
            )
            for f in fuelings
        ]

    @staticmethod
    def from_maintenance(events) -> list[ActivityItem]:
        items = []
        for e in events:
            label = e.maintenance_type.value.replace("_", " ").capitalize()
            items.append(ActivityItem(
                kind=ActivityKind.MAINTENANCE,
                source_id=e.id,
                description=f"{label} on {e.vehicle_plate}",
                date=e.performed_at,
                vehicle_id=e.vehicle_id,
                plate=e.vehicle_plate,
            ))
        return items

    @staticmethod
    def from_fines(fines) -> list[ActivityItem]:
        return [
            ActivityItem(
                kind=ActivityKind.FINE,
                source_id=fine.id,
                description=f"Fine for {fine.vehicle_plate}: {fine.description}",
                date=fine.infraction_date,
                vehicle_id=fine.vehicle_id,
                plate=fine.vehicle_plate,
            )
            for fine in fines
        ]

    @staticmethod
    def from_checklists(checklists) -> list[ActivityItem]:
        """Date de finalisation, sinon de demarrage / Completion date, else start date."""
        items = []
        for c in checklists:
            completed = c.status == ChecklistStatus.COMPLETED and c.completed_at is not None
            items.append(ActivityItem(
                kind=ActivityKind.CHECKLIST,
                source_id=c.id,
                description=f"Checklist {'completed' if completed else 'started'} for {c.vehicle_plate}",
                date=c.completed_at if completed else c.started_at,
                vehicle_id=c.vehicle_id,
                plate=c.vehicle_plate,
            ))
        return items

    @staticmethod
    def recent(maintenances=(), checklists=(), fuelings=(), fines=(), limit: int = 10) -> list[ActivityItem]:
        """Les `limit` activites les plus recentes / The `limit` newest activities."""
        feed = (
            ActivityService.from_fuelings(fuelings)
            + ActivityService.from_maintenance(maintenances)
            + ActivityService.from_fines(fines)
            + ActivityService.from_checklists(checklists)
        )
        feed.sort(key=lambda a: (a.date, a.kind.value, a.source_id), reverse=True)
        return feed[:limit]
