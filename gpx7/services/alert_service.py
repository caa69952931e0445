"""
Service des echeances d'entretien / Maintenance due-date service.

Classe chaque vehicule (vidange, checklist) a partir de son instantane
d'entretien, puis produit la liste "prochains entretiens" et les compteurs
du tableau de bord. Toutes les comparaisons se font sur minuit UTC.
Classifies each vehicle (oil change, checklist) from its maintenance
snapshot, then builds the "next maintenance" list and the dashboard
counters. Every comparison uses UTC midnight.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta

from gpx7.utils.dates import start_of_day, start_of_today


class AlertStatus(str, enum.Enum):
    """Etat d'une echeance / Due-item state."""
    OVERDUE_DATE_AND_ODOMETER = "OVERDUE_DATE_AND_ODOMETER"
    OVERDUE_ODOMETER = "OVERDUE_ODOMETER"
    OVERDUE_DATE = "OVERDUE_DATE"
    DUE_SOON = "DUE_SOON"
    OK = "OK"

    @property
    def is_overdue(self) -> bool:
        return self.value.startswith("OVERDUE")

    @property
    def priority(self) -> int:
        if self.is_overdue:
            return 0
        if self is AlertStatus.DUE_SOON:
            return 1
        return 2


class AlertKind(str, enum.Enum):
    """Nature de l'echeance / Due-item kind."""
    OIL_CHANGE = "OIL_CHANGE"
    CHECKLIST = "CHECKLIST"


@dataclass
class MaintenanceAlert:
    """Ligne "prochain entretien" / "Next maintenance" line."""
    vehicle_id: int
    plate: str
    make: str | None
    model: str | None
    kind: AlertKind
    status: AlertStatus
    due_date: datetime | None
    due_odometer: int | None
    odometer_current: int
    days_remaining: int | None
    km_remaining: int | None

    def sort_key(self) -> tuple:
        return (
            self.status.priority,
            self.due_date is None,
            self.due_date or datetime.max,
            self.vehicle_id,
            self.kind.value,
        )


@dataclass
class DashboardCounts:
    alerts_active: int = 0
    scheduled_maintenance: int = 0


def _today(today: datetime | None) -> datetime:
    return start_of_today() if today is None else start_of_day(today)


def _days_until(due: datetime | None, today: datetime) -> int | None:
    if due is None:
        return None
    return (due.date() - today.date()).days


def checklist_due_date(vehicle) -> datetime | None:
    """Echeance checklist encore ouverte / Checklist due date still open.

    Une checklist demarree a ou apres l'echeance la satisfait.
    A checklist started on or after the due date satisfies it.
    """
    due = vehicle.next_checklist_date
    last = vehicle.last_checklist_date
    if due is None or (last is not None and last >= due):
        return None
    return due


class AlertService:
    """Classification des echeances / Due-date classification."""

    @staticmethod
    def oil_overdue_by_odometer(vehicle) -> bool:
        due = vehicle.next_oil_change_odometer
        return due is not None and (vehicle.odometer_current or 0) >= due

    @staticmethod
    def oil_overdue_by_date(vehicle, today: datetime | None = None) -> bool:
        due = vehicle.next_oil_change_date
        return due is not None and due < _today(today)

    @staticmethod
    def oil_status(vehicle, today: datetime | None = None) -> AlertStatus:
        """Etat de la vidange / Oil-change state."""
        by_km = AlertService.oil_overdue_by_odometer(vehicle)
        by_date = AlertService.oil_overdue_by_date(vehicle, today)
        if by_km and by_date:
            return AlertStatus.OVERDUE_DATE_AND_ODOMETER
        if by_km:
            return AlertStatus.OVERDUE_ODOMETER
        if by_date:
            return AlertStatus.OVERDUE_DATE
        return AlertStatus.OK

    @staticmethod
    def checklist_status(vehicle, today: datetime | None = None, due_soon_days: int = 3) -> AlertStatus:
        """Etat de la checklist / Checklist state.

        DUE_SOON couvre [aujourd'hui, aujourd'hui + due_soon_days] jours inclus.
        DUE_SOON covers [today, today + due_soon_days], both days included.
        """
        due = checklist_due_date(vehicle)
        if due is None:
            return AlertStatus.OK
        today = _today(today)
        if due < today:
            return AlertStatus.OVERDUE_DATE
        if due < today + timedelta(days=due_soon_days + 1):
            return AlertStatus.DUE_SOON
        return AlertStatus.OK

    @staticmethod
    def oil_alert(vehicle, today: datetime | None = None) -> MaintenanceAlert | None:
        today = _today(today)
        status = AlertService.oil_status(vehicle, today)
        due_date = vehicle.next_oil_change_date
        if status is AlertStatus.OK and (due_date is None or due_date < today):
            return None
        due_km = vehicle.next_oil_change_odometer
        current = vehicle.odometer_current or 0
        return MaintenanceAlert(
            vehicle_id=vehicle.id,
            plate=vehicle.plate,
            make=vehicle.make,
            model=vehicle.model,
            kind=AlertKind.OIL_CHANGE,
            status=status,
            due_date=due_date,
            due_odometer=due_km,
            odometer_current=current,
            days_remaining=_days_until(due_date, today),
            km_remaining=due_km - current if due_km is not None else None,
        )

    @staticmethod
    def checklist_alert(
        vehicle, today: datetime | None = None, due_soon_days: int = 3
    ) -> MaintenanceAlert | None:
        today = _today(today)
        status = AlertService.checklist_status(vehicle, today, due_soon_days)
        due_date = checklist_due_date(vehicle)
        if status is AlertStatus.OK and (due_date is None or due_date < today):
            return None
        return MaintenanceAlert(
            vehicle_id=vehicle.id,
            plate=vehicle.plate,
            make=vehicle.make,
            model=vehicle.model,
            kind=AlertKind.CHECKLIST,
            status=status,
            due_date=due_date,
            due_odometer=None,
            odometer_current=vehicle.odometer_current or 0,
            days_remaining=_days_until(due_date, today),
            km_remaining=None,
        )

    @staticmethod
    def next_maintenance(
        vehicles, today: datetime | None = None, due_soon_days: int = 3
    ) -> list[MaintenanceAlert]:
        """Liste triee : en retard, bientot, a venir / Sorted list: overdue, due soon, upcoming."""
        today = _today(today)
        alerts = []
        for vehicle in vehicles:
            oil = AlertService.oil_alert(vehicle, today)
            if oil is not None:
                alerts.append(oil)
            checklist = AlertService.checklist_alert(vehicle, today, due_soon_days)
            if checklist is not None:
                alerts.append(checklist)
        alerts.sort(key=MaintenanceAlert.sort_key)
        return alerts

    @staticmethod
    def dashboard_counts(vehicles, today: datetime | None = None) -> DashboardCounts:
        """Un vehicule compte une seule fois, le retard l'emporte.
        A vehicle counts once at most, overdue wins.
        """
        today = _today(today)
        counts = DashboardCounts()
        for v in vehicles:
            overdue = (
                AlertService.oil_overdue_by_odometer(v)
                or AlertService.oil_overdue_by_date(v, today)
                or AlertService.checklist_status(v, today) is AlertStatus.OVERDUE_DATE
            )
            if overdue:
                counts.alerts_active += 1
                continue
            checklist_due = checklist_due_date(v)
            upcoming = (
                (v.next_oil_change_date is not None and v.next_oil_change_date >= today)
                or (checklist_due is not None and checklist_due >= today)
            )
            if upcoming:
                counts.scheduled_maintenance += 1
        return counts

    @staticmethod
    def oil_warning(vehicle) -> str | None:
        """Message d'alerte vidange au kilometrage / Oil-change-by-odometer warning."""
        if not AlertService.oil_overdue_by_odometer(vehicle):
            return None
        return (
            f"Oil change due for {vehicle.plate}: odometer {vehicle.odometer_current} km "
            f"reached the scheduled {vehicle.next_oil_change_odometer} km"
        )
