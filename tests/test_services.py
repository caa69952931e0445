"""Tests des services / Service tests."""

import io
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from openpyxl import load_workbook
from sqlalchemy.dialects import postgresql, sqlite

from gpx7.errors import ValidationError
from gpx7.models.checklist import ChecklistStatus
from gpx7.models.fine import FineStatus
from gpx7.models.maintenance import MaintenanceType
from gpx7.services.activity_service import ActivityKind, ActivityService
from gpx7.services.alert_service import AlertKind, AlertService, AlertStatus
from gpx7.services.event_recorder import payment_date_for, vehicle_query
from gpx7.services.expense_service import ExpenseCategory, ExpenseService
from gpx7.services.export_service import LEDGER_FIELDS, ExportService
from gpx7.services.fuel_economy import FuelEconomyService
from gpx7.services.period import resolve_period
from gpx7.services.snapshot_service import SnapshotService

TODAY = datetime(2025, 6, 10)


def make_vehicle(**overrides):
    fields = dict(
        id=1,
        plate="ABC1D23",
        make="Fiat",
        model="Strada",
        odometer_current=0,
        next_oil_change_odometer=None,
        next_oil_change_date=None,
        checklist_frequency_days=None,
        next_checklist_date=None,
        last_oil_change_odometer=None,
        last_oil_change_date=None,
        last_checklist_date=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_fueling(id, odometer, liters, day, vehicle_id=1, price=6.0):
    return SimpleNamespace(
        id=id,
        vehicle_id=vehicle_id,
        vehicle_plate="ABC1D23",
        fueled_at=datetime(2025, 3, day, 8, 0),
        odometer=odometer,
        liters=liters,
        price_per_liter=price,
        total_cost=round(liters * price, 2),
        station=None,
    )


# --- Echeances / Due items ---

def test_oil_overdue_by_odometer_inclusive():
    v = make_vehicle(odometer_current=10000, next_oil_change_odometer=10000)
    assert AlertService.oil_status(v, TODAY) is AlertStatus.OVERDUE_ODOMETER


def test_oil_overdue_by_date_uses_midnight():
    due_today = make_vehicle(next_oil_change_date=datetime(2025, 6, 10, 0, 0))
    assert AlertService.oil_status(due_today, TODAY + timedelta(hours=15)) is AlertStatus.OK

    yesterday = make_vehicle(next_oil_change_date=datetime(2025, 6, 9, 23, 59))
    assert AlertService.oil_status(yesterday, TODAY) is AlertStatus.OVERDUE_DATE


def test_oil_overdue_both():
    v = make_vehicle(
        odometer_current=20500,
        next_oil_change_odometer=20000,
        next_oil_change_date=datetime(2025, 5, 1),
    )
    assert AlertService.oil_status(v, TODAY) is AlertStatus.OVERDUE_DATE_AND_ODOMETER


def test_checklist_due_soon_window():
    assert AlertService.checklist_status(
        make_vehicle(next_checklist_date=datetime(2025, 6, 13, 23, 0)), TODAY
    ) is AlertStatus.DUE_SOON
    assert AlertService.checklist_status(
        make_vehicle(next_checklist_date=datetime(2025, 6, 14)), TODAY
    ) is AlertStatus.OK
    assert AlertService.checklist_status(
        make_vehicle(next_checklist_date=datetime(2025, 6, 9)), TODAY
    ) is AlertStatus.OVERDUE_DATE
    assert AlertService.checklist_status(make_vehicle(), TODAY) is AlertStatus.OK


def test_started_checklist_clears_overdue_without_frequency():
    v = make_vehicle(next_checklist_date=TODAY - timedelta(days=5))
    assert AlertService.checklist_status(v, TODAY) is AlertStatus.OVERDUE_DATE

    SnapshotService.apply_checklist_start(v, TODAY + timedelta(hours=9))
    assert AlertService.checklist_status(v, TODAY) is AlertStatus.OK
    assert AlertService.next_maintenance([v], TODAY) == []
    counts = AlertService.dashboard_counts([v], TODAY)
    assert counts.alerts_active == 0
    assert counts.scheduled_maintenance == 0


def test_next_maintenance_order():
    vehicles = [
        make_vehicle(id=1, plate="AAA0001", next_checklist_date=datetime(2025, 7, 1)),
        make_vehicle(id=2, plate="AAA0002", next_checklist_date=datetime(2025, 6, 11)),
        make_vehicle(id=3, plate="AAA0003", odometer_current=5000, next_oil_change_odometer=4000),
        make_vehicle(id=4, plate="AAA0004"),
    ]
    alerts = AlertService.next_maintenance(vehicles, TODAY)
    assert [(a.vehicle_id, a.status) for a in alerts] == [
        (3, AlertStatus.OVERDUE_ODOMETER),
        (2, AlertStatus.DUE_SOON),
        (1, AlertStatus.OK),
    ]
    assert alerts[0].kind is AlertKind.OIL_CHANGE
    assert alerts[0].km_remaining == -1000
    assert alerts[1].days_remaining == 1

    # Meme entree, meme sortie / Same input, same output
    again = AlertService.next_maintenance(vehicles, TODAY)
    assert [(a.vehicle_id, a.kind, a.status) for a in again] == [
        (a.vehicle_id, a.kind, a.status) for a in alerts
    ]


def test_dashboard_overdue_wins():
    vehicles = [
        make_vehicle(
            id=1,
            next_oil_change_date=datetime(2025, 6, 1),
            next_checklist_date=datetime(2025, 6, 20),
        ),
        make_vehicle(id=2, next_checklist_date=datetime(2025, 6, 10)),
        make_vehicle(id=3),
    ]
    counts = AlertService.dashboard_counts(vehicles, TODAY)
    assert counts.alerts_active == 1
    assert counts.scheduled_maintenance == 1


def test_oil_warning():
    assert AlertService.oil_warning(make_vehicle(odometer_current=100)) is None
    v = make_vehicle(odometer_current=15000, next_oil_change_odometer=15000)
    assert "ABC1D23" in AlertService.oil_warning(v)


# --- Instantane / Snapshot ---

def test_apply_oil_change():
    v = make_vehicle(odometer_current=9000, next_oil_change_date=datetime(2025, 1, 1))
    changed = SnapshotService.apply_maintenance(
        v,
        MaintenanceType.OIL_CHANGE,
        datetime(2025, 6, 1),
        odometer=9500,
        next_oil_change_odometer=19500,
    )
    assert changed is True
    assert v.odometer_current == 9500
    assert v.last_oil_change_odometer == 9500
    assert v.last_oil_change_date == datetime(2025, 6, 1)
    assert v.next_oil_change_odometer == 19500
    # Non fourni : conserve / Not supplied: kept
    assert v.next_oil_change_date == datetime(2025, 1, 1)


def test_apply_other_maintenance():
    v = make_vehicle(odometer_current=9000)
    assert SnapshotService.apply_maintenance(v, MaintenanceType.TIRES, TODAY, odometer=8000) is False
    assert v.odometer_current == 9000
    assert v.last_oil_change_date is None


def test_apply_fueling_monotonic():
    v = make_vehicle(odometer_current=1000)
    with pytest.raises(ValidationError):
        SnapshotService.apply_fueling(v, 999)
    SnapshotService.apply_fueling(v, 1000)
    SnapshotService.apply_fueling(v, 1200)
    assert v.odometer_current == 1200


def test_checklist_snapshot():
    v = make_vehicle(odometer_current=500, checklist_frequency_days=7)
    SnapshotService.apply_checklist_start(v, TODAY)
    assert v.last_checklist_date == TODAY
    assert v.next_checklist_date == TODAY + timedelta(days=7)

    SnapshotService.apply_checklist_completion(v, TODAY + timedelta(days=1), 450)
    assert v.next_checklist_date == TODAY + timedelta(days=8)
    assert v.odometer_current == 500


# --- Consommation / Fuel economy ---

def test_fuel_trip_chaining():
    fuelings = [
        make_fueling(1, 1000, 40, 1),
        make_fueling(2, 1400, 35, 2),
        make_fueling(3, 1390, 30, 3),
        make_fueling(4, 1800, 38, 4),
    ]
    report = FuelEconomyService.analyze(reversed(fuelings))
    chronological = list(reversed(report.trips))
    assert [t.distance for t in chronological] == [None, 400, None, 410]
    assert chronological[1].consumption == round(400 / 35, 2)
    assert chronological[3].consumption == round(410 / 38, 2)
    assert report.trips[0].odometer == 1800

    # Premier plein et releve anormal exclus des totaux / First fill and anomaly left out of totals
    summary = report.summary
    assert summary.total_distance == 810
    assert summary.total_liters == 73
    assert summary.total_cost == 438
    assert summary.average_consumption == round(810 / 73, 2)
    assert summary.cost_per_km == round(438 / 810, 2)
    assert summary.average_price_per_liter == 6.0


def test_fuel_chaining_per_vehicle():
    fuelings = [
        make_fueling(1, 1000, 40, 1, vehicle_id=1),
        make_fueling(2, 50000, 40, 2, vehicle_id=2),
        make_fueling(3, 1300, 30, 3, vehicle_id=1),
    ]
    report = FuelEconomyService.analyze(fuelings)
    by_id = {t.id: t for t in report.trips}
    assert by_id[2].distance is None
    assert by_id[3].distance == 300


def test_fuel_empty():
    report = FuelEconomyService.analyze([])
    assert report.trips == []
    assert report.summary.average_consumption is None
    assert report.summary.cost_per_km is None


# --- Depenses / Expenses ---

def _expense_sources():
    maintenances = [
        SimpleNamespace(
            id=1, vehicle_id=1, vehicle_plate="ABC1D23", maintenance_type=MaintenanceType.OIL_CHANGE,
            description="Synthetic", cost=250.0, performed_at=datetime(2025, 2, 3),
        ),
        SimpleNamespace(
            id=2, vehicle_id=1, vehicle_plate="ABC1D23", maintenance_type=MaintenanceType.GENERAL,
            description=None, cost=None, performed_at=datetime(2025, 2, 4),
        ),
        SimpleNamespace(
            id=3, vehicle_id=2, vehicle_plate="XYZ9876", maintenance_type=MaintenanceType.BRAKES,
            description=None, cost=0, performed_at=datetime(2025, 3, 1),
        ),
    ]
    fuelings = [make_fueling(1, 1000, 40, 5), make_fueling(2, 1400, 35, 20, vehicle_id=2)]
    fines = [
        SimpleNamespace(
            id=1, vehicle_id=1, vehicle_plate="ABC1D23", description="Speeding", amount=130.16,
            infraction_date=datetime(2025, 2, 10),
            payment_status=FineStatus.PAID, payment_date=datetime(2025, 4, 2),
        ),
        SimpleNamespace(
            id=2, vehicle_id=1, vehicle_plate="ABC1D23", description="Parking", amount=88.38,
            infraction_date=datetime(2025, 1, 20),
            payment_status=FineStatus.PENDING, payment_date=None,
        ),
    ]
    return maintenances, fuelings, fines


def test_ledger_total_matches_entries():
    ledger = ExpenseService.build_ledger(*_expense_sources())
    summary = ExpenseService.summarize(ledger)
    assert summary.count == len(ledger) == 4
    assert all(e.amount > 0 for e in ledger)
    assert summary.total == round(sum(e.amount for e in ledger), 2)
    assert summary.by_category[ExpenseCategory.FINE.value] == 130.16
    assert summary.by_category[ExpenseCategory.MAINTENANCE.value] == 250.0
    # Plus recent d'abord / Newest first
    assert ledger[0].category is ExpenseCategory.FINE


def test_ledger_filters():
    period = resolve_period(2025, 3)
    ledger = ExpenseService.build_ledger(*_expense_sources(), period=period, vehicle_id=2)
    assert [(e.category, e.source_id) for e in ledger] == [(ExpenseCategory.FUELING, 2)]


def test_monthly_buckets():
    ledger = ExpenseService.build_ledger(*_expense_sources())
    buckets = ExpenseService.monthly(ledger, 2025)
    assert [b.month for b in buckets] == list(range(1, 13))
    assert buckets[1].total == 250.0
    assert buckets[2].by_category["fueling"] == 450.0
    assert buckets[3].by_category["fine"] == 130.16
    assert round(sum(b.total for b in buckets), 2) == ExpenseService.summarize(ledger).total


def test_payment_date_for():
    now = datetime(2025, 6, 10, 12, 0)
    assert payment_date_for(FineStatus.PAID, None, now) == now
    assert payment_date_for(FineStatus.PAID, TODAY, now) == TODAY
    assert payment_date_for(FineStatus.PENDING, TODAY, now) is None
    assert payment_date_for(FineStatus.RECURRING, None, now) is None


# --- Periode / Period ---

def test_resolve_period():
    assert resolve_period(None, 5) is None

    year = resolve_period(2024)
    assert year.start == datetime(2024, 1, 1)
    assert year.end == datetime(2024, 12, 31, 23, 59, 59, 999999)

    december = resolve_period(2024, 12)
    assert december.start == datetime(2024, 12, 1)
    assert december.contains(datetime(2024, 12, 31, 23, 59))
    assert not december.contains(datetime(2025, 1, 1))


@pytest.mark.parametrize("year,month", [(2024, 0), (2024, 13), (1800, None), (10000, 1)])
def test_resolve_period_invalid(year, month):
    with pytest.raises(ValidationError):
        resolve_period(year, month)


# --- Export ---

def test_export_csv():
    ledger = ExpenseService.build_ledger(*_expense_sources())
    content = ExportService.to_csv(ExportService.ledger_rows(ledger), LEDGER_FIELDS)
    assert content.startswith(b"\xef\xbb\xbf")
    lines = content.decode("utf-8-sig").splitlines()
    assert lines[0] == "date;category;plate;description;amount"
    assert lines[1].startswith("2025-04-02;fine;ABC1D23;Speeding;")


def test_export_xlsx_total_row():
    ledger = ExpenseService.build_ledger(*_expense_sources())
    total = ExpenseService.summarize(ledger).total
    content = ExportService.to_xlsx(ExportService.ledger_rows(ledger), LEDGER_FIELDS, total=total)
    ws = load_workbook(io.BytesIO(content)).active
    assert ws.title == "Expenses"
    assert ws.cell(row=1, column=1).value == "date"
    assert ws.cell(row=len(ledger) + 2, column=1).value == "TOTAL"
    assert ws.cell(row=len(ledger) + 2, column=5).value == total


# --- Activite recente / Recent activity ---

def test_recent_activity_newest_first():
    maintenances, fuelings, fines = _expense_sources()
    checklists = [
        SimpleNamespace(
            id=7, vehicle_id=1, vehicle_plate="ABC1D23", status=ChecklistStatus.COMPLETED,
            started_at=datetime(2025, 4, 1), completed_at=datetime(2025, 4, 3),
        ),
        SimpleNamespace(
            id=8, vehicle_id=2, vehicle_plate="XYZ9876", status=ChecklistStatus.PENDING,
            started_at=datetime(2025, 1, 15), completed_at=None,
        ),
    ]
    feed = ActivityService.recent(maintenances, checklists, fuelings, fines, limit=3)
    assert [(a.kind, a.source_id) for a in feed] == [
        (ActivityKind.CHECKLIST, 7),
        (ActivityKind.FUELING, 2),
        (ActivityKind.FUELING, 1),
    ]
    assert feed[0].description == "Checklist completed for ABC1D23"
    assert feed[0].date == datetime(2025, 4, 3)

    everything = ActivityService.recent(maintenances, checklists, fuelings, fines, limit=50)
    assert len(everything) == 9
    assert everything[-1].description == "Checklist started for XYZ9876"


# --- Verrou d'ecriture / Write lock ---

def test_vehicle_query_locks_snapshot_writes():
    pg = postgresql.dialect()
    assert "FOR UPDATE" in str(vehicle_query(1, lock=True).compile(dialect=pg))
    assert "FOR UPDATE" not in str(vehicle_query(1).compile(dialect=pg))
    assert "FOR UPDATE" not in str(vehicle_query(1, lock=True).compile(dialect=sqlite.dialect()))
