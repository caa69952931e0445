"""
Routes rapports / Report routes.
Echeances, tableau de bord et depenses, recalcules a chaque requete.
Due items, dashboard and expenses, recomputed on every request.
"""

import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gpx7.config import settings
from gpx7.database import get_db
from gpx7.models.checklist import ChecklistEvent
from gpx7.models.fine import FineEvent, FineStatus
from gpx7.models.fueling import FuelingEvent
from gpx7.models.maintenance import MaintenanceEvent
from gpx7.models.vehicle import Vehicle
from gpx7.schemas.report import (
    ActivityRead,
    DashboardResponse,
    ExpenseReportResponse,
    ExpenseSummaryRead,
    LedgerEntryRead,
    MaintenanceAlertRead,
    MonthBucketRead,
    MonthlyExpenseResponse,
)
from gpx7.services.activity_service import ActivityService
from gpx7.services.alert_service import AlertService
from gpx7.services.expense_service import ExpenseService, LedgerEntry
from gpx7.services.export_service import LEDGER_FIELDS, ExportService
from gpx7.services.period import Period, resolve_period
from gpx7.utils.dates import utcnow
from gpx7.api.deps import get_period

router = APIRouter()


async def _load_ledger(
    db: AsyncSession,
    period: Period | None = None,
    vehicle_id: int | None = None,
) -> list[LedgerEntry]:
    """Charger les evenements et construire le registre / Load events and build the ledger."""
    maintenance_q = select(MaintenanceEvent)
    fueling_q = select(FuelingEvent)
    fine_q = select(FineEvent).where(FineEvent.payment_status == FineStatus.PAID)
    if vehicle_id is not None:
        maintenance_q = maintenance_q.where(MaintenanceEvent.vehicle_id == vehicle_id)
        fueling_q = fueling_q.where(FuelingEvent.vehicle_id == vehicle_id)
        fine_q = fine_q.where(FineEvent.vehicle_id == vehicle_id)

    maintenances = (await db.execute(maintenance_q)).scalars().all()
    fuelings = (await db.execute(fueling_q)).scalars().all()
    fines = (await db.execute(fine_q)).scalars().all()
    return ExpenseService.build_ledger(maintenances, fuelings, fines, period=period, vehicle_id=vehicle_id)


@router.get("/next-maintenance", response_model=list[MaintenanceAlertRead])
async def next_maintenance(db: AsyncSession = Depends(get_db)):
    """Vidanges et checklists a venir ou en retard / Upcoming or overdue oil changes and checklists."""
    result = await db.execute(select(Vehicle))
    alerts = AlertService.next_maintenance(result.scalars().all(), due_soon_days=settings.DUE_SOON_DAYS)
    return [MaintenanceAlertRead.model_validate(a) for a in alerts]


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    vehicles = (await db.execute(select(Vehicle))).scalars().all()
    counts = AlertService.dashboard_counts(vehicles)

    fines_pending = (await db.execute(
        select(func.count(FineEvent.id)).where(
            FineEvent.payment_status.in_([FineStatus.PENDING, FineStatus.RECURRING])
        )
    )).scalar() or 0

    now = utcnow()
    ledger = await _load_ledger(db, period=resolve_period(now.year, now.month))

    return DashboardResponse(
        total_vehicles=len(vehicles),
        alerts_active=counts.alerts_active,
        scheduled_maintenance=counts.scheduled_maintenance,
        fines_pending=fines_pending,
        month_expenses=ExpenseService.summarize(ledger).total,
    )


@router.get("/recent-activity", response_model=list[ActivityRead])
async def recent_activity(
    limit: int = Query(10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """Dernieres activites de la flotte / Latest fleet activity."""
    fuelings = await db.execute(
        select(FuelingEvent).order_by(FuelingEvent.fueled_at.desc(), FuelingEvent.id.desc()).limit(limit)
    )
    maintenances = await db.execute(
        select(MaintenanceEvent)
        .order_by(MaintenanceEvent.performed_at.desc(), MaintenanceEvent.id.desc())
        .limit(limit)
    )
    fines = await db.execute(
        select(FineEvent).order_by(FineEvent.infraction_date.desc(), FineEvent.id.desc()).limit(limit)
    )
    checklists = await db.execute(
        select(ChecklistEvent)
        .order_by(
            func.coalesce(ChecklistEvent.completed_at, ChecklistEvent.started_at).desc(),
            ChecklistEvent.id.desc(),
        )
        .limit(limit)
    )
    feed = ActivityService.recent(
        maintenances=maintenances.scalars().all(),
        checklists=checklists.scalars().all(),
        fuelings=fuelings.scalars().all(),
        fines=fines.scalars().all(),
        limit=limit,
    )
    return [ActivityRead.model_validate(a) for a in feed]


@router.get("/expenses", response_model=ExpenseReportResponse)
async def expenses(
    vehicle_id: int | None = None,
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    """Registre des depenses + synthese / Expense ledger + summary."""
    ledger = await _load_ledger(db, period=period, vehicle_id=vehicle_id)
    return ExpenseReportResponse(
        ledger=[LedgerEntryRead.model_validate(e) for e in ledger],
        summary=ExpenseSummaryRead.model_validate(ExpenseService.summarize(ledger)),
    )


@router.get("/expenses/monthly", response_model=MonthlyExpenseResponse)
async def monthly_expenses(
    year: int = Query(..., description="Annee civile / Calendar year"),
    vehicle_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    period = resolve_period(year)
    ledger = await _load_ledger(db, period=period, vehicle_id=vehicle_id)
    buckets = ExpenseService.monthly(ledger, year)
    return MonthlyExpenseResponse(
        year=year,
        months=[MonthBucketRead.model_validate(b) for b in buckets],
        total=ExpenseService.summarize(ledger).total,
    )


@router.get("/expenses/export")
async def export_expenses(
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    vehicle_id: int | None = None,
    period: Period | None = Depends(get_period),
    db: AsyncSession = Depends(get_db),
):
    """Telecharger le registre / Download the ledger."""
    ledger = await _load_ledger(db, period=period, vehicle_id=vehicle_id)
    rows = ExportService.ledger_rows(ledger)

    if format == "csv":
        content = ExportService.to_csv(rows, LEDGER_FIELDS)
        media_type = "text/csv; charset=utf-8"
        filename = "expenses.csv"
    else:
        content = ExportService.to_xlsx(rows, LEDGER_FIELDS, total=ExpenseService.summarize(ledger).total)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename = "expenses.xlsx"

    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
