"""Schemas rapports / Report schemas."""

from datetime import datetime

from pydantic import BaseModel

from gpx7.schemas.checklist import ChecklistRead
from gpx7.schemas.fueling import FuelingRead
from gpx7.schemas.maintenance import MaintenanceRead
from gpx7.schemas.vehicle import VehicleRead
from gpx7.services.activity_service import ActivityKind
from gpx7.services.alert_service import AlertKind, AlertStatus
from gpx7.services.expense_service import ExpenseCategory


# --- Echeances / Due items ---

class MaintenanceAlertRead(BaseModel):
    vehicle_id: int
    plate: str
    make: str | None = None
    model: str | None = None
    kind: AlertKind
    status: AlertStatus
    due_date: datetime | None = None
    due_odometer: int | None = None
    odometer_current: int
    days_remaining: int | None = None
    km_remaining: int | None = None

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    """Compteurs tableau de bord / Dashboard counters."""
    total_vehicles: int = 0
    alerts_active: int = 0
    scheduled_maintenance: int = 0
    fines_pending: int = 0
    month_expenses: float = 0


# --- Depenses / Expenses ---

class LedgerEntryRead(BaseModel):
    category: ExpenseCategory
    description: str
    amount: float
    date: datetime
    vehicle_id: int | None = None
    plate: str | None = None
    source_id: int | None = None

    model_config = {"from_attributes": True}


class ExpenseSummaryRead(BaseModel):
    total: float = 0
    count: int = 0
    by_category: dict[str, float] = {}

    model_config = {"from_attributes": True}


class ExpenseReportResponse(BaseModel):
    ledger: list[LedgerEntryRead] = []
    summary: ExpenseSummaryRead


class MonthBucketRead(BaseModel):
    month: int
    total: float = 0
    by_category: dict[str, float] = {}

    model_config = {"from_attributes": True}


class MonthlyExpenseResponse(BaseModel):
    year: int
    months: list[MonthBucketRead] = []
    total: float = 0


# --- Historique vehicule / Vehicle history ---

class VehicleHistoryResponse(BaseModel):
    vehicle: VehicleRead
    maintenances: list[MaintenanceRead] = []
    checklists: list[ChecklistRead] = []
    fuelings: list[FuelingRead] = []


# --- Activite recente / Recent activity ---

class ActivityRead(BaseModel):
    kind: ActivityKind
    source_id: int
    description: str
    date: datetime
    vehicle_id: int | None = None
    plate: str | None = None

    model_config = {"from_attributes": True}
