"""
Service des depenses / Expense service.

Fusionne entretiens, pleins et amendes payees en un registre unique,
puis en totaux par categorie et par mois.
Merges maintenance, fuelings and paid fines into a single ledger,
then into per-category and per-month totals.
"""

import enum
from dataclasses import dataclass, field
from datetime import datetime

from gpx7.models.fine import FineStatus
from gpx7.services.period import Period


class ExpenseCategory(str, enum.Enum):
    """Categorie de depense / Expense category."""
    MAINTENANCE = "maintenance"
    FUELING = "fueling"
    FINE = "fine"


@dataclass
class LedgerEntry:
    """Ligne du registre / Ledger line."""
    category: ExpenseCategory
    description: str
    amount: float
    date: datetime
    vehicle_id: int | None
    plate: str | None
    source_id: int | None


@dataclass
class ExpenseSummary:
    total: float = 0.0
    count: int = 0
    by_category: dict[str, float] = field(
        default_factory=lambda: {c.value: 0.0 for c in ExpenseCategory}
    )


@dataclass
class MonthBucket:
    month: int
    total: float = 0.0
    by_category: dict[str, float] = field(
        default_factory=lambda: {c.value: 0.0 for c in ExpenseCategory}
    )


def _amount(value) -> float | None:
    """Montant exploitable ou None / Usable amount or None."""
    if value is None:
        return None
    amount = round(float(value), 2)
    return amount if amount > 0 else None


class ExpenseService:
    """Agregation des depenses / Expense aggregation."""

    @staticmethod
    def from_maintenance(events) -> list[LedgerEntry]:
        entries = []
        for e in events:
            amount = _amount(e.cost)
            if amount is None:
                continue
            label = e.maintenance_type.value.replace("_", " ").capitalize()
            entries.append(LedgerEntry(
                category=ExpenseCategory.MAINTENANCE,
                description=f"{label} - {e.description}" if e.description else label,
                amount=amount,
                date=e.performed_at,
                vehicle_id=e.vehicle_id,
                plate=e.vehicle_plate,
                source_id=e.id,
            ))
        return entries

    @staticmethod
    def from_fuelings(fuelings) -> list[LedgerEntry]:
        entries = []
        for f in fuelings:
            amount = _amount(f.total_cost)
            if amount is None:
                continue
            description = f"Fueling {float(f.liters):.2f} L"
            if f.station:
                description += f" at {f.station}"
            entries.append(LedgerEntry(
                category=ExpenseCategory.FUELING,
                description=description,
                amount=amount,
                date=f.fueled_at,
                vehicle_id=f.vehicle_id,
                plate=f.vehicle_plate,
                source_id=f.id,
            ))
        return entries

    @staticmethod
    def from_fines(fines) -> list[LedgerEntry]:
        """Seules les amendes payees comptent, a la date de paiement.
        Only paid fines count, keyed by payment date.
        """
        entries = []
        for fine in fines:
            if fine.payment_status != FineStatus.PAID or fine.payment_date is None:
                continue
            amount = _amount(fine.amount)
            if amount is None:
                continue
            entries.append(LedgerEntry(
                category=ExpenseCategory.FINE,
                description=fine.description,
                amount=amount,
                date=fine.payment_date,
                vehicle_id=fine.vehicle_id,
                plate=fine.vehicle_plate,
                source_id=fine.id,
            ))
        return entries

    @staticmethod
    def build_ledger(
        maintenances=(),
        fuelings=(),
        fines=(),
        period: Period | None = None,
        vehicle_id: int | None = None,
    ) -> list[LedgerEntry]:
        """Registre filtre, plus recent d'abord / Filtered ledger, newest first."""
        ledger = (
            ExpenseService.from_maintenance(maintenances)
            + ExpenseService.from_fuelings(fuelings)
            + ExpenseService.from_fines(fines)
        )
        if period is not None:
            ledger = [e for e in ledger if period.contains(e.date)]
        if vehicle_id is not None:
            ledger = [e for e in ledger if e.vehicle_id == vehicle_id]
        ledger.sort(key=lambda e: (e.date, e.category.value, e.source_id or 0), reverse=True)
        return ledger

    @staticmethod
    def summarize(ledger: list[LedgerEntry]) -> ExpenseSummary:
        summary = ExpenseSummary(count=len(ledger))
        for entry in ledger:
            summary.by_category[entry.category.value] += entry.amount
        summary.by_category = {k: round(v, 2) for k, v in summary.by_category.items()}
        summary.total = round(sum(e.amount for e in ledger), 2)
        return summary

    @staticmethod
    def monthly(ledger: list[LedgerEntry], year: int) -> list[MonthBucket]:
        """12 cases mensuelles pour l'annee / 12 monthly buckets for the year."""
        buckets = [MonthBucket(month=m) for m in range(1, 13)]
        for entry in ledger:
            if entry.date.year != year:
                continue
            bucket = buckets[entry.date.month - 1]
            bucket.by_category[entry.category.value] += entry.amount
            bucket.total += entry.amount
        for bucket in buckets:
            bucket.total = round(bucket.total, 2)
            bucket.by_category = {k: round(v, 2) for k, v in bucket.by_category.items()}
        return buckets
