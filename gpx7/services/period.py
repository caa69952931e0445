"""
Filtre de periode / Period filter.
Annee seule = annee civile ; annee + mois = mois civil ; sans annee = pas de filtre.
Year only = calendar year; year + month = calendar month; no year = unbounded.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from gpx7.errors import ValidationError

_ONE_TICK = timedelta(microseconds=1)


@dataclass(frozen=True)
class Period:
    """Intervalle ferme en UTC naif / Closed interval in naive UTC."""
    start: datetime
    end: datetime

    def contains(self, value: datetime | None) -> bool:
        return value is not None and self.start <= value <= self.end


def resolve_period(year: int | None, month: int | None = None) -> Period | None:
    """Construire la periode demandee / Build the requested period.

    Le mois sans annee est ignore / A month without a year is ignored.
    """
    if year is None:
        return None
    if not 1900 <= year <= 2999:
        raise ValidationError(f"Invalid year: {year}")
    if month is None:
        return Period(datetime(year, 1, 1), datetime(year + 1, 1, 1) - _ONE_TICK)
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if month == 12:
        next_month = datetime(year + 1, 1, 1)
    else:
        next_month = datetime(year, month + 1, 1)
    return Period(datetime(year, month, 1), next_month - _ONE_TICK)
