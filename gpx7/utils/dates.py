"""Utilitaires de dates UTC / UTC date helpers.

Toutes les dates sont stockees en UTC naif / Every datetime is stored as naive UTC.
"""

from datetime import date, datetime, time, timezone


def utcnow() -> datetime:
    """Instant courant en UTC naif / Current instant as naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime | date | None) -> datetime | None:
    """Convertir en UTC naif / Convert to naive UTC.

    Une date simple devient minuit UTC / A plain date becomes UTC midnight.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def start_of_day(value: datetime | date) -> datetime:
    """Minuit du jour donne / Midnight of the given day."""
    if isinstance(value, datetime):
        value = value.date()
    return datetime.combine(value, time.min)


def start_of_today() -> datetime:
    """Minuit UTC du jour / Today's UTC midnight."""
    return start_of_day(utcnow())
