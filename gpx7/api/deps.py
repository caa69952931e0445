"""
Dépendances communes / Shared route dependencies.
Injectées dans les routes via Depends().
"""

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gpx7.database import get_db
from gpx7.services.event_recorder import EventRecorder
from gpx7.services.period import Period, resolve_period


def get_recorder(db: AsyncSession = Depends(get_db)) -> EventRecorder:
    """Unites d'ecriture liees a la session de la requete / Write units bound to the request session."""
    return EventRecorder(db)


def get_period(
    year: int | None = Query(None, description="Annee civile / Calendar year"),
    month: int | None = Query(None, description="Mois 1-12, exige year / Month 1-12, requires year"),
) -> Period | None:
    """Filtre de periode des rapports / Report period filter."""
    return resolve_period(year, month)
