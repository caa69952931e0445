"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que Base.metadata les connaisse.
Import all models here so Base.metadata knows about them.
"""

from gpx7.models.vehicle import Vehicle
from gpx7.models.maintenance import MaintenanceEvent, MaintenanceType
from gpx7.models.checklist import ChecklistEvent, ChecklistItem, ChecklistItemStatus, ChecklistStatus
from gpx7.models.fueling import FuelingEvent
from gpx7.models.fine import FineEvent, FineStatus

__all__ = [
    "Vehicle",
    "MaintenanceEvent",
    "MaintenanceType",
    "ChecklistEvent",
    "ChecklistItem",
    "ChecklistItemStatus",
    "ChecklistStatus",
    "FuelingEvent",
    "FineEvent",
    "FineStatus",
]
