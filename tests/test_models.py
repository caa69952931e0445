"""Tests des modèles / Model tests."""

from gpx7.models.checklist import ChecklistItemStatus, ChecklistStatus
from gpx7.models.fine import FineStatus
from gpx7.models.maintenance import MaintenanceEvent, MaintenanceType
from gpx7.models.vehicle import Vehicle
from gpx7.utils.text import fold, normalize_plate


def test_vehicle_repr():
    v = Vehicle(id=1, plate="ABC1D23", make="Fiat", model="Strada")
    assert "ABC1D23" in repr(v)


def test_maintenance_repr():
    m = MaintenanceEvent(id=1, vehicle_id=3, maintenance_type=MaintenanceType.BRAKES)
    assert "BRAKES" in repr(m)


def test_enums():
    assert MaintenanceType.OIL_CHANGE.value == "OIL_CHANGE"
    assert ChecklistStatus.PENDING.value == "pending"
    assert ChecklistItemStatus.NOT_APPLICABLE.value == "not_applicable"
    assert FineStatus.RECURRING.value == "recurring"


def test_maintenance_type_from_text():
    assert MaintenanceType.from_text("Troca de Óleo") is MaintenanceType.OIL_CHANGE
    assert MaintenanceType.from_text("oil change") is MaintenanceType.OIL_CHANGE
    assert MaintenanceType.from_text("brakes") is MaintenanceType.BRAKES
    assert MaintenanceType.from_text("filter-change") is MaintenanceType.FILTER_CHANGE
    assert MaintenanceType.from_text("Lavagem") is MaintenanceType.GENERAL


def test_normalize_plate():
    assert normalize_plate("abc-1d23") == "ABC1D23"
    assert normalize_plate(" xyz 9876 ") == "XYZ9876"
    assert normalize_plate("--") == ""


def test_fold():
    assert fold("Óleo") == "Oleo"
    assert fold("freio") == "freio"
