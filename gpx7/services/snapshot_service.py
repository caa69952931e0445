"""
Regles de mise a jour de l'instantane d'entretien / Maintenance snapshot update rules.

Mutations pures du Vehicle, sans acces base : l'appelant les applique dans la
meme transaction que l'insertion de l'evenement.
Pure Vehicle mutations with no store access: the caller applies them inside
the same transaction as the event insert.
"""

from datetime import datetime, timedelta

from gpx7.errors import ValidationError
from gpx7.models.maintenance import MaintenanceType


class SnapshotService:
    """Mise a jour de maintenance_info / maintenance_info updates."""

    @staticmethod
    def raise_odometer(vehicle, reading: int | None) -> bool:
        """Monter le compteur si la lecture est superieure / Raise odometer on a higher reading.

        Une lecture inferieure est ignoree / A lower reading is ignored.
        """
        if reading is None or reading <= (vehicle.odometer_current or 0):
            return False
        vehicle.odometer_current = reading
        return True

    @staticmethod
    def apply_maintenance(
        vehicle,
        maintenance_type: MaintenanceType,
        performed_at: datetime,
        odometer: int | None = None,
        next_oil_change_odometer: int | None = None,
        next_oil_change_date: datetime | None = None,
    ) -> bool:
        """Vidange : derniere/prochaine vidange / Oil change: last/next oil change.

        Les prochaines echeances viennent de la requete, jamais d'un intervalle.
        Next-due values come from the request, never from an interval.
        Retourne True si l'instantane a change / Returns True when the snapshot changed.
        """
        SnapshotService.raise_odometer(vehicle, odometer)
        if maintenance_type is not MaintenanceType.OIL_CHANGE:
            return False
        vehicle.last_oil_change_date = performed_at
        if odometer is not None:
            vehicle.last_oil_change_odometer = odometer
        if next_oil_change_odometer is not None:
            vehicle.next_oil_change_odometer = next_oil_change_odometer
        if next_oil_change_date is not None:
            vehicle.next_oil_change_date = next_oil_change_date
        return True

    @staticmethod
    def apply_checklist_start(vehicle, started_at: datetime) -> None:
        """Le vehicule sort des echeances des le demarrage / Vehicle leaves the due list on start."""
        vehicle.last_checklist_date = started_at
        if vehicle.checklist_frequency_days:
            vehicle.next_checklist_date = started_at + timedelta(days=vehicle.checklist_frequency_days)

    @staticmethod
    def apply_checklist_completion(vehicle, completed_at: datetime, odometer: int | None) -> None:
        if vehicle.checklist_frequency_days:
            vehicle.next_checklist_date = completed_at + timedelta(days=vehicle.checklist_frequency_days)
        SnapshotService.raise_odometer(vehicle, odometer)

    @staticmethod
    def apply_fueling(vehicle, odometer: int) -> None:
        """Le compteur d'un plein ne peut pas reculer / A fueling odometer cannot go back."""
        current = vehicle.odometer_current or 0
        if odometer < current:
            raise ValidationError(
                f"Odometer reading {odometer} km is lower than the current {current} km"
            )
        vehicle.odometer_current = odometer
