"""
Service de consommation carburant / Fuel economy service.

Chaine les pleins consecutifs d'un meme vehicule en trajets :
distance = compteur courant - compteur precedent, consommation = distance / litres.
Chains consecutive fuelings of the same vehicle into trips:
distance = current odometer - previous odometer, consumption = distance / liters.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

log = logging.getLogger(__name__)


@dataclass
class FuelTrip:
    """Plein + trajet calcule / Fueling + computed trip."""
    id: int | None
    vehicle_id: int
    plate: str | None
    fueled_at: datetime
    odometer: int
    liters: float
    price_per_liter: float
    total_cost: float
    station: str | None = None
    distance: float | None = None
    consumption: float | None = None


@dataclass
class FuelSummary:
    total_cost: float = 0.0
    total_liters: float = 0.0
    total_distance: float = 0.0
    average_consumption: float | None = None
    cost_per_km: float | None = None
    average_price_per_liter: float | None = None


@dataclass
class FuelReport:
    trips: list[FuelTrip] = field(default_factory=list)
    summary: FuelSummary = field(default_factory=FuelSummary)


def _ratio(numerator: float, denominator: float, digits: int) -> float | None:
    if denominator <= 0:
        return None
    return round(numerator / denominator, digits)


class FuelEconomyService:
    """Calcul consommation / Fuel economy computation."""

    @staticmethod
    def analyze(fuelings) -> FuelReport:
        """Analyser des pleins (deja filtres) / Analyze (already filtered) fuelings.

        Un compteur qui ne progresse pas (remise a zero, saisie desordonnee) donne
        un trajet nul sans erreur ; la lecture devient quand meme la reference.
        An odometer that does not increase (reset, out-of-order entry) yields a
        null trip without error; the reading still becomes the new baseline.
        """
        trips = [
            FuelTrip(
                id=f.id,
                vehicle_id=f.vehicle_id,
                plate=f.vehicle_plate,
                fueled_at=f.fueled_at,
                odometer=int(f.odometer),
                liters=float(f.liters or 0),
                price_per_liter=float(f.price_per_liter or 0),
                total_cost=float(f.total_cost or 0),
                station=f.station,
            )
            for f in fuelings
        ]
        trips.sort(key=lambda t: (t.vehicle_id, t.fueled_at, t.odometer))

        last_odometer: dict[int, int] = {}
        total_cost = 0.0
        total_liters = 0.0
        total_distance = 0.0

        for trip in trips:
            previous = last_odometer.get(trip.vehicle_id)
            if previous is not None and trip.odometer > previous:
                distance = trip.odometer - previous
                trip.distance = round(distance, 2)
                # Totaux sur les trajets valides seulement / Totals over valid trips only
                total_distance += distance
                total_cost += trip.total_cost
                total_liters += trip.liters
                if trip.liters > 0:
                    trip.consumption = round(distance / trip.liters, 2)
            elif previous is not None:
                log.debug(
                    "Odometer did not increase for vehicle %s (%s -> %s), trip ignored",
                    trip.vehicle_id, previous, trip.odometer,
                )
            last_odometer[trip.vehicle_id] = trip.odometer

        summary = FuelSummary(
            total_cost=round(total_cost, 2),
            total_liters=round(total_liters, 2),
            total_distance=round(total_distance, 2),
            average_consumption=_ratio(total_distance, total_liters, 2),
            cost_per_km=_ratio(total_cost, total_distance, 2),
            average_price_per_liter=_ratio(total_cost, total_liters, 3),
        )

        # Plus recent d'abord pour l'affichage / Newest first for display
        trips.sort(key=lambda t: (t.fueled_at, t.odometer), reverse=True)
        return FuelReport(trips=trips, summary=summary)
