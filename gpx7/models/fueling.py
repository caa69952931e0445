"""Modele suivi carburant / Fuel tracking model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gpx7.database import Base


class FuelingEvent(Base):
    """Plein de carburant / Fueling."""
    __tablename__ = "fueling_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False, index=True)
    vehicle_plate: Mapped[str] = mapped_column(String(16), nullable=False)
    fueled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    odometer: Mapped[int] = mapped_column(Integer, nullable=False)
    liters: Mapped[float] = mapped_column(Numeric(8, 2), nullable=False)
    price_per_liter: Mapped[float] = mapped_column(Numeric(6, 3), nullable=False)
    total_cost: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    station: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="fuelings")

    def __repr__(self) -> str:
        return f"<Fueling {self.fueled_at:%Y-%m-%d} - {self.liters}L - vehicle {self.vehicle_id}>"
