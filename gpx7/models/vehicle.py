"""Modele Vehicule / Vehicle model.

Le vehicule porte un instantane d'entretien (maintenance_info) mis a jour
a chaque evenement enregistre.
The vehicle carries a maintenance snapshot (maintenance_info) updated
whenever an event is recorded against it.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gpx7.database import Base


class Vehicle(Base):
    """Vehicule du parc / Fleet vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # --- Identification ---
    plate: Mapped[str] = mapped_column(String(16), unique=True, nullable=False, index=True)
    make: Mapped[str] = mapped_column(String(60), nullable=False)
    model: Mapped[str] = mapped_column(String(60), nullable=False)
    manufacture_year: Mapped[int] = mapped_column(Integer, nullable=False)
    model_year: Mapped[int] = mapped_column(Integer, nullable=False)
    color: Mapped[str | None] = mapped_column(String(30))
    chassis: Mapped[str | None] = mapped_column(String(30))
    registration_number: Mapped[str | None] = mapped_column(String(30))

    # --- Kilometrage / Mileage ---
    odometer_current: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # --- Instantane entretien / Maintenance snapshot ---
    next_oil_change_odometer: Mapped[int | None] = mapped_column(Integer)
    next_oil_change_date: Mapped[datetime | None] = mapped_column(DateTime)
    checklist_frequency_days: Mapped[int | None] = mapped_column(Integer)
    next_checklist_date: Mapped[datetime | None] = mapped_column(DateTime)
    last_oil_change_odometer: Mapped[int | None] = mapped_column(Integer)
    last_oil_change_date: Mapped[datetime | None] = mapped_column(DateTime)
    last_checklist_date: Mapped[datetime | None] = mapped_column(DateTime)

    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)

    # --- Relations (suppression en cascade / cascading delete) ---
    maintenances: Mapped[list["MaintenanceEvent"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )
    checklists: Mapped[list["ChecklistEvent"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )
    fuelings: Mapped[list["FuelingEvent"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan"
    )
    fines: Mapped[list["FineEvent"]] = relationship(back_populates="vehicle")

    def __repr__(self) -> str:
        return f"<Vehicle {self.plate} - {self.make} {self.model}>"
