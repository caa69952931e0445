"""Modele entretien vehicule / Vehicle maintenance model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gpx7.database import Base
from gpx7.utils.text import fold


class MaintenanceType(str, enum.Enum):
    """Type d'entretien / Maintenance type."""
    OIL_CHANGE = "OIL_CHANGE"
    FILTER_CHANGE = "FILTER_CHANGE"
    TIRES = "TIRES"
    BRAKES = "BRAKES"
    ALIGNMENT = "ALIGNMENT"
    ELECTRICAL = "ELECTRICAL"
    INSPECTION = "INSPECTION"
    GENERAL = "GENERAL"

    @classmethod
    def from_text(cls, text: str) -> "MaintenanceType":
        """Classer un libelle libre / Classify a free-text label.

        "Troca de Óleo", "oil change" -> OIL_CHANGE ; nom connu -> ce type ; sinon GENERAL.
        """
        folded = fold(text).strip().lower()
        if "oil" in folded or "oleo" in folded:
            return cls.OIL_CHANGE
        key = folded.upper().replace(" ", "_").replace("-", "_")
        if key in cls.__members__:
            return cls[key]
        return cls.GENERAL


class MaintenanceEvent(Base):
    """Entretien realise / Performed maintenance."""
    __tablename__ = "maintenance_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False, index=True)
    vehicle_plate: Mapped[str] = mapped_column(String(16), nullable=False)
    maintenance_type: Mapped[MaintenanceType] = mapped_column(Enum(MaintenanceType), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    performed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    cost: Mapped[float | None] = mapped_column(Numeric(10, 2))
    odometer: Mapped[int | None] = mapped_column(Integer)
    performed_by: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="maintenances")

    def __repr__(self) -> str:
        return f"<Maintenance {self.maintenance_type.value} - vehicle {self.vehicle_id}>"
