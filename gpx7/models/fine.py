"""Modele amende / Traffic fine model."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gpx7.database import Base


class FineStatus(str, enum.Enum):
    """Statut de paiement / Payment status."""
    PENDING = "pending"
    PAID = "paid"
    RECURRING = "recurring"
    CANCELLED = "cancelled"


class FineEvent(Base):
    """Amende / Traffic fine."""
    __tablename__ = "fine_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # Conservee si le vehicule est supprime / Kept when the vehicle is deleted
    vehicle_id: Mapped[int | None] = mapped_column(
        ForeignKey("vehicles.id", ondelete="SET NULL"), index=True
    )
    vehicle_plate: Mapped[str] = mapped_column(String(16), nullable=False)
    infraction_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    due_date: Mapped[datetime | None] = mapped_column(DateTime)
    payment_status: Mapped[FineStatus] = mapped_column(
        Enum(FineStatus), default=FineStatus.PENDING, nullable=False
    )
    payment_date: Mapped[datetime | None] = mapped_column(DateTime)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime | None] = mapped_column(DateTime)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="fines")

    def __repr__(self) -> str:
        return f"<Fine {self.amount} {self.payment_status.value} - {self.vehicle_plate}>"
