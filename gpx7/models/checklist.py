"""Modele checklist vehicule / Vehicle checklist model.

Une checklist est creee en attente (start) puis finalisee une seule fois (complete).
A checklist is created pending (start) then completed exactly once (complete).
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gpx7.database import Base


class ChecklistStatus(str, enum.Enum):
    """Statut checklist / Checklist status."""
    PENDING = "pending"
    COMPLETED = "completed"


class ChecklistItemStatus(str, enum.Enum):
    """Resultat d'un point de controle / Check item result."""
    OK = "ok"
    ATTENTION = "attention"
    FAILED = "failed"
    NOT_APPLICABLE = "not_applicable"


class ChecklistEvent(Base):
    """Checklist vehicule / Vehicle checklist."""
    __tablename__ = "checklist_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False, index=True)
    vehicle_plate: Mapped[str] = mapped_column(String(16), nullable=False)
    status: Mapped[ChecklistStatus] = mapped_column(
        Enum(ChecklistStatus), default=ChecklistStatus.PENDING, nullable=False
    )
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime)
    odometer: Mapped[int | None] = mapped_column(Integer)
    performed_by: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="checklists")
    items: Mapped[list["ChecklistItem"]] = relationship(
        back_populates="checklist", cascade="all, delete-orphan", order_by="ChecklistItem.id"
    )

    def __repr__(self) -> str:
        return f"<Checklist {self.id} - {self.status.value} - vehicle {self.vehicle_id}>"


class ChecklistItem(Base):
    """Point de controle / Check item."""
    __tablename__ = "checklist_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    checklist_id: Mapped[int] = mapped_column(ForeignKey("checklist_events.id"), nullable=False)
    label: Mapped[str] = mapped_column(String(150), nullable=False)
    status: Mapped[ChecklistItemStatus] = mapped_column(Enum(ChecklistItemStatus), nullable=False)
    comment: Mapped[str | None] = mapped_column(Text)

    # Relations
    checklist: Mapped["ChecklistEvent"] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return f"<ChecklistItem {self.label} - {self.status.value}>"
