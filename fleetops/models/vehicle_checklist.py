"""Modele checklist engin / Machine checklist model.

Une checklist = les points de controle du materiel de levage a une date.
A checklist = the lifting gear check items of one machine on one date.
"""

import enum

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class ChecklistCondition(str, enum.Enum):
    """Etat d'un point de controle / Check item condition."""
    GOOD = "GOOD"
    DAMAGED = "DAMAGED"
    MISSING = "MISSING"


class Checklist(Base):
    """Checklist d'un engin / Machine checklist."""
    __tablename__ = "vehicle_checklists"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    responsible: Mapped[str] = mapped_column(String(100), nullable=False)
    general_observation: Mapped[str | None] = mapped_column(Text)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="checklists")
    items: Mapped[list["ChecklistItem"]] = relationship(
        back_populates="checklist", cascade="all, delete-orphan"
    )

    @property
    def has_issues(self) -> bool:
        """Au moins un point abime ou absent / At least one damaged or missing item."""
        return any(item.condition != ChecklistCondition.GOOD for item in self.items)

    def __repr__(self) -> str:
        return f"<Checklist {self.date} - vehicle {self.vehicle_id}>"


class ChecklistItem(Base):
    """Point de controle / Check item."""
    __tablename__ = "vehicle_checklist_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    checklist_id: Mapped[int] = mapped_column(
        ForeignKey("vehicle_checklists.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    is_checked: Mapped[bool] = mapped_column(Boolean, default=False)
    condition: Mapped[ChecklistCondition] = mapped_column(
        Enum(ChecklistCondition), default=ChecklistCondition.GOOD
    )
    observation: Mapped[str | None] = mapped_column(String(255))

    checklist: Mapped["Checklist"] = relationship(back_populates="items")
