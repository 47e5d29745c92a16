"""Modele depenses generales / General expense model."""

from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class GeneralExpense(Base):
    """Depense diverse, rattachee ou non a un engin / Misc expense, optionally tied to a machine."""
    __tablename__ = "general_expenses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int | None] = mapped_column(ForeignKey("vehicles.id"))
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    value: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="expenses")

    def __repr__(self) -> str:
        return f"<GeneralExpense {self.category} {self.value} - vehicle {self.vehicle_id}>"
