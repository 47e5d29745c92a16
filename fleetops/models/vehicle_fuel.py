"""Modele suivi carburant / Fuel tracking model."""

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class FuelEntry(Base):
    """Entree carburant / Fuel entry."""
    __tablename__ = "vehicle_fuel_entries"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    fuel_type: Mapped[str] = mapped_column(String(30), default="DIESEL")
    liters: Mapped[float] = mapped_column(Numeric(8, 2), nullable=False)
    price_per_liter: Mapped[float] = mapped_column(Numeric(8, 4), nullable=False)
    total_value: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    odometer: Mapped[int | None] = mapped_column(Integer)
    supplier: Mapped[str | None] = mapped_column(String(100))
    payment_method: Mapped[str | None] = mapped_column(String(50))

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="fuel_entries")

    def __repr__(self) -> str:
        return f"<FuelEntry {self.date} - {self.liters}L - vehicle {self.vehicle_id}>"
