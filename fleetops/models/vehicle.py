"""Modele Vehicule / Vehicle model.

Engin du parc (grue, munck, carreta...) loue via des contrats.
Fleet machine (crane, knuckle-boom truck, trailer...) rented out through contracts.
"""

import enum

from sqlalchemy import Boolean, Enum, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class VehicleType(str, enum.Enum):
    """Type d'engin / Machine type."""
    MUNCK = "MUNCK"
    CRANE = "CRANE"
    TRAILER = "TRAILER"
    FLATBED = "FLATBED"
    AERIAL_PLATFORM = "AERIAL_PLATFORM"
    OTHER = "OTHER"


class VehicleStatus(str, enum.Enum):
    """Statut operationnel / Operational status."""
    OPERATING = "OPERATING"
    STOPPED = "STOPPED"
    MAINTENANCE = "MAINTENANCE"
    RESERVED = "RESERVED"


class Vehicle(Base):
    """Vehicule du parc / Fleet vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # --- Identification ---
    code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    vehicle_type: Mapped[VehicleType] = mapped_column(Enum(VehicleType), nullable=False)
    brand: Mapped[str | None] = mapped_column(String(50))
    model: Mapped[str | None] = mapped_column(String(50))
    year: Mapped[int | None] = mapped_column(Integer)
    plate: Mapped[str | None] = mapped_column(String(20), unique=True)
    chassis: Mapped[str | None] = mapped_column(String(30))
    capacity: Mapped[str | None] = mapped_column(String(30))

    # --- Statut / Status ---
    status: Mapped[VehicleStatus] = mapped_column(
        Enum(VehicleStatus), default=VehicleStatus.STOPPED
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)  # suppression logique / soft delete

    # --- Tarifs par defaut proposes a la creation d'un contrat / Default contract rates ---
    default_daily_rate: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    default_monthly_rate: Mapped[float] = mapped_column(Numeric(12, 2), default=0)

    # --- Relations ---
    contracts: Mapped[list["Contract"]] = relationship(back_populates="vehicle")
    maintenances: Mapped[list["MaintenanceRecord"]] = relationship(back_populates="vehicle")
    fuel_entries: Mapped[list["FuelEntry"]] = relationship(back_populates="vehicle")
    expenses: Mapped[list["GeneralExpense"]] = relationship(back_populates="vehicle")
    checklists: Mapped[list["Checklist"]] = relationship(back_populates="vehicle")

    def __repr__(self) -> str:
        return f"<Vehicle {self.code} - {self.model or self.plate}>"
