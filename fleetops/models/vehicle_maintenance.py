"""Modele entretien vehicule / Vehicle maintenance model."""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class MaintenanceType(str, enum.Enum):
    """Type d'entretien / Maintenance type."""
    CORRECTIVE = "CORRECTIVE"
    PREVENTIVE = "PREVENTIVE"
    SCHEDULED = "SCHEDULED"


class MaintenanceItemType(str, enum.Enum):
    """Ligne main d'oeuvre ou piece / Labor or part line."""
    LABOR = "LABOR"
    PART = "PART"


class MaintenanceRecord(Base):
    """Ordre de service entretien / Maintenance ticket."""
    __tablename__ = "vehicle_maintenance_records"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    maintenance_type: Mapped[MaintenanceType] = mapped_column(Enum(MaintenanceType), nullable=False)
    start_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    end_date: Mapped[str | None] = mapped_column(String(10))  # NULL = engin immobilise / machine down
    horometer: Mapped[int | None] = mapped_column(Integer)
    description: Mapped[str | None] = mapped_column(Text)

    # Couts / Costs
    labor_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    parts_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    total_cost: Mapped[float] = mapped_column(Numeric(12, 2), default=0)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="maintenances")
    items: Mapped[list["MaintenanceItem"]] = relationship(
        back_populates="record", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Maintenance {self.maintenance_type.value} - vehicle {self.vehicle_id}>"


class MaintenanceItem(Base):
    """Ligne d'un ordre de service / Maintenance ticket line."""
    __tablename__ = "vehicle_maintenance_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    record_id: Mapped[int] = mapped_column(
        ForeignKey("vehicle_maintenance_records.id", ondelete="CASCADE"), nullable=False
    )
    item_type: Mapped[MaintenanceItemType] = mapped_column(Enum(MaintenanceItemType), nullable=False)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[float] = mapped_column(Numeric(10, 2), default=1)
    unit_value: Mapped[float] = mapped_column(Numeric(12, 2), default=0)
    total_value: Mapped[float] = mapped_column(Numeric(12, 2), default=0)

    # Relations
    record: Mapped["MaintenanceRecord"] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return f"<MaintenanceItem {self.item_type.value} {self.description}>"
