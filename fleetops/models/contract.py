"""Modele Contrat de location / Rental contract model."""

import enum

from sqlalchemy import JSON, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class BillingMode(str, enum.Enum):
    """Mode de facturation / Billing mode.

    Les deux modes facturent le tarif journalier par jour facturable.
    Both modes charge the daily rate per billable day.
    """
    DAILY = "DAILY"
    MONTHLY_PACKAGE = "MONTHLY_PACKAGE"


class ContractStatus(str, enum.Enum):
    """Statut du contrat / Contract status."""
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


class Contract(Base):
    """1 contrat = 1 engin loue a 1 client / 1 contract = 1 machine rented to 1 client."""
    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_name: Mapped[str] = mapped_column(String(150), nullable=False)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id"), nullable=False)
    billing_mode: Mapped[BillingMode] = mapped_column(
        Enum(BillingMode), default=BillingMode.MONTHLY_PACKAGE
    )
    status: Mapped[ContractStatus] = mapped_column(
        Enum(ContractStatus), default=ContractStatus.ACTIVE
    )

    # Periode / Period
    start_date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    end_date: Mapped[str | None] = mapped_column(String(10))  # NULL = en cours / in progress

    # Tarifs / Rates
    daily_rate: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    monthly_rate: Mapped[float] = mapped_column(Numeric(12, 2), default=0)  # affichage / display only
    hours_per_day: Mapped[int] = mapped_column(Integer, default=8)

    # Calendrier de base : indices 0=dimanche..6=samedi / Base pattern: 0=Sunday..6=Saturday
    working_days: Mapped[list[int] | None] = mapped_column(JSON)

    # Heures supplementaires cumulees / Cumulative overtime hours
    extra_hours_plain: Mapped[float] = mapped_column(Numeric(8, 2), default=0)
    extra_hours_plus30: Mapped[float] = mapped_column(Numeric(8, 2), default=0)
    extra_hours_plus100: Mapped[float] = mapped_column(Numeric(8, 2), default=0)

    # Demobilisation / Demobilization
    demob_distance_km: Mapped[float | None] = mapped_column(Numeric(10, 2))
    demob_price_per_km: Mapped[float | None] = mapped_column(Numeric(10, 2))
    demob_total_value: Mapped[float | None] = mapped_column(Numeric(12, 2))

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="contracts")
    calendar_overrides: Mapped[list["ContractCalendarOverride"]] = relationship(
        back_populates="contract", cascade="all, delete-orphan"
    )

    # --- Vues lues par les schemas Pydantic (from_attributes) / Views read by Pydantic schemas ---

    @property
    def included_dates(self) -> list[str]:
        return sorted(o.date for o in self.calendar_overrides if o.is_billable)

    @property
    def excluded_dates(self) -> list[str]:
        return sorted(o.date for o in self.calendar_overrides if not o.is_billable)

    @property
    def extra_hours(self) -> dict:
        return {
            "plain": self.extra_hours_plain or 0,
            "plus30": self.extra_hours_plus30 or 0,
            "plus100": self.extra_hours_plus100 or 0,
        }

    @property
    def demobilization(self) -> dict | None:
        if self.demob_total_value is None and not (self.demob_distance_km and self.demob_price_per_km):
            return None
        return {
            "distance_km": self.demob_distance_km or 0,
            "price_per_km": self.demob_price_per_km or 0,
            "total_value": self.demob_total_value,
        }

    def __repr__(self) -> str:
        return f"<Contract {self.id} - {self.client_name}>"
