"""Modele Exceptions de calendrier contrat / Contract calendar override model."""

from sqlalchemy import Boolean, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleetops.database import Base


class ContractCalendarOverride(Base):
    """Exception de facturation par date / Date-based billing override.

    Convention : le calendrier hebdomadaire (working_days) s'applique par defaut.
    On ne stocke que les dates qui s'en ecartent :
    is_billable=True  -> date incluse (ex. dimanche travaille),
    is_billable=False -> date exclue (ex. jour de pluie, ferie).
    Convention: the weekly pattern (working_days) applies by default.
    Only dates that deviate from it are stored.
    """
    __tablename__ = "contract_calendar_overrides"
    __table_args__ = (UniqueConstraint("contract_id", "date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    contract_id: Mapped[int] = mapped_column(
        ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    is_billable: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relations
    contract: Mapped["Contract"] = relationship(back_populates="calendar_overrides")

    def __repr__(self) -> str:
        return f"<ContractCalendarOverride contract={self.contract_id} date={self.date} billable={self.is_billable}>"
