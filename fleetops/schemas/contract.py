"""Schémas Contrat / Contract schemas.

ContractBase est aussi l'entree du moteur de facturation : dates typees et
ensembles de dates immuables, jamais de chaines brutes.
ContractBase is also the billing engine input: typed dates and immutable
date sets, never raw strings.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from fleetops.config import settings
from fleetops.models.contract import BillingMode, ContractStatus

# 0=dimanche .. 6=samedi / 0=Sunday .. 6=Saturday
ALL_WEEKDAYS: frozenset[int] = frozenset(range(7))


class ExtraHours(BaseModel):
    """Heures supplementaires cumulees par palier / Cumulative overtime hours per tier."""
    plain: Decimal = Field(default=Decimal("0"), ge=0)
    plus30: Decimal = Field(default=Decimal("0"), ge=0)
    plus100: Decimal = Field(default=Decimal("0"), ge=0)


class Demobilization(BaseModel):
    """Frais de demobilisation (une seule fois) / One-time demobilization fee."""
    distance_km: Decimal = Field(default=Decimal("0"), ge=0)
    price_per_km: Decimal = Field(default=Decimal("0"), ge=0)
    total_value: Decimal | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _default_total(self) -> "Demobilization":
        if self.total_value is None:
            self.total_value = self.distance_km * self.price_per_km
        return self


class ContractBase(BaseModel):
    client_name: str
    vehicle_id: int
    billing_mode: BillingMode = BillingMode.MONTHLY_PACKAGE
    start_date: date
    end_date: date | None = None
    daily_rate: Decimal = Field(ge=0)
    monthly_rate: Decimal = Field(default=Decimal("0"), ge=0)
    hours_per_day: int = Field(default=settings.DEFAULT_HOURS_PER_DAY, gt=0)
    working_days: frozenset[int] = ALL_WEEKDAYS
    excluded_dates: frozenset[date] = frozenset()
    included_dates: frozenset[date] = frozenset()
    extra_hours: ExtraHours = Field(default_factory=ExtraHours)
    demobilization: Demobilization | None = None

    @field_validator("working_days", mode="before")
    @classmethod
    def _default_working_days(cls, value):
        # Non renseigne = tous les jours / Unset = every day
        return ALL_WEEKDAYS if value is None else value

    @field_validator("working_days")
    @classmethod
    def _check_weekdays(cls, value: frozenset[int]) -> frozenset[int]:
        invalid = sorted(d for d in value if d not in ALL_WEEKDAYS)
        if invalid:
            raise ValueError(f"weekday indices must be within 0..6, got {invalid}")
        return value

    @model_validator(mode="after")
    def _check_period_and_overrides(self) -> "ContractBase":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        # Une date a la fois incluse et exclue : l'inclusion l'emporte /
        # A date both included and excluded: inclusion wins
        overlap = self.included_dates & self.excluded_dates
        if overlap:
            self.excluded_dates = self.excluded_dates - overlap
        return self


class ContractCreate(ContractBase):
    pass


class ContractUpdate(BaseModel):
    client_name: str | None = None
    vehicle_id: int | None = None
    billing_mode: BillingMode | None = None
    start_date: date | None = None
    end_date: date | None = None
    daily_rate: Decimal | None = Field(default=None, ge=0)
    monthly_rate: Decimal | None = Field(default=None, ge=0)
    hours_per_day: int | None = Field(default=None, gt=0)
    working_days: frozenset[int] | None = None
    extra_hours: ExtraHours | None = None
    demobilization: Demobilization | None = None

    @field_validator(
        "client_name", "vehicle_id", "billing_mode", "start_date",
        "daily_rate", "monthly_rate", "hours_per_day", "extra_hours",
    )
    @classmethod
    def _reject_null(cls, value, info: ValidationInfo):
        # Omettre le champ le laisse intact, null est refuse /
        # Omitting the field keeps it, null is rejected
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ContractFinish(BaseModel):
    end_date: date


class ContractRead(ContractBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    status: ContractStatus = ContractStatus.ACTIVE


class RevenueRead(BaseModel):
    """Detail du chiffre d'affaires d'un contrat / Contract revenue breakdown."""
    contract_id: int
    window_start: date
    window_end: date
    billable_days: int
    base: Decimal
    overtime: Decimal
    demobilization: Decimal
    total: Decimal


class BillableDatesRead(BaseModel):
    contract_id: int
    window_start: date
    window_end: date
    dates: list[date] = []
