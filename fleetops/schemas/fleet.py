"""Schemas gestion de flotte / Fleet management schemas (maintenance, carburant, depenses, checklists)."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from fleetops.models.vehicle_checklist import ChecklistCondition
from fleetops.models.vehicle_maintenance import MaintenanceItemType, MaintenanceType


# --- Maintenance ---

class MaintenanceItemCreate(BaseModel):
    item_type: MaintenanceItemType
    description: str
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit_value: Decimal = Field(default=Decimal("0"), ge=0)


class MaintenanceItemRead(MaintenanceItemCreate):
    id: int
    total_value: Decimal

    model_config = {"from_attributes": True}


class MaintenanceRecordCreate(BaseModel):
    vehicle_id: int
    maintenance_type: MaintenanceType
    start_date: date
    end_date: date | None = None
    horometer: int | None = Field(default=None, ge=0)
    description: str | None = None
    # Ignores si des lignes sont fournies / Ignored when item lines are given
    labor_cost: Decimal = Field(default=Decimal("0"), ge=0)
    parts_cost: Decimal = Field(default=Decimal("0"), ge=0)
    items: list[MaintenanceItemCreate] = []

    @model_validator(mode="after")
    def _check_period(self) -> "MaintenanceRecordCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class MaintenanceRecordRead(BaseModel):
    id: int
    vehicle_id: int
    maintenance_type: MaintenanceType
    start_date: date
    end_date: date | None = None
    horometer: int | None = None
    description: str | None = None
    labor_cost: Decimal
    parts_cost: Decimal
    total_cost: Decimal
    items: list[MaintenanceItemRead] = []

    model_config = {"from_attributes": True}


class MaintenanceClose(BaseModel):
    end_date: date


# --- Fuel ---

class FuelEntryCreate(BaseModel):
    vehicle_id: int
    date: date
    fuel_type: str = "DIESEL"
    liters: Decimal = Field(gt=0)
    price_per_liter: Decimal = Field(ge=0)
    odometer: int | None = Field(default=None, ge=0)
    supplier: str | None = None
    payment_method: str | None = None


class FuelEntryRead(FuelEntryCreate):
    id: int
    total_value: Decimal

    model_config = {"from_attributes": True}


# --- General expenses ---

class GeneralExpenseCreate(BaseModel):
    vehicle_id: int | None = None
    date: date
    category: str
    description: str | None = None
    value: Decimal = Field(ge=0)


class GeneralExpenseRead(GeneralExpenseCreate):
    id: int

    model_config = {"from_attributes": True}


# --- Checklists ---

# Points controles par defaut sur les engins de levage / Default lifting gear check items
DEFAULT_CHECKLIST_ITEMS = (
    "Cintas",
    "Anilhas",
    "Cabos de Aço",
    "Ferramentas Gerais",
    "Nível de Óleo",
    "Pneus",
    "Luzes/Sinalização",
)


class ChecklistItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    is_checked: bool = False
    condition: ChecklistCondition = ChecklistCondition.GOOD
    observation: str | None = None


class ChecklistItemRead(ChecklistItemCreate):
    id: int

    model_config = {"from_attributes": True}


class ChecklistCreate(BaseModel):
    vehicle_id: int
    date: date
    responsible: str = Field(min_length=1, max_length=100)
    general_observation: str | None = None
    items: list[ChecklistItemCreate] = []

    @model_validator(mode="after")
    def _default_items(self) -> "ChecklistCreate":
        if not self.items:
            self.items = [ChecklistItemCreate(name=name) for name in DEFAULT_CHECKLIST_ITEMS]
        return self


class ChecklistRead(BaseModel):
    id: int
    vehicle_id: int
    date: date
    responsible: str
    general_observation: str | None = None
    has_issues: bool
    items: list[ChecklistItemRead] = []

    model_config = {"from_attributes": True}
