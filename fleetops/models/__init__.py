"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que les relations et create_all les détectent.
Import all models here so relationships and create_all can resolve them.
"""

from fleetops.models.vehicle import Vehicle, VehicleStatus, VehicleType
from fleetops.models.contract import BillingMode, Contract, ContractStatus
from fleetops.models.contract_calendar import ContractCalendarOverride
from fleetops.models.vehicle_maintenance import (
    MaintenanceItem,
    MaintenanceItemType,
    MaintenanceRecord,
    MaintenanceType,
)
from fleetops.models.vehicle_fuel import FuelEntry
from fleetops.models.general_expense import GeneralExpense
from fleetops.models.vehicle_checklist import Checklist, ChecklistCondition, ChecklistItem

__all__ = [
    "Vehicle",
    "VehicleStatus",
    "VehicleType",
    "BillingMode",
    "Contract",
    "ContractStatus",
    "ContractCalendarOverride",
    "MaintenanceItem",
    "MaintenanceItemType",
    "MaintenanceRecord",
    "MaintenanceType",
    "FuelEntry",
    "GeneralExpense",
    "Checklist",
    "ChecklistCondition",
    "ChecklistItem",
]
