"""Tests des modèles / Model tests."""

from datetime import date
from decimal import Decimal

from fleetops.models.contract import BillingMode, Contract, ContractStatus
from fleetops.models.contract_calendar import ContractCalendarOverride
from fleetops.models.vehicle import Vehicle, VehicleStatus, VehicleType
from fleetops.models.vehicle_checklist import Checklist, ChecklistCondition, ChecklistItem
from fleetops.models.vehicle_maintenance import MaintenanceItemType, MaintenanceType
from fleetops.schemas.contract import ContractRead


def test_vehicle_repr():
    v = Vehicle(id=1, code="GD-01", vehicle_type=VehicleType.CRANE, model="STC 800T5")
    assert "GD-01" in repr(v)


def test_enums():
    assert VehicleType.MUNCK.value == "MUNCK"
    assert VehicleStatus.MAINTENANCE.value == "MAINTENANCE"
    assert BillingMode.MONTHLY_PACKAGE.value == "MONTHLY_PACKAGE"
    assert ContractStatus.FINISHED.value == "FINISHED"
    assert MaintenanceType.PREVENTIVE.value == "PREVENTIVE"
    assert MaintenanceItemType.PART.value == "PART"


def test_contract_orm_to_engine_input():
    contract = Contract(
        id=7,
        client_name="Construtora Alfa",
        vehicle_id=1,
        billing_mode=BillingMode.DAILY,
        status=ContractStatus.ACTIVE,
        start_date="2024-01-10",
        end_date=None,
        daily_rate=Decimal("1000"),
        monthly_rate=Decimal("0"),
        hours_per_day=8,
        working_days=[1, 2, 3, 4, 5],
        extra_hours_plain=Decimal("2"),
        extra_hours_plus30=Decimal("0"),
        extra_hours_plus100=Decimal("0"),
        calendar_overrides=[
            ContractCalendarOverride(date="2024-01-13", is_billable=True),
            ContractCalendarOverride(date="2024-01-15", is_billable=False),
        ],
    )
    read = ContractRead.model_validate(contract)
    assert read.start_date == date(2024, 1, 10)
    assert read.working_days == frozenset({1, 2, 3, 4, 5})
    assert read.included_dates == frozenset({date(2024, 1, 13)})
    assert read.excluded_dates == frozenset({date(2024, 1, 15)})
    assert read.extra_hours.plain == Decimal("2")
    assert read.demobilization is None


def test_contract_without_pattern_bills_every_day():
    contract = Contract(
        id=1, client_name="X", vehicle_id=1, billing_mode=BillingMode.DAILY, status=ContractStatus.ACTIVE,
        start_date="2024-01-01", daily_rate=Decimal("1"), monthly_rate=Decimal("0"),
        hours_per_day=8, working_days=None, calendar_overrides=[],
    )
    assert ContractRead.model_validate(contract).working_days == frozenset(range(7))


def test_contract_demobilization_view():
    contract = Contract(
        id=1, client_name="X", vehicle_id=1, billing_mode=BillingMode.DAILY, status=ContractStatus.ACTIVE,
        start_date="2024-01-01", daily_rate=Decimal("1"), monthly_rate=Decimal("0"),
        hours_per_day=8, demob_distance_km=Decimal("100"), demob_price_per_km=Decimal("5"),
        demob_total_value=Decimal("500"), calendar_overrides=[],
    )
    read = ContractRead.model_validate(contract)
    assert read.demobilization.total_value == Decimal("500")


def test_checklist_flags_damaged_or_missing_items():
    checklist = Checklist(
        id=3, vehicle_id=1, date="2024-01-15", responsible="Joao",
        items=[
            ChecklistItem(name="Cintas", condition=ChecklistCondition.GOOD),
            ChecklistItem(name="Anilhas", condition=ChecklistCondition.GOOD),
        ],
    )
    assert not checklist.has_issues
    assert "2024-01-15" in repr(checklist)

    checklist.items.append(ChecklistItem(name="Pneus", condition=ChecklistCondition.MISSING))
    assert checklist.has_issues
