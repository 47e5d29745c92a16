"""Routes gestion de flotte / Fleet management routes (maintenance, carburant, depenses, checklists)."""

import logging
from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fleetops.database import get_db
from fleetops.models.general_expense import GeneralExpense
from fleetops.models.vehicle import Vehicle, VehicleStatus
from fleetops.models.vehicle_checklist import Checklist, ChecklistItem
from fleetops.models.vehicle_fuel import FuelEntry
from fleetops.models.vehicle_maintenance import MaintenanceItem, MaintenanceItemType, MaintenanceRecord
from fleetops.schemas.fleet import (
    ChecklistCreate,
    ChecklistRead,
    FuelEntryCreate,
    FuelEntryRead,
    GeneralExpenseCreate,
    GeneralExpenseRead,
    MaintenanceClose,
    MaintenanceRecordCreate,
    MaintenanceRecordRead,
)
from fleetops.services.revenue_calculator import to_money

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_vehicle(db: AsyncSession, vehicle_id: int) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


async def _load_maintenance(db: AsyncSession, record_id: int) -> MaintenanceRecord:
    result = await db.execute(
        select(MaintenanceRecord)
        .where(MaintenanceRecord.id == record_id)
        .options(selectinload(MaintenanceRecord.items))
    )
    record = result.scalar_one_or_none()
    if not record:
        raise HTTPException(status_code=404, detail="Maintenance record not found")
    return record


# ─── Maintenance CRUD ───

@router.get("/maintenance/", response_model=list[MaintenanceRecordRead])
async def list_maintenance(
    vehicle_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = (
        select(MaintenanceRecord)
        .options(selectinload(MaintenanceRecord.items))
        .order_by(MaintenanceRecord.start_date.desc(), MaintenanceRecord.id.desc())
    )
    if vehicle_id is not None:
        query = query.where(MaintenanceRecord.vehicle_id == vehicle_id)
    if date_from is not None:
        query = query.where(MaintenanceRecord.start_date >= date_from.isoformat())
    if date_to is not None:
        query = query.where(MaintenanceRecord.start_date <= date_to.isoformat())
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/maintenance/", response_model=MaintenanceRecordRead, status_code=201)
async def create_maintenance(data: MaintenanceRecordCreate, db: AsyncSession = Depends(get_db)):
    """
    Ouvrir un ordre de service / Open a maintenance ticket.
    Sans date de fin l'engin passe en MAINTENANCE, sinon il reste en operation.
    Without an end date the machine goes to MAINTENANCE, otherwise back to OPERATING.
    """
    vehicle = await _get_vehicle(db, data.vehicle_id)

    items = [
        MaintenanceItem(
            item_type=item.item_type,
            description=item.description,
            quantity=item.quantity,
            unit_value=item.unit_value,
            total_value=to_money(item.quantity * item.unit_value),
        )
        for item in data.items
    ]
    if items:
        labor = sum((i.total_value for i in items if i.item_type == MaintenanceItemType.LABOR), Decimal("0"))
        parts = sum((i.total_value for i in items if i.item_type == MaintenanceItemType.PART), Decimal("0"))
    else:
        labor, parts = data.labor_cost, data.parts_cost

    record = MaintenanceRecord(
        vehicle_id=data.vehicle_id,
        maintenance_type=data.maintenance_type,
        start_date=data.start_date.isoformat(),
        end_date=data.end_date.isoformat() if data.end_date else None,
        horometer=data.horometer,
        description=data.description,
        labor_cost=to_money(labor),
        parts_cost=to_money(parts),
        total_cost=to_money(labor + parts),
        items=items,
    )
    db.add(record)
    vehicle.status = VehicleStatus.MAINTENANCE if data.end_date is None else VehicleStatus.OPERATING
    await db.flush()

    logger.info("Maintenance %s opened for vehicle %s (%s)", record.id, vehicle.code, vehicle.status.value)
    return await _load_maintenance(db, record.id)


@router.post("/maintenance/{record_id}/close", response_model=MaintenanceRecordRead)
async def close_maintenance(record_id: int, data: MaintenanceClose, db: AsyncSession = Depends(get_db)):
    """Cloturer un ordre de service (engin -> en operation) / Close a ticket (machine -> operating)."""
    record = await _load_maintenance(db, record_id)
    if record.end_date is not None:
        raise HTTPException(status_code=409, detail="Maintenance record is already closed")
    if data.end_date < date.fromisoformat(record.start_date):
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")

    record.end_date = data.end_date.isoformat()
    vehicle = await _get_vehicle(db, record.vehicle_id)
    vehicle.status = VehicleStatus.OPERATING
    await db.flush()
    return await _load_maintenance(db, record.id)


@router.delete("/maintenance/{record_id}", status_code=204)
async def delete_maintenance(record_id: int, db: AsyncSession = Depends(get_db)):
    record = await _load_maintenance(db, record_id)
    await db.delete(record)


# ─── Fuel CRUD ───

@router.get("/fuel/", response_model=list[FuelEntryRead])
async def list_fuel(
    vehicle_id: int | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(FuelEntry).order_by(FuelEntry.date.desc(), FuelEntry.id.desc())
    if vehicle_id is not None:
        query = query.where(FuelEntry.vehicle_id == vehicle_id)
    if date_from is not None:
        query = query.where(FuelEntry.date >= date_from.isoformat())
    if date_to is not None:
        query = query.where(FuelEntry.date <= date_to.isoformat())
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/fuel/", response_model=FuelEntryRead, status_code=201)
async def create_fuel(data: FuelEntryCreate, db: AsyncSession = Depends(get_db)):
    await _get_vehicle(db, data.vehicle_id)
    fields = data.model_dump()
    fields["date"] = data.date.isoformat()
    entry = FuelEntry(**fields, total_value=to_money(data.liters * data.price_per_liter))
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    return entry


@router.delete("/fuel/{entry_id}", status_code=204)
async def delete_fuel(entry_id: int, db: AsyncSession = Depends(get_db)):
    entry = await db.get(FuelEntry, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Fuel entry not found")
    await db.delete(entry)


# ─── General Expenses CRUD ───

@router.get("/expenses/", response_model=list[GeneralExpenseRead])
async def list_expenses(
    vehicle_id: int | None = None,
    category: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(GeneralExpense).order_by(GeneralExpense.date.desc(), GeneralExpense.id.desc())
    if vehicle_id is not None:
        query = query.where(GeneralExpense.vehicle_id == vehicle_id)
    if category is not None:
        query = query.where(GeneralExpense.category == category)
    if date_from is not None:
        query = query.where(GeneralExpense.date >= date_from.isoformat())
    if date_to is not None:
        query = query.where(GeneralExpense.date <= date_to.isoformat())
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/expenses/", response_model=GeneralExpenseRead, status_code=201)
async def create_expense(data: GeneralExpenseCreate, db: AsyncSession = Depends(get_db)):
    if data.vehicle_id is not None:
        await _get_vehicle(db, data.vehicle_id)
    fields = data.model_dump()
    fields["date"] = data.date.isoformat()
    expense = GeneralExpense(**fields)
    db.add(expense)
    await db.flush()
    await db.refresh(expense)
    return expense


@router.delete("/expenses/{expense_id}", status_code=204)
async def delete_expense(expense_id: int, db: AsyncSession = Depends(get_db)):
    expense = await db.get(GeneralExpense, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    await db.delete(expense)


# ─── Checklists CRUD ───

async def _load_checklist(db: AsyncSession, checklist_id: int) -> Checklist:
    result = await db.execute(
        select(Checklist)
        .where(Checklist.id == checklist_id)
        .options(selectinload(Checklist.items))
    )
    checklist = result.scalar_one_or_none()
    if not checklist:
        raise HTTPException(status_code=404, detail="Checklist not found")
    return checklist


@router.get("/checklists/", response_model=list[ChecklistRead])
async def list_checklists(
    vehicle_id: int | None = None,
    has_issues: bool | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = (
        select(Checklist)
        .options(selectinload(Checklist.items))
        .order_by(Checklist.date.desc(), Checklist.id.desc())
    )
    if vehicle_id is not None:
        query = query.where(Checklist.vehicle_id == vehicle_id)
    if date_from is not None:
        query = query.where(Checklist.date >= date_from.isoformat())
    if date_to is not None:
        query = query.where(Checklist.date <= date_to.isoformat())
    result = await db.execute(query)
    checklists = result.scalars().all()
    if has_issues is not None:
        checklists = [c for c in checklists if c.has_issues == has_issues]
    return checklists


@router.get("/checklists/{checklist_id}", response_model=ChecklistRead)
async def get_checklist(checklist_id: int, db: AsyncSession = Depends(get_db)):
    return await _load_checklist(db, checklist_id)


@router.post("/checklists/", response_model=ChecklistRead, status_code=201)
async def create_checklist(data: ChecklistCreate, db: AsyncSession = Depends(get_db)):
    """
    Enregistrer une checklist / Record a checklist.
    Sans points fournis, la liste standard du materiel de levage est creee.
    Without items, the standard lifting gear list is created.
    """
    vehicle = await _get_vehicle(db, data.vehicle_id)
    checklist = Checklist(
        vehicle_id=data.vehicle_id,
        date=data.date.isoformat(),
        responsible=data.responsible,
        general_observation=data.general_observation,
        items=[ChecklistItem(**item.model_dump()) for item in data.items],
    )
    db.add(checklist)
    await db.flush()

    checklist = await _load_checklist(db, checklist.id)
    if checklist.has_issues:
        logger.warning("Checklist %s for vehicle %s reports damaged or missing items", checklist.id, vehicle.code)
    return checklist


@router.delete("/checklists/{checklist_id}", status_code=204)
async def delete_checklist(checklist_id: int, db: AsyncSession = Depends(get_db)):
    checklist = await _load_checklist(db, checklist_id)
    await db.delete(checklist)
