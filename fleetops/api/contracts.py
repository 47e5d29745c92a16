"""Routes Contrats de location / Rental contract API routes."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fleetops.api.deps import get_clock, load_contract, resolve_window
from fleetops.database import get_db
from fleetops.models.contract import Contract, ContractStatus
from fleetops.models.contract_calendar import ContractCalendarOverride
from fleetops.models.vehicle import Vehicle, VehicleStatus
from fleetops.schemas.contract import (
    BillableDatesRead,
    ContractCreate,
    ContractFinish,
    ContractRead,
    ContractUpdate,
    RevenueRead,
)
from fleetops.services.billing_calendar import BillingCalendarService
from fleetops.services.revenue_calculator import RevenueCalculatorService
from fleetops.utils.clock import Clock

logger = logging.getLogger(__name__)

router = APIRouter()


def _orm_fields(data: dict) -> dict:
    """Aplatir un dump Pydantic vers les colonnes ORM / Flatten a Pydantic dump to ORM columns."""
    fields = dict(data)
    for key in ("start_date", "end_date"):
        if key in fields and fields[key] is not None:
            fields[key] = fields[key].isoformat()
    if "working_days" in fields and fields["working_days"] is not None:
        fields["working_days"] = sorted(fields["working_days"])
    if "extra_hours" in fields:
        hours = fields.pop("extra_hours") or {}
        fields["extra_hours_plain"] = hours.get("plain", 0)
        fields["extra_hours_plus30"] = hours.get("plus30", 0)
        fields["extra_hours_plus100"] = hours.get("plus100", 0)
    if "demobilization" in fields:
        demob = fields.pop("demobilization")
        fields["demob_distance_km"] = demob["distance_km"] if demob else None
        fields["demob_price_per_km"] = demob["price_per_km"] if demob else None
        fields["demob_total_value"] = demob["total_value"] if demob else None
    return fields


def _sync_overrides(contract: Contract, included: frozenset[date], excluded: frozenset[date]) -> None:
    """Aligner les lignes d'exception sur les ensembles / Align override rows with the date sets."""
    wanted = {d.isoformat(): True for d in included}
    wanted.update({d.isoformat(): False for d in excluded})

    for override in list(contract.calendar_overrides):
        if override.date not in wanted:
            contract.calendar_overrides.remove(override)
        else:
            override.is_billable = wanted.pop(override.date)

    for day, is_billable in sorted(wanted.items()):
        contract.calendar_overrides.append(ContractCalendarOverride(date=day, is_billable=is_billable))


def _ensure_editable(contract: Contract) -> None:
    # Un contrat termine est un historique immuable / A finished contract is immutable history
    if contract.status == ContractStatus.FINISHED:
        raise HTTPException(status_code=409, detail="Contract is finished and can no longer be edited")


async def _get_vehicle(db: AsyncSession, vehicle_id: int) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle


@router.get("/", response_model=list[ContractRead])
async def list_contracts(
    vehicle_id: int | None = None,
    status: ContractStatus | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = select(Contract).options(selectinload(Contract.calendar_overrides)).order_by(Contract.id)
    if vehicle_id is not None:
        query = query.where(Contract.vehicle_id == vehicle_id)
    if status is not None:
        query = query.where(Contract.status == status)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{contract_id}", response_model=ContractRead)
async def get_contract(contract_id: int, db: AsyncSession = Depends(get_db)):
    return await load_contract(db, contract_id)


@router.post("/", response_model=ContractRead, status_code=201)
async def create_contract(data: ContractCreate, db: AsyncSession = Depends(get_db)):
    """Demarrer un contrat (engin -> en operation) / Start a contract (machine -> operating)."""
    vehicle = await _get_vehicle(db, data.vehicle_id)

    fields = _orm_fields(data.model_dump(exclude={"included_dates", "excluded_dates"}))
    contract = Contract(**fields, status=ContractStatus.ACTIVE, calendar_overrides=[])
    _sync_overrides(contract, data.included_dates, data.excluded_dates)
    db.add(contract)
    vehicle.status = VehicleStatus.OPERATING
    await db.flush()

    logger.info("Contract %s started for vehicle %s (%s)", contract.id, vehicle.code, data.client_name)
    return await load_contract(db, contract.id)


@router.put("/{contract_id}", response_model=ContractRead)
async def update_contract(contract_id: int, data: ContractUpdate, db: AsyncSession = Depends(get_db)):
    contract = await load_contract(db, contract_id)
    _ensure_editable(contract)

    updates = data.model_dump(exclude_unset=True)
    if "vehicle_id" in updates:
        await _get_vehicle(db, updates["vehicle_id"])

    start = updates.get("start_date") or date.fromisoformat(contract.start_date)
    end = updates["end_date"] if "end_date" in updates else (
        date.fromisoformat(contract.end_date) if contract.end_date else None
    )
    if end is not None and end < start:
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")

    for key, value in _orm_fields(updates).items():
        setattr(contract, key, value)
    await db.flush()
    return await load_contract(db, contract.id)


@router.post("/{contract_id}/finish", response_model=ContractRead)
async def finish_contract(contract_id: int, data: ContractFinish, db: AsyncSession = Depends(get_db)):
    """Cloturer un contrat (engin -> arrete) / Close a contract (machine -> stopped)."""
    contract = await load_contract(db, contract_id)
    _ensure_editable(contract)
    if data.end_date < date.fromisoformat(contract.start_date):
        raise HTTPException(status_code=422, detail="end_date must be on or after start_date")

    contract.end_date = data.end_date.isoformat()
    contract.status = ContractStatus.FINISHED
    vehicle = await _get_vehicle(db, contract.vehicle_id)
    vehicle.status = VehicleStatus.STOPPED
    await db.flush()

    logger.info("Contract %s finished on %s", contract.id, contract.end_date)
    return await load_contract(db, contract.id)


@router.put("/{contract_id}/calendar/weekdays/{weekday}", response_model=ContractRead)
async def toggle_weekday(
    contract_id: int,
    weekday: int = Path(ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    db: AsyncSession = Depends(get_db),
):
    """Basculer un jour du motif hebdomadaire / Toggle a weekday of the weekly pattern."""
    contract = await load_contract(db, contract_id)
    _ensure_editable(contract)
    current = ContractRead.model_validate(contract)
    contract.working_days = sorted(BillingCalendarService.toggle_weekday(current.working_days, weekday))
    await db.flush()
    return await load_contract(db, contract.id)


@router.put("/{contract_id}/calendar/dates/{day}", response_model=ContractRead)
async def toggle_date(contract_id: int, day: date, db: AsyncSession = Depends(get_db)):
    """Basculer un jour precis (inclusion/exclusion) / Toggle a specific day (include/exclude)."""
    contract = await load_contract(db, contract_id)
    _ensure_editable(contract)
    current = ContractRead.model_validate(contract)
    included, excluded = BillingCalendarService.toggle_date(
        current.working_days, current.included_dates, current.excluded_dates, day
    )
    _sync_overrides(contract, included, excluded)
    await db.flush()
    return await load_contract(db, contract.id)


@router.delete("/{contract_id}", status_code=204)
async def delete_contract(contract_id: int, db: AsyncSession = Depends(get_db)):
    contract = await load_contract(db, contract_id)
    await db.delete(contract)


@router.get("/{contract_id}/revenue", response_model=RevenueRead)
async def contract_revenue(
    contract_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """CA du contrat sur la periode (mois courant par defaut) / Contract revenue (current month by default)."""
    window_start, window_end = resolve_window(date_from, date_to, clock)
    contract = ContractRead.model_validate(await load_contract(db, contract_id))
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, window_start, window_end, clock)
    return RevenueRead(
        contract_id=contract.id,
        window_start=window_start,
        window_end=window_end,
        billable_days=breakdown.billable_days,
        base=breakdown.base,
        overtime=breakdown.overtime,
        demobilization=breakdown.demobilization,
        total=breakdown.total,
    )


@router.get("/{contract_id}/billable-dates", response_model=BillableDatesRead)
async def billable_dates(
    contract_id: int,
    date_from: date | None = None,
    date_to: date | None = None,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Jours facturables realises sur la periode / Realized billable days in the period."""
    window_start, window_end = resolve_window(date_from, date_to, clock)
    contract = ContractRead.model_validate(await load_contract(db, contract_id))
    return BillableDatesRead(
        contract_id=contract.id,
        window_start=window_start,
        window_end=window_end,
        dates=BillingCalendarService.resolve_billable_dates(
            contract, window_start, window_end, clock.today()
        ),
    )
