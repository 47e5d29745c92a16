"""Routes Rapports financiers et tableau de bord / Financial report and dashboard routes."""

import io
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fleetops.api.deps import get_clock, resolve_window
from fleetops.config import settings
from fleetops.database import get_db
from fleetops.models.contract import Contract
from fleetops.models.general_expense import GeneralExpense
from fleetops.models.vehicle import Vehicle
from fleetops.models.vehicle_fuel import FuelEntry
from fleetops.models.vehicle_maintenance import MaintenanceRecord
from fleetops.rate_limit import limiter
from fleetops.schemas.contract import ContractRead
from fleetops.schemas.fleet import FuelEntryRead, GeneralExpenseRead, MaintenanceRecordRead
from fleetops.schemas.report import DashboardResponse, FinancialReport
from fleetops.schemas.vehicle import VehicleRead
from fleetops.services.export_service import ExportService
from fleetops.services.report_service import ReportService, month_bounds
from fleetops.utils.clock import Clock

logger = logging.getLogger(__name__)

router = APIRouter()


async def _load_period(db: AsyncSession, window_start: date, window_end: date) -> dict:
    """
    Charger les enregistrements qui touchent la periode / Load records touching the period.
    Les dates etant stockees en ISO, la comparaison de chaines suit l'ordre chronologique.
    Seuls les contrats qui chevauchent la periode sont charges : le cumul d'heures sup
    d'un contrat termine reste dans sa periode de cloture.
    Only contracts overlapping the period are loaded: a finished contract's
    cumulative overtime stays in its closing period.
    """
    start, end = window_start.isoformat(), window_end.isoformat()

    contracts = await db.execute(
        select(Contract)
        .options(selectinload(Contract.calendar_overrides))
        .where(Contract.start_date <= end)
        .where(or_(Contract.end_date.is_(None), Contract.end_date >= start))
        .order_by(Contract.id)
    )
    maintenances = await db.execute(
        select(MaintenanceRecord)
        .options(selectinload(MaintenanceRecord.items))
        .where(MaintenanceRecord.start_date >= start, MaintenanceRecord.start_date <= end)
    )
    fuels = await db.execute(select(FuelEntry).where(FuelEntry.date >= start, FuelEntry.date <= end))
    expenses = await db.execute(
        select(GeneralExpense).where(GeneralExpense.date >= start, GeneralExpense.date <= end)
    )
    vehicles = await db.execute(select(Vehicle).order_by(Vehicle.code))

    return {
        "contracts": [ContractRead.model_validate(c) for c in contracts.scalars().all()],
        "maintenances": [MaintenanceRecordRead.model_validate(m) for m in maintenances.scalars().all()],
        "fuels": [FuelEntryRead.model_validate(f) for f in fuels.scalars().all()],
        "expenses": [GeneralExpenseRead.model_validate(e) for e in expenses.scalars().all()],
        "vehicles": [VehicleRead.model_validate(v) for v in vehicles.scalars().all()],
    }


async def _financial_report(
    db: AsyncSession, clock: Clock, date_from: date | None, date_to: date | None, vehicle_id: int | None
) -> FinancialReport:
    window_start, window_end = resolve_window(date_from, date_to, clock)
    data = await _load_period(db, window_start, window_end)
    return ReportService.build_financial_report(
        data["contracts"],
        data["maintenances"],
        data["fuels"],
        data["expenses"],
        window_start,
        window_end,
        clock,
        vehicle_id=vehicle_id,
        vehicle_codes={v.id: v.code for v in data["vehicles"]},
    )


@router.get("/financial", response_model=FinancialReport)
async def financial_report(
    date_from: date | None = None,
    date_to: date | None = None,
    vehicle_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Rapport financier (mois courant par defaut) / Financial report (current month by default)."""
    return await _financial_report(db, clock, date_from, date_to, vehicle_id)


@router.get("/financial/export")
@limiter.limit(settings.RATE_LIMIT_EXPORT)
async def export_financial_report(
    request: Request,
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    date_from: date | None = None,
    date_to: date | None = None,
    vehicle_id: int | None = None,
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Exporter le rapport financier / Export the financial report to CSV or XLSX."""
    report = await _financial_report(db, clock, date_from, date_to, vehicle_id)
    stem = f"financial_{report.window_start.isoformat()}_{report.window_end.isoformat()}"

    if format == "csv":
        content = ExportService.to_csv(report)
        media_type = "text/csv; charset=utf-8"
        filename = f"{stem}.csv"
    else:
        content = ExportService.to_xlsx(report)
        media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        filename = f"{stem}.xlsx"

    logger.info("Financial report exported (%s, %d detail rows)", format, len(report.details))
    return StreamingResponse(
        io.BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Tableau de bord du mois courant / Current month dashboard."""
    month_start, month_end = month_bounds(clock.today())
    data = await _load_period(db, month_start, month_end)
    return ReportService.build_dashboard(
        data["vehicles"],
        data["contracts"],
        data["maintenances"],
        data["fuels"],
        data["expenses"],
        clock,
    )
