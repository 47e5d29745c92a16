"""
Service de rapports financiers / Financial report service.
Assemble CA, depenses et marge pour une periode, et le tableau de bord du mois courant.
"""

import calendar
from collections import Counter
from datetime import date
from decimal import Decimal

from fleetops.models.vehicle import VehicleStatus
from fleetops.schemas.contract import ContractRead
from fleetops.schemas.fleet import FuelEntryRead, GeneralExpenseRead, MaintenanceRecordRead
from fleetops.schemas.report import (
    ContractRevenueItem,
    DashboardResponse,
    ExpenseDetailRow,
    FinancialReport,
    StatusCount,
)
from fleetops.schemas.vehicle import VehicleRead
from fleetops.services.expense_aggregator import ExpenseAggregatorService
from fleetops.services.revenue_calculator import RevenueCalculatorService
from fleetops.utils.clock import Clock


def month_bounds(day: date) -> tuple[date, date]:
    """Premier et dernier jour du mois / First and last day of the month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


class ReportService:
    """Rapports de gestion / Management reports."""

    @staticmethod
    def margin_percent(revenue: Decimal, net_profit: Decimal) -> Decimal:
        """Marge nette en % (1 decimale) / Net margin in % (1 decimal)."""
        if revenue <= 0:
            return Decimal("0.0")
        return (net_profit / revenue * 100).quantize(Decimal("0.1"))

    @staticmethod
    def build_financial_report(
        contracts: list[ContractRead],
        maintenances: list[MaintenanceRecordRead],
        fuels: list[FuelEntryRead],
        expenses: list[GeneralExpenseRead],
        window_start: date,
        window_end: date,
        clock: Clock,
        vehicle_id: int | None = None,
        vehicle_codes: dict[int, str] | None = None,
    ) -> FinancialReport:
        """
        Rapport financier / Financial report.
        Filtre vehicule : une depense generale sans vehicule reste incluse.
        Vehicle filter: a general expense without a vehicle is always kept.
        """
        codes = vehicle_codes or {}
        if vehicle_id is not None:
            contracts = [c for c in contracts if c.vehicle_id == vehicle_id]
            maintenances = [m for m in maintenances if m.vehicle_id == vehicle_id]
            fuels = [f for f in fuels if f.vehicle_id == vehicle_id]
            expenses = [e for e in expenses if e.vehicle_id is None or e.vehicle_id == vehicle_id]

        revenue = RevenueCalculatorService.compute_total_revenue(contracts, window_start, window_end, clock)
        costs = ExpenseAggregatorService.compute_expense_breakdown(
            maintenances, fuels, expenses, window_start, window_end
        )
        net_profit = revenue - costs.total

        def in_window(day: date) -> bool:
            return window_start <= day <= window_end

        details = [
            ExpenseDetailRow(
                date=m.start_date, kind="MAINTENANCE", vehicle_code=codes.get(m.vehicle_id),
                description=m.description, value=m.total_cost,
            )
            for m in maintenances if in_window(m.start_date)
        ]
        details += [
            ExpenseDetailRow(
                date=f.date, kind="FUEL", vehicle_code=codes.get(f.vehicle_id),
                description=f"{f.liters}L {f.fuel_type}", value=f.total_value,
            )
            for f in fuels if in_window(f.date)
        ]
        details += [
            ExpenseDetailRow(
                date=e.date, kind="GENERAL",
                vehicle_code=codes.get(e.vehicle_id) if e.vehicle_id is not None else None,
                description=e.description, value=e.value,
            )
            for e in expenses if in_window(e.date)
        ]
        details.sort(key=lambda row: row.date)

        return FinancialReport(
            window_start=window_start,
            window_end=window_end,
            vehicle_id=vehicle_id,
            total_revenue=revenue,
            maintenance_cost=costs.maintenance,
            fuel_cost=costs.fuel,
            general_cost=costs.general,
            total_expenses=costs.total,
            net_profit=net_profit,
            margin_percent=ReportService.margin_percent(revenue, net_profit),
            details=details,
        )

    @staticmethod
    def build_dashboard(
        vehicles: list[VehicleRead],
        contracts: list[ContractRead],
        maintenances: list[MaintenanceRecordRead],
        fuels: list[FuelEntryRead],
        expenses: list[GeneralExpenseRead],
        clock: Clock,
    ) -> DashboardResponse:
        """Tableau de bord du mois courant / Current month dashboard."""
        month_start, month_end = month_bounds(clock.today())
        active = [v for v in vehicles if v.is_active]
        codes = {v.id: v.code for v in vehicles}

        revenue = RevenueCalculatorService.compute_total_revenue(contracts, month_start, month_end, clock)
        costs = ExpenseAggregatorService.compute_total_expenses(
            maintenances, fuels, expenses, month_start, month_end
        )

        by_status = Counter(v.status.value for v in active)
        stopped = by_status[VehicleStatus.STOPPED.value] + by_status[VehicleStatus.MAINTENANCE.value]

        ranking = [
            ContractRevenueItem(
                contract_id=c.id,
                client_name=c.client_name,
                vehicle_code=codes.get(c.vehicle_id),
                revenue=RevenueCalculatorService.compute_contract_revenue(c, month_start, month_end, clock),
            )
            for c in contracts
        ]
        ranking.sort(key=lambda item: item.revenue, reverse=True)

        return DashboardResponse(
            month_start=month_start,
            month_end=month_end,
            revenue=revenue,
            expenses=costs,
            net_profit=revenue - costs,
            active_vehicles=len(active),
            stopped_vehicles=stopped,
            status_distribution=[
                StatusCount(status=s.value, count=by_status[s.value])
                for s in VehicleStatus if by_status[s.value] > 0
            ],
            contracts=ranking,
        )
