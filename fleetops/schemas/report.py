"""Schemas rapports / Report schemas."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class ExpenseDetailRow(BaseModel):
    """Ligne de detail de depense / Expense detail line."""
    date: date
    kind: str  # MAINTENANCE | FUEL | GENERAL
    vehicle_code: str | None = None
    description: str | None = None
    value: Decimal


class FinancialReport(BaseModel):
    """Rapport financier d'une periode / Financial report for a period."""
    window_start: date
    window_end: date
    vehicle_id: int | None = None
    total_revenue: Decimal
    maintenance_cost: Decimal
    fuel_cost: Decimal
    general_cost: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    margin_percent: Decimal
    details: list[ExpenseDetailRow] = []


class StatusCount(BaseModel):
    status: str
    count: int


class ContractRevenueItem(BaseModel):
    contract_id: int
    client_name: str
    vehicle_code: str | None = None
    revenue: Decimal


class DashboardResponse(BaseModel):
    """Tableau de bord du mois courant / Current month dashboard."""
    month_start: date
    month_end: date
    revenue: Decimal
    expenses: Decimal
    net_profit: Decimal
    active_vehicles: int
    stopped_vehicles: int
    status_distribution: list[StatusCount] = []
    contracts: list[ContractRevenueItem] = []
