"""
Service d'agregation des depenses / Expense aggregation service.
Somme des entretiens, carburants et depenses generales dates dans une fenetre.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from fleetops.schemas.fleet import FuelEntryRead, GeneralExpenseRead, MaintenanceRecordRead
from fleetops.services.errors import check_window
from fleetops.services.revenue_calculator import to_money


@dataclass(frozen=True)
class ExpenseBreakdown:
    """Sous-totaux par nature / Subtotals per kind."""
    maintenance: Decimal
    fuel: Decimal
    general: Decimal

    @property
    def total(self) -> Decimal:
        return self.maintenance + self.fuel + self.general


def _within(day: date, window_start: date, window_end: date) -> bool:
    return window_start <= day <= window_end


class ExpenseAggregatorService:
    """Agregation des couts / Cost aggregation."""

    @staticmethod
    def compute_expense_breakdown(
        maintenances: Iterable[MaintenanceRecordRead],
        fuels: Iterable[FuelEntryRead],
        expenses: Iterable[GeneralExpenseRead],
        window_start: date,
        window_end: date,
    ) -> ExpenseBreakdown:
        check_window(window_start, window_end)
        maintenance = sum(
            (Decimal(m.total_cost) for m in maintenances if _within(m.start_date, window_start, window_end)),
            Decimal("0"),
        )
        fuel = sum(
            (Decimal(f.total_value) for f in fuels if _within(f.date, window_start, window_end)),
            Decimal("0"),
        )
        general = sum(
            (Decimal(e.value) for e in expenses if _within(e.date, window_start, window_end)),
            Decimal("0"),
        )
        return ExpenseBreakdown(
            maintenance=to_money(maintenance),
            fuel=to_money(fuel),
            general=to_money(general),
        )

    @staticmethod
    def compute_total_expenses(
        maintenances: Iterable[MaintenanceRecordRead],
        fuels: Iterable[FuelEntryRead],
        expenses: Iterable[GeneralExpenseRead],
        window_start: date,
        window_end: date,
    ) -> Decimal:
        """Total des depenses de la fenetre / Total expenses for the window."""
        return ExpenseAggregatorService.compute_expense_breakdown(
            maintenances, fuels, expenses, window_start, window_end
        ).total
