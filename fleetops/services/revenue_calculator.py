"""
Service de calcul du chiffre d'affaires / Revenue calculation service.
Calcule le CA d'un contrat de location sur une fenetre (generalement un mois).

Regles / Rules:
    - Base : jours facturables x tarif journalier, quel que soit le mode
      (DAILY ou MONTHLY_PACKAGE). Pas de prorata mensuel.
      Base: billable days x daily rate for both modes. No monthly pro-rata.
    - Heures sup : ajoutees seulement si la fenetre finit dans le mois courant,
      ou si la fin du contrat tombe dans la fenetre (solde de cloture).
      Overtime: added only when the window ends in the current month, or when
      the contract end date falls inside the window (closing settlement).
    - Demobilisation : une fois, si la fin du contrat est dans l'intervalle effectif.
      Demobilization: once, when the contract end date is in the effective interval.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from fleetops.schemas.contract import ContractBase
from fleetops.services.billing_calendar import BillingCalendarService
from fleetops.utils.clock import Clock

log = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")
_ZERO = Decimal("0")

# Majorations heures sup / Overtime multipliers
OVERTIME_PLAIN_RATE = Decimal("1.0")
OVERTIME_PLUS30_RATE = Decimal("1.3")
OVERTIME_PLUS100_RATE = Decimal("2.0")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RevenueBreakdown:
    """Detail du CA d'un contrat / Contract revenue breakdown."""
    billable_days: int
    base: Decimal
    overtime: Decimal
    demobilization: Decimal
    total: Decimal


class RevenueCalculatorService:
    """Calcul du CA des contrats / Contract revenue calculation."""

    @staticmethod
    def overtime_value(contract: ContractBase) -> Decimal:
        """
        Valeur des heures sup / Overtime value.
        taux horaire = tarif journalier / heures par jour
        hourly rate = daily rate / hours per day
        """
        hourly_rate = Decimal(contract.daily_rate) / Decimal(contract.hours_per_day)
        hours = contract.extra_hours
        return (
            hours.plain * hourly_rate * OVERTIME_PLAIN_RATE
            + hours.plus30 * hourly_rate * OVERTIME_PLUS30_RATE
            + hours.plus100 * hourly_rate * OVERTIME_PLUS100_RATE
        )

    @staticmethod
    def recognizes_overtime(
        contract: ContractBase, window_start: date, window_end: date, as_of: date
    ) -> bool:
        """La fenetre est-elle "realisee" / Is the window "realized" activity.

        Le cumul d'heures ne compte que dans une seule periode.
        The cumulative hours count in one period only.
        """
        if (window_end.year, window_end.month) == (as_of.year, as_of.month):
            return True
        return contract.end_date is not None and window_start <= contract.end_date <= window_end

    @staticmethod
    def compute_revenue_breakdown(
        contract: ContractBase,
        window_start: date,
        window_end: date,
        clock: Clock,
    ) -> RevenueBreakdown:
        """Detail du CA sur la fenetre / Revenue breakdown for the window."""
        as_of = clock.today()
        interval = BillingCalendarService.effective_interval(contract, window_start, window_end, as_of)
        days = [] if interval is None else BillingCalendarService.billable_dates_between(contract, *interval)

        base = len(days) * Decimal(contract.daily_rate)

        overtime = _ZERO
        if RevenueCalculatorService.recognizes_overtime(contract, window_start, window_end, as_of):
            overtime = RevenueCalculatorService.overtime_value(contract)

        demobilization = _ZERO
        if contract.demobilization is not None and contract.end_date is not None and interval is not None:
            start, end = interval
            if start <= contract.end_date <= end:
                demobilization = Decimal(contract.demobilization.total_value or 0)

        total = max(_ZERO, base + overtime + demobilization)

        breakdown = RevenueBreakdown(
            billable_days=len(days),
            base=to_money(base),
            overtime=to_money(overtime),
            demobilization=to_money(demobilization),
            total=to_money(total),
        )
        log.debug(
            "Revenue %s..%s as_of %s: %d days, base=%s overtime=%s demob=%s",
            window_start, window_end, as_of,
            breakdown.billable_days, breakdown.base, breakdown.overtime, breakdown.demobilization,
        )
        return breakdown

    @staticmethod
    def compute_contract_revenue(
        contract: ContractBase,
        window_start: date,
        window_end: date,
        clock: Clock,
    ) -> Decimal:
        """CA d'un contrat sur la fenetre / Contract revenue for the window."""
        return RevenueCalculatorService.compute_revenue_breakdown(
            contract, window_start, window_end, clock
        ).total

    @staticmethod
    def compute_total_revenue(
        contracts: Iterable[ContractBase],
        window_start: date,
        window_end: date,
        clock: Clock,
    ) -> Decimal:
        """Somme des CA / Sum of contract revenues."""
        return to_money(sum(
            (
                RevenueCalculatorService.compute_contract_revenue(c, window_start, window_end, clock)
                for c in contracts
            ),
            _ZERO,
        ))
