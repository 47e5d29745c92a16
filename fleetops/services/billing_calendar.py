"""
Service calendrier de facturation / Billing calendar service.
Determine les jours facturables d'un contrat dans une fenetre d'evaluation.

Regles de priorite / Precedence rules:
    1. date incluse explicitement  -> facturable / explicitly included -> billable
    2. date exclue explicitement   -> non facturable / explicitly excluded -> not billable
    3. sinon jour de semaine dans working_days / else weekday in working_days
"""

import logging
from datetime import date, timedelta

from fleetops.schemas.contract import ContractBase
from fleetops.services.errors import check_window

log = logging.getLogger(__name__)


def weekday_index(day: date) -> int:
    """Indice 0=dimanche..6=samedi / Index 0=Sunday..6=Saturday."""
    return day.isoweekday() % 7


class BillingCalendarService:
    """Resolution du calendrier facturable / Billable calendar resolution."""

    @staticmethod
    def effective_interval(
        contract: ContractBase,
        window_start: date,
        window_end: date,
        as_of: date,
    ) -> tuple[date, date] | None:
        """
        Intersection [debut contrat, fin contrat] ∩ [fenetre] ∩ [.., as_of].
        Intersection of contract lifetime, query window and the as_of ceiling.
        Retourne None si vide / Returns None when empty.
        """
        check_window(window_start, window_end)
        start = max(contract.start_date, window_start)
        end = min(window_end, as_of)
        if contract.end_date is not None:
            end = min(end, contract.end_date)
        if start > end:
            return None
        return start, end

    @staticmethod
    def is_billable_date(contract: ContractBase, day: date) -> bool:
        """Un jour est-il facturable (hors bornes) / Is a day billable (ignoring bounds)."""
        if day in contract.included_dates:
            return True
        if day in contract.excluded_dates:
            return False
        return weekday_index(day) in contract.working_days

    @staticmethod
    def billable_dates_between(contract: ContractBase, start: date, end: date) -> list[date]:
        """Enumerer un intervalle deja resolu / Enumerate an already resolved interval."""
        billable = []
        day = start
        while day <= end:
            if BillingCalendarService.is_billable_date(contract, day):
                billable.append(day)
            day += timedelta(days=1)
        return billable

    @staticmethod
    def resolve_billable_dates(
        contract: ContractBase,
        window_start: date,
        window_end: date,
        as_of: date,
    ) -> list[date]:
        """Jours facturables tries, sans doublon / Sorted billable days, no duplicates."""
        interval = BillingCalendarService.effective_interval(contract, window_start, window_end, as_of)
        if interval is None:
            return []

        start, end = interval
        billable = BillingCalendarService.billable_dates_between(contract, start, end)
        log.debug(
            "Resolved %d billable days in %s..%s (as_of %s)",
            len(billable), start, end, as_of,
        )
        return billable

    # --- Edition du calendrier / Calendar editing ---

    @staticmethod
    def toggle_weekday(working_days: frozenset[int], weekday: int) -> frozenset[int]:
        """Ajouter/retirer un jour du motif hebdomadaire / Add/remove a weekday from the pattern."""
        if weekday not in range(7):
            raise ValueError(f"weekday must be within 0..6, got {weekday}")
        if weekday in working_days:
            return working_days - {weekday}
        return working_days | {weekday}

    @staticmethod
    def toggle_date(
        working_days: frozenset[int],
        included: frozenset[date],
        excluded: frozenset[date],
        day: date,
    ) -> tuple[frozenset[date], frozenset[date]]:
        """
        Basculer un jour precis / Toggle a specific day.

        Jour du motif : bascule dans les exclusions. Jour hors motif : bascule dans
        les inclusions. Les deux ensembles restent disjoints.
        Pattern day: flips in the excluded set. Off-pattern day: flips in the
        included set. Both sets stay disjoint.
        Retourne (included, excluded) / Returns (included, excluded).
        """
        if weekday_index(day) in working_days:
            included = included - {day}
            excluded = excluded - {day} if day in excluded else excluded | {day}
        else:
            excluded = excluded - {day}
            included = included - {day} if day in included else included | {day}
        return included, excluded
