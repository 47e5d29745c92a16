"""Tests du calcul de CA / Revenue calculator tests."""

from datetime import date
from decimal import Decimal

import pytest

from fleetops.services.billing_calendar import BillingCalendarService
from fleetops.services.errors import InvalidWindowError
from fleetops.services.revenue_calculator import RevenueCalculatorService, to_money
from fleetops.utils.clock import FixedClock

JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)


@pytest.fixture
def feb_clock():
    return FixedClock(date(2024, 2, 1))


def test_to_money_rounds_half_up():
    assert to_money(Decimal("0.005")) == Decimal("0.01")
    assert to_money(Decimal("2.344")) == Decimal("2.34")


def test_weekday_contract_revenue(make_contract, feb_clock):
    revenue = RevenueCalculatorService.compute_contract_revenue(make_contract(), JAN_START, JAN_END, feb_clock)
    assert revenue == Decimal("8000.00")


def test_excluded_day_lowers_revenue(make_contract, feb_clock):
    contract = make_contract(excluded_dates={date(2024, 1, 15)})
    revenue = RevenueCalculatorService.compute_contract_revenue(contract, JAN_START, JAN_END, feb_clock)
    assert revenue == Decimal("7000.00")


def test_window_outside_contract_is_zero(make_contract):
    clock = FixedClock(date(2024, 4, 1))
    revenue = RevenueCalculatorService.compute_contract_revenue(
        make_contract(), date(2024, 3, 1), date(2024, 3, 31), clock
    )
    assert revenue == Decimal("0.00")


def test_breakdown_days_match_resolved_calendar(make_contract):
    contract = make_contract(end_date=None, included_dates={date(2024, 1, 13)})
    for as_of in (date(2024, 1, 9), date(2024, 1, 16), date(2024, 2, 1)):
        breakdown = RevenueCalculatorService.compute_revenue_breakdown(
            contract, JAN_START, JAN_END, FixedClock(as_of)
        )
        days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, as_of)
        assert breakdown.billable_days == len(days)


def test_monthly_package_uses_daily_rate(make_contract, feb_clock):
    contract = make_contract(billing_mode="MONTHLY_PACKAGE", monthly_rate=Decimal("30000"))
    revenue = RevenueCalculatorService.compute_contract_revenue(contract, JAN_START, JAN_END, feb_clock)
    assert revenue == Decimal("8000.00")


def test_overtime_in_current_month(make_contract):
    contract = make_contract(
        end_date=None,
        daily_rate=Decimal("800"),
        hours_per_day=8,
        extra_hours={"plain": 0, "plus30": 10, "plus100": 2},
    )
    clock = FixedClock(date(2024, 1, 20))
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, clock)
    assert breakdown.overtime == Decimal("1700.00")
    assert breakdown.total == breakdown.base + Decimal("1700.00")


def test_overtime_not_repeated_in_past_month(make_contract):
    contract = make_contract(
        end_date=None,
        daily_rate=Decimal("800"),
        extra_hours={"plus30": 10, "plus100": 2},
    )
    clock = FixedClock(date(2024, 2, 15))
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, clock)
    assert breakdown.overtime == Decimal("0.00")


def test_overtime_moves_with_the_clock_across_months(make_contract):
    contract = make_contract(
        end_date=None,
        daily_rate=Decimal("800"),
        extra_hours={"plain": 4},
    )
    clock = FixedClock(date(2024, 1, 31))
    january = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, clock)
    assert january.overtime == Decimal("400.00")

    clock.set_day(date(2024, 2, 5))
    january = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, clock)
    february = RevenueCalculatorService.compute_revenue_breakdown(
        contract, date(2024, 2, 1), date(2024, 2, 29), clock
    )
    assert january.overtime == Decimal("0.00")
    assert january.billable_days == 16
    assert february.overtime == Decimal("400.00")
    assert february.billable_days == 3


def test_overtime_in_closing_window(make_contract, feb_clock):
    contract = make_contract(extra_hours={"plain": 2}, daily_rate=Decimal("800"))
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    assert breakdown.overtime == Decimal("200.00")


def test_overtime_rounding(make_contract, feb_clock):
    contract = make_contract(hours_per_day=3, extra_hours={"plain": 1})
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    assert breakdown.overtime == Decimal("333.33")
    assert breakdown.total == Decimal("8333.33")


def test_demobilization_once_at_end(make_contract, feb_clock):
    contract = make_contract(demobilization={"distance_km": 100, "price_per_km": 5})
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    assert breakdown.demobilization == Decimal("500.00")
    assert breakdown.total == Decimal("8500.00")


def test_demobilization_waits_for_end_date(make_contract):
    contract = make_contract(demobilization={"distance_km": 100, "price_per_km": 5})
    clock = FixedClock(date(2024, 1, 18))
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, clock)
    assert breakdown.demobilization == Decimal("0.00")


def test_explicit_demobilization_total(make_contract, feb_clock):
    contract = make_contract(
        demobilization={"distance_km": 100, "price_per_km": 5, "total_value": Decimal("750")}
    )
    breakdown = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    assert breakdown.demobilization == Decimal("750.00")


def test_base_is_additive_and_extras_counted_once(make_contract, feb_clock):
    contract = make_contract(
        extra_hours={"plain": 8},
        demobilization={"distance_km": 10, "price_per_km": 10},
    )
    whole = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    first = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, date(2024, 1, 15), feb_clock)
    second = RevenueCalculatorService.compute_revenue_breakdown(contract, date(2024, 1, 16), JAN_END, feb_clock)

    assert first.base + second.base == whole.base
    assert first.overtime + second.overtime == whole.overtime
    assert first.demobilization == Decimal("0.00")
    assert second.demobilization == whole.demobilization
    assert first.total + second.total == whole.total


def test_revenue_never_negative(make_contract, feb_clock):
    contract = make_contract(daily_rate=Decimal("0"))
    assert RevenueCalculatorService.compute_contract_revenue(contract, JAN_START, JAN_END, feb_clock) >= 0


def test_idempotent(make_contract, feb_clock):
    contract = make_contract(extra_hours={"plus30": 3})
    first = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    second = RevenueCalculatorService.compute_revenue_breakdown(contract, JAN_START, JAN_END, feb_clock)
    assert first == second


def test_total_revenue(make_contract, feb_clock):
    contracts = [make_contract(), make_contract(excluded_dates={date(2024, 1, 15)}, vehicle_id=2)]
    total = RevenueCalculatorService.compute_total_revenue(contracts, JAN_START, JAN_END, feb_clock)
    assert total == Decimal("15000.00")


def test_total_revenue_empty():
    total = RevenueCalculatorService.compute_total_revenue([], JAN_START, JAN_END, FixedClock(date(2024, 2, 1)))
    assert total == Decimal("0.00")


def test_invalid_window_raises(make_contract, feb_clock):
    with pytest.raises(InvalidWindowError):
        RevenueCalculatorService.compute_contract_revenue(make_contract(), JAN_END, JAN_START, feb_clock)
