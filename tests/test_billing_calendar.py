"""Tests du calendrier de facturation / Billing calendar tests."""

from datetime import date, timedelta

import pytest

from fleetops.services.billing_calendar import BillingCalendarService, weekday_index
from fleetops.services.errors import InvalidWindowError

JAN_START = date(2024, 1, 1)
JAN_END = date(2024, 1, 31)
AS_OF = date(2024, 2, 1)


def test_weekday_index_sunday_is_zero():
    assert weekday_index(date(2024, 1, 7)) == 0  # dimanche / Sunday
    assert weekday_index(date(2024, 1, 8)) == 1
    assert weekday_index(date(2024, 1, 13)) == 6


def test_weekdays_only(make_contract):
    days = BillingCalendarService.resolve_billable_dates(make_contract(), JAN_START, JAN_END, AS_OF)
    assert days == [
        date(2024, 1, 10), date(2024, 1, 11), date(2024, 1, 12),
        date(2024, 1, 15), date(2024, 1, 16), date(2024, 1, 17),
        date(2024, 1, 18), date(2024, 1, 19),
    ]


def test_excluded_pattern_day(make_contract):
    contract = make_contract(excluded_dates={date(2024, 1, 15)})
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, AS_OF)
    assert len(days) == 7
    assert date(2024, 1, 15) not in days


def test_included_weekend_day(make_contract):
    contract = make_contract(included_dates={date(2024, 1, 13)})
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, AS_OF)
    assert date(2024, 1, 13) in days
    assert len(days) == 9


def test_included_wins_over_excluded(make_contract):
    contract = make_contract(
        included_dates={date(2024, 1, 15)}, excluded_dates={date(2024, 1, 15)}
    )
    assert contract.excluded_dates == frozenset()
    assert BillingCalendarService.is_billable_date(contract, date(2024, 1, 15))


def test_window_after_contract_is_empty(make_contract):
    days = BillingCalendarService.resolve_billable_dates(
        make_contract(), date(2024, 3, 1), date(2024, 3, 31), date(2024, 4, 1)
    )
    assert days == []


def test_window_after_as_of_is_empty(make_contract):
    contract = make_contract(end_date=None)
    days = BillingCalendarService.resolve_billable_dates(
        contract, date(2024, 2, 1), date(2024, 2, 29), date(2024, 1, 25)
    )
    assert days == []


def test_as_of_caps_open_contract(make_contract):
    contract = make_contract(end_date=None, working_days=None)
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, date(2024, 1, 12))
    assert days == [date(2024, 1, 10), date(2024, 1, 11), date(2024, 1, 12)]


def test_unset_working_days_means_every_day(make_contract):
    contract = make_contract(working_days=None)
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, AS_OF)
    assert len(days) == 11


def test_empty_working_days_bills_only_included(make_contract):
    contract = make_contract(working_days=set(), included_dates={date(2024, 1, 14)})
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, JAN_END, AS_OF)
    assert days == [date(2024, 1, 14)]


def test_result_is_sorted_and_unique(make_contract):
    contract = make_contract(
        end_date=date(2024, 3, 31),
        included_dates={date(2024, 2, 3), date(2024, 1, 13)},
    )
    days = BillingCalendarService.resolve_billable_dates(contract, JAN_START, date(2024, 3, 31), date(2024, 4, 1))
    assert days == sorted(set(days))
    assert all(b - a >= timedelta(days=1) for a, b in zip(days, days[1:]))


def test_invalid_window_raises(make_contract):
    with pytest.raises(InvalidWindowError):
        BillingCalendarService.resolve_billable_dates(make_contract(), JAN_END, JAN_START, AS_OF)


def test_single_day_window(make_contract):
    day = date(2024, 1, 16)
    assert BillingCalendarService.resolve_billable_dates(make_contract(), day, day, AS_OF) == [day]


# --- Edition / Editing ---

def test_toggle_weekday():
    days = frozenset({1, 2, 3, 4, 5})
    assert BillingCalendarService.toggle_weekday(days, 6) == frozenset({1, 2, 3, 4, 5, 6})
    assert BillingCalendarService.toggle_weekday(days, 1) == frozenset({2, 3, 4, 5})


def test_toggle_weekday_out_of_range():
    with pytest.raises(ValueError):
        BillingCalendarService.toggle_weekday(frozenset(), 7)


def test_toggle_pattern_day_flips_exclusion():
    pattern = frozenset({1, 2, 3, 4, 5})
    monday = date(2024, 1, 15)
    included, excluded = BillingCalendarService.toggle_date(pattern, frozenset(), frozenset(), monday)
    assert excluded == {monday} and included == frozenset()
    included, excluded = BillingCalendarService.toggle_date(pattern, included, excluded, monday)
    assert excluded == frozenset() and included == frozenset()


def test_toggle_off_pattern_day_flips_inclusion():
    pattern = frozenset({1, 2, 3, 4, 5})
    saturday = date(2024, 1, 13)
    included, excluded = BillingCalendarService.toggle_date(pattern, frozenset(), frozenset(), saturday)
    assert included == {saturday} and excluded == frozenset()
    included, excluded = BillingCalendarService.toggle_date(pattern, included, excluded, saturday)
    assert included == frozenset()
