from datetime import date

import pytest

from pacekit.pacing import (
    SpendRecord,
    aggregate,
    crude_budget,
    days_in_month,
    days_left,
    dynamic_budget,
    running_total,
    underspend,
)


@pytest.fixture()
def april_index():
    """Campaign A spends 100/day on April 1st-10th 2025."""
    return aggregate([SpendRecord(date(2025, 4, d), "A", 100.0) for d in range(1, 11)])


def test_days_in_month_handles_leap_years():
    assert days_in_month(date(2024, 2, 10)) == 29
    assert days_in_month(date(2025, 2, 10)) == 28
    assert days_in_month(date(2025, 4, 1)) == 30
    assert days_in_month(date(2025, 12, 31)) == 31


def test_days_left_bounds():
    for d in (date(2024, 2, 1), date(2025, 4, 1), date(2025, 12, 1)):
        assert days_left(d) == days_in_month(d)
    assert days_left(date(2024, 2, 29)) == 1
    assert days_left(date(2025, 4, 30)) == 1
    assert days_left(date(2025, 4, 10)) == 21


def test_running_total_inclusive_and_exclusive(april_index):
    assert running_total(april_index, "A", date(2025, 4, 10), inclusive=True) == 1000.0
    assert running_total(april_index, "A", date(2025, 4, 10), inclusive=False) == 900.0
    assert running_total(april_index, "A", date(2025, 4, 1), inclusive=False) == 0.0
    assert running_total(april_index, "A", date(2025, 4, 30), inclusive=True) == 1000.0
    assert running_total(april_index, "B", date(2025, 4, 30), inclusive=True) == 0.0


def test_running_total_difference_is_daily_spend(april_index):
    for d in range(1, 31):
        day = date(2025, 4, d)
        diff = (running_total(april_index, "A", day, inclusive=True)
                - running_total(april_index, "A", day, inclusive=False))
        assert diff == april_index.spend(day, "A")


def test_running_total_resets_at_month_boundary():
    index = aggregate([
        SpendRecord(date(2025, 3, 31), "A", 500.0),
        SpendRecord(date(2025, 4, 1), "A", 20.0),
    ])
    assert running_total(index, "A", date(2025, 4, 1), inclusive=False) == 0.0
    assert running_total(index, "A", date(2025, 4, 1), inclusive=True) == 20.0
    assert running_total(index, "A", date(2025, 3, 31), inclusive=True) == 500.0


def test_crude_budget_reconstructs_monthly_budget():
    budget = 1234.56
    month = [date(2024, 2, d) for d in range(1, 30)]
    daily = [crude_budget(budget, d) for d in month]
    assert len(set(daily)) == 1
    assert sum(daily) == pytest.approx(budget)
    assert crude_budget(3000.0, date(2025, 4, 15)) == 100.0


def test_dynamic_budget_on_today(april_index):
    today = date(2025, 4, 10)
    assert dynamic_budget(3000.0, april_index, "A", today, today) == 100.0


def test_dynamic_budget_is_flat_from_today_on(april_index):
    today = date(2025, 4, 10)
    values = {dynamic_budget(3000.0, april_index, "A", date(2025, 4, d), today) for d in range(10, 31)}
    assert values == {100.0}


def test_dynamic_budget_for_past_days_recomputes_per_day(april_index):
    today = date(2025, 4, 20)
    # spend matched the crude pace, so every past pace is 100
    assert dynamic_budget(3000.0, april_index, "A", date(2025, 4, 5), today) == pytest.approx(100.0)
    # no spend after the 10th: (3000 - 1000) / days left counting the 15th
    assert dynamic_budget(3000.0, april_index, "A", date(2025, 4, 15), today) == pytest.approx(2000.0 / 16)
    assert dynamic_budget(3000.0, april_index, "A", date(2025, 4, 1), today) == pytest.approx(100.0)


def test_dynamic_budget_from_today_uses_todays_spend(april_index):
    today = date(2025, 4, 20)
    expected = (3000.0 - 1000.0) / 10
    assert dynamic_budget(3000.0, april_index, "A", today, today) == pytest.approx(expected)
    assert dynamic_budget(3000.0, april_index, "A", date(2025, 4, 29), today) == pytest.approx(expected)


def test_dynamic_budget_last_day_of_month():
    index = aggregate([SpendRecord(date(2025, 4, 30), "A", 50.0)])
    today = date(2025, 4, 30)
    assert dynamic_budget(300.0, index, "A", today, today) == 250.0


def test_underspend_sign_convention():
    assert underspend(100.0, 80.0) == 20.0
    assert underspend(100.0, 130.0) == -30.0
    assert underspend(100.0, 0.0) == 100.0
