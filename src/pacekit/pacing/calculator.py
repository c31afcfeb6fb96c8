"""
Budget pacing arithmetic.

All functions are pure: the spend index, campaign and dates are passed in,
and "today" is always an explicit argument, never read from the clock.

Running totals are scoped to the calendar month of the date they are asked
about and reset on the 1st.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from .aggregator import SpendIndex


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def days_left(day: date) -> int:
    """Days remaining in the month counting *day* itself."""
    return days_in_month(day) - day.day + 1


def running_total(index: SpendIndex, campaign: str, day: date, inclusive: bool) -> float:
    """Month-to-date spend for *campaign* before *day* (or through it when *inclusive*)."""
    last = day.day if inclusive else day.day - 1
    start = day.replace(day=1)
    return sum(index.spend(start + timedelta(days=i), campaign) for i in range(last))


def crude_budget(monthly_budget: float, day: date) -> float:
    """Static daily allocation: the monthly budget spread evenly over the month."""
    return monthly_budget / days_in_month(day)


def dynamic_budget(
    monthly_budget: float,
    index: SpendIndex,
    campaign: str,
    day: date,
    today: date,
) -> float:
    """Remaining budget divided by remaining days.

    For *day* before *today* the pace is what it should have been that
    morning: budget left before *day* over the days left including *day*.

    For *day* on or after *today* a single forward pace is used for every
    date: budget left after today's spend over the days still to come after
    today. On the last day of the month that is one day.
    """
    if day < today:
        remaining = monthly_budget - running_total(index, campaign, day, inclusive=False)
        return remaining / days_left(day)
    remaining = monthly_budget - running_total(index, campaign, today, inclusive=True)
    return remaining / max(days_left(today) - 1, 1)


def underspend(budget: float, actual: float) -> float:
    """Budget minus actual spend; negative means overspend."""
    return budget - actual
