"""
Daily pacing report assembly.

Walks the trailing month window (newest month first), every calendar day of
each month in ascending order, and every budget record for that month in
the order given. Rows exist only where a budget record does; spend without a
budget produces nothing.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Sequence

import pandas as pd

from . import calculator as calc
from .aggregator import SpendIndex
from .campaigns import WINDOW_MONTHS, window_months
from .models import OUTPUT_COLUMNS, CampaignBudgetRecord, ReportRow


def month_days(month: date) -> List[date]:
    return [month.replace(day=d) for d in range(1, calc.days_in_month(month) + 1)]


def build_row(record: CampaignBudgetRecord, index: SpendIndex, day: date, today: date) -> ReportRow:
    campaign = record.campaign
    budget = record.monthly_budget
    daily = index.spend(day, campaign)
    dynamic = calc.dynamic_budget(budget, index, campaign, day, today)
    crude = calc.crude_budget(budget, day)
    return ReportRow(
        date=day,
        campaign=campaign,
        monthly_spend_to_date=calc.running_total(index, campaign, day, inclusive=False),
        daily_spend=daily,
        monthly_spend_end_of_day=calc.running_total(index, campaign, day, inclusive=True),
        dynamic_budget=dynamic,
        dynamic_underspend=calc.underspend(dynamic, daily),
        crude_budget=crude,
        crude_underspend=calc.underspend(crude, daily),
        monthly_budget=budget,
    )


def build_report(
    campaigns: Sequence[CampaignBudgetRecord],
    index: SpendIndex,
    today: date,
    months: int = WINDOW_MONTHS,
) -> List[ReportRow]:
    by_month: Dict[date, List[CampaignBudgetRecord]] = {}
    for r in campaigns:
        by_month.setdefault(r.effective_month.replace(day=1), []).append(r)

    rows: List[ReportRow] = []
    for month in window_months(today, months):
        records = by_month.get(month)
        if not records:
            continue
        for day in month_days(month):
            for record in records:
                rows.append(build_row(record, index, day, today))
    return rows


def rows_to_values(rows: Sequence[ReportRow]) -> List[list]:
    return [r.as_values() for r in rows]


def rows_to_frame(rows: Sequence[ReportRow]) -> pd.DataFrame:
    return pd.DataFrame(rows_to_values(rows), columns=OUTPUT_COLUMNS)
