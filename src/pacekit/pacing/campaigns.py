from __future__ import annotations

from datetime import date
from typing import Iterable, List

from .models import CampaignBudgetRecord

WINDOW_MONTHS = 9


def shift_month(month: date, offset: int) -> date:
    """First day of the month *offset* calendar months away from *month*."""
    idx = month.year * 12 + (month.month - 1) + offset
    return date(idx // 12, idx % 12 + 1, 1)


def window_months(anchor: date, months: int = WINDOW_MONTHS) -> List[date]:
    """Month starts from the anchor month back ``months - 1`` months, newest first."""
    start = anchor.replace(day=1)
    return [shift_month(start, -k) for k in range(months)]


def filter_campaigns(
    records: Iterable[CampaignBudgetRecord],
    anchor: date,
    months: int = WINDOW_MONTHS,
) -> List[CampaignBudgetRecord]:
    """Keep budget records whose effective month lies in the trailing window.

    Order is preserved and duplicates pass through untouched.
    """
    allowed = {(m.year, m.month) for m in window_months(anchor, months)}
    return [
        r for r in records
        if (r.effective_month.year, r.effective_month.month) in allowed
    ]
