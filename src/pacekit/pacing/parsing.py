"""
Raw table rows -> typed records.

Input tables arrive as lists of cells (header row first), the way both the
Sheets API and ``DataFrame.values.tolist()`` hand them over. Column positions
are fixed:

    campaign budgets:  [1] campaign name, [3] effective month date, [4] monthly budget
    campaign spend:    [3] date, [4] campaign name, [5] spend amount

Every date is truncated to day granularity in one reference time zone. Any
cell that cannot be read as the expected type raises ``MalformedRowError``
naming the table, row and column; nothing is coerced to zero.
"""

from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Sequence
from zoneinfo import ZoneInfo

import pandas as pd

from .errors import MalformedRowError
from .models import CampaignBudgetRecord, SpendRecord

BUDGET_CAMPAIGN_COL = 1
BUDGET_MONTH_COL = 3
BUDGET_AMOUNT_COL = 4

SPEND_DATE_COL = 3
SPEND_CAMPAIGN_COL = 4
SPEND_AMOUNT_COL = 5

# Google Sheets serial day 0
SHEETS_EPOCH = pd.Timestamp(1899, 12, 30)

_ACCOUNTING_NEGATIVE = re.compile(r"^\((.*)\)$")


def _is_blank(cell: Any) -> bool:
    if cell is None:
        return True
    if isinstance(cell, str):
        return not cell.strip()
    if isinstance(cell, float):
        return math.isnan(cell)
    return False


def _is_real(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def to_day(value: Any, tz: ZoneInfo) -> date:
    """Normalize a date-like cell to a calendar day in *tz*.

    Zone-aware values are converted to *tz* first; naive values are assumed
    to already be in *tz*. Numbers are Sheets serial days.
    """
    if _is_real(value):
        serial = float(value)
        if not math.isfinite(serial):
            raise ValueError("not a finite serial day")
        ts = SHEETS_EPOCH + pd.Timedelta(days=serial)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty date")
        ts = pd.Timestamp(text)
    elif isinstance(value, (datetime, date)):
        ts = pd.Timestamp(value)
    else:
        raise ValueError(f"unsupported date type {type(value).__name__}")

    if pd.isna(ts):
        raise ValueError("empty date")
    if ts.tzinfo is not None:
        ts = ts.tz_convert(tz)
    return ts.date()


def to_number(value: Any) -> float:
    """Read a numeric cell; accepts ``$``, thousands separators and ``(1.00)``."""
    if _is_real(value):
        num = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "").strip()
        m = _ACCOUNTING_NEGATIVE.match(text)
        if m:
            text = "-" + m.group(1).strip()
        if not text:
            raise ValueError("empty number")
        num = float(text)
    else:
        raise ValueError(f"unsupported number type {type(value).__name__}")
    if not math.isfinite(num):
        raise ValueError("not a finite number")
    return num


def to_campaign(value: Any) -> str:
    if _is_blank(value):
        raise ValueError("empty campaign name")
    if isinstance(value, float) and value.is_integer():
        # Sheets hands numeric ids back as floats
        return str(int(value))
    return str(value).strip()


def _data_rows(rows: Iterable[Sequence[Any]]) -> Iterable[tuple[int, Sequence[Any]]]:
    """Yield ``(row_number, cells)`` for non-blank rows after the header."""
    for i, row in enumerate(rows):
        if i == 0:
            continue
        if all(_is_blank(c) for c in row):
            continue
        yield i + 1, row


def _cell(table: str, row_number: int, row: Sequence[Any], col: int, parse, what: str):
    if col >= len(row):
        raise MalformedRowError(table, row_number, col, f"missing {what} column")
    value = row[col]
    try:
        return parse(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedRowError(table, row_number, col, f"invalid {what}: {e}", value) from e


def parse_budget_rows(
    rows: Sequence[Sequence[Any]],
    tz: ZoneInfo,
    table: str = "campaign budgets",
) -> List[CampaignBudgetRecord]:
    out: List[CampaignBudgetRecord] = []
    for n, row in _data_rows(rows):
        campaign = _cell(table, n, row, BUDGET_CAMPAIGN_COL, to_campaign, "campaign")
        day = _cell(table, n, row, BUDGET_MONTH_COL, lambda v: to_day(v, tz), "month")
        budget = _cell(table, n, row, BUDGET_AMOUNT_COL, to_number, "monthly budget")
        out.append(CampaignBudgetRecord(
            campaign=campaign,
            effective_month=day.replace(day=1),
            monthly_budget=budget,
        ))
    return out


def parse_spend_rows(
    rows: Sequence[Sequence[Any]],
    tz: ZoneInfo,
    table: str = "campaign spend",
) -> List[SpendRecord]:
    out: List[SpendRecord] = []
    for n, row in _data_rows(rows):
        day = _cell(table, n, row, SPEND_DATE_COL, lambda v: to_day(v, tz), "date")
        campaign = _cell(table, n, row, SPEND_CAMPAIGN_COL, to_campaign, "campaign")
        amount = _cell(table, n, row, SPEND_AMOUNT_COL, to_number, "spend amount")
        out.append(SpendRecord(date=day, campaign=campaign, amount=amount))
    return out
