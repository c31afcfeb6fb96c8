"""Core pacing pipeline: parse -> aggregate -> filter -> calculate -> build."""

from .aggregator import SpendIndex, aggregate
from .calculator import (
    crude_budget,
    days_in_month,
    days_left,
    dynamic_budget,
    running_total,
    underspend,
)
from .campaigns import WINDOW_MONTHS, filter_campaigns, window_months
from .errors import ConfigError, MalformedRowError, MissingSheetError, PacingError
from .models import OUTPUT_COLUMNS, CampaignBudgetRecord, ReportRow, SpendRecord
from .parsing import parse_budget_rows, parse_spend_rows
from .report import build_report, rows_to_frame, rows_to_values

__all__ = [
    "OUTPUT_COLUMNS",
    "WINDOW_MONTHS",
    "CampaignBudgetRecord",
    "ConfigError",
    "MalformedRowError",
    "MissingSheetError",
    "PacingError",
    "ReportRow",
    "SpendIndex",
    "SpendRecord",
    "aggregate",
    "build_report",
    "crude_budget",
    "days_in_month",
    "days_left",
    "dynamic_budget",
    "filter_campaigns",
    "parse_budget_rows",
    "parse_spend_rows",
    "rows_to_frame",
    "rows_to_values",
    "running_total",
    "underspend",
    "window_months",
]
