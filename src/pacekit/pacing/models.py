from __future__ import annotations

from dataclasses import dataclass
from datetime import date


OUTPUT_COLUMNS = [
    "date",
    "Campaign / Program",
    "Monthly Spend To Date",
    "Daily Spend",
    "Monthly Spend (To End of Day)",
    "Budget (dynamic)",
    "Daily Underspend (Overspend)",
    "Budget (simple)",
    "underspend_crude",
    "Monthly Budget",
]


@dataclass(frozen=True)
class CampaignBudgetRecord:
    campaign: str
    effective_month: date      # always the 1st of the month
    monthly_budget: float


@dataclass(frozen=True)
class SpendRecord:
    date: date
    campaign: str
    amount: float


@dataclass(frozen=True)
class ReportRow:
    date: date
    campaign: str
    monthly_spend_to_date: float         # excludes the row's own day
    daily_spend: float
    monthly_spend_end_of_day: float      # includes the row's own day
    dynamic_budget: float
    dynamic_underspend: float
    crude_budget: float
    crude_underspend: float
    monthly_budget: float

    def as_values(self) -> list:
        """Cells in ``OUTPUT_COLUMNS`` order, dates as ``YYYY-MM-DD``."""
        return [
            self.date.isoformat(),
            self.campaign,
            self.monthly_spend_to_date,
            self.daily_spend,
            self.monthly_spend_end_of_day,
            self.dynamic_budget,
            self.dynamic_underspend,
            self.crude_budget,
            self.crude_underspend,
            self.monthly_budget,
        ]
