from datetime import date
from pathlib import Path
from zoneinfo import ZoneInfo

import pandas as pd
import pytest

from pacekit.config import PacingSettings

ENV_VARS = [
    "PACEKIT_TIMEZONE",
    "PACEKIT_WINDOW_MONTHS",
    "PACEKIT_BUDGETS_TABLE",
    "PACEKIT_SPEND_TABLE",
    "PACEKIT_OUTPUT_TABLE",
    "PACEKIT_LOG_DIR",
    "SHEETS_SPREADSHEET_ID",
    "SHEETS_CLIENT_SECRETS",
    "SHEETS_TOKEN_FILE",
]

BUDGET_HEADER = ["Id", "Campaign", "Channel", "Month", "Budget"]
SPEND_HEADER = ["Id", "Source", "Account", "Date", "Campaign", "Spend"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from exported settings and from anything a .env load adds."""
    for name in ENV_VARS:
        # setenv first so monkeypatch records the original state and restores it
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture()
def utc() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture()
def settings(utc) -> PacingSettings:
    return PacingSettings(
        timezone=utc,
        window_months=9,
        budgets_table="campaign budgets",
        spend_table="campaign spend",
        output_table="daily budget report",
    )


def budget_row(campaign, month, budget):
    return ["", campaign, "paid social", month, budget]


def spend_row(day, campaign, amount):
    return ["", "northbeam", "acct-1", day, campaign, amount]


@pytest.fixture()
def april_tables():
    """Campaign A (3000/month in 30-day April 2025) spending 100/day on the 1st-10th."""
    budgets = [BUDGET_HEADER, budget_row("A", "2025-04-01", "3000")]
    spend = [SPEND_HEADER] + [
        spend_row(date(2025, 4, d).isoformat(), "A", "100") for d in range(1, 11)
    ]
    return budgets, spend


@pytest.fixture()
def sample_csvs(tmp_path: Path, april_tables):
    """Write the April tables as CSVs the local backend can read."""
    data_dir = tmp_path / "pacing"
    data_dir.mkdir(parents=True)
    budgets, spend = april_tables
    pd.DataFrame(budgets[1:], columns=budgets[0]).to_csv(data_dir / "campaign budgets.csv", index=False)
    pd.DataFrame(spend[1:], columns=spend[0]).to_csv(data_dir / "campaign spend.csv", index=False)
    return data_dir


class _Request:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


def _title(a1_range: str) -> str:
    title = a1_range.split("!")[0]
    if title.startswith("'") and title.endswith("'"):
        title = title[1:-1].replace("''", "'")
    return title


class _FakeValues:
    def __init__(self, service):
        self.service = service

    def get(self, spreadsheetId, range, **kwargs):
        self.service.calls.append(("values.get", range, kwargs))
        return _Request(lambda: {"values": [list(r) for r in self.service.sheets[_title(range)]]})

    def clear(self, spreadsheetId, range, body=None):
        self.service.calls.append(("values.clear", range, {}))

        def run():
            self.service.sheets[_title(range)] = []
            return {}
        return _Request(run)

    def update(self, spreadsheetId, range, valueInputOption, body):
        self.service.calls.append(("values.update", range, {"valueInputOption": valueInputOption}))

        def run():
            self.service.sheets[_title(range)] = [list(r) for r in body["values"]]
            return {"updatedRows": len(body["values"])}
        return _Request(run)


class FakeSheetsService:
    """In-memory stand-in for ``build("sheets", "v4", ...)``."""

    def __init__(self, sheets=None):
        self.sheets = dict(sheets or {})
        self.calls = []

    def spreadsheets(self):
        return self

    def values(self):
        return _FakeValues(self)

    def get(self, spreadsheetId, fields=None):
        self.calls.append(("get", spreadsheetId, {}))
        return _Request(lambda: {
            "sheets": [
                {"properties": {"title": t, "sheetId": i}}
                for i, t in enumerate(self.sheets)
            ]
        })

    def batchUpdate(self, spreadsheetId, body):
        self.calls.append(("batchUpdate", spreadsheetId, body))

        def run():
            title = body["requests"][0]["addSheet"]["properties"]["title"]
            self.sheets[title] = []
            return {"replies": [{"addSheet": {"properties": {"title": title, "sheetId": len(self.sheets) - 1}}}]}
        return _Request(run)


@pytest.fixture()
def fake_sheets():
    return FakeSheetsService
