#!/usr/bin/env python3
"""
Daily Budget Pacing Report

Builds one row per (date, campaign) for the trailing nine months with:
- month-to-date spend before and through the day, and the day's spend
- a simple daily budget (monthly budget / days in month) and its underspend
- a dynamic daily budget that adapts to spend so far, and its underspend

Inputs are two tables ("campaign budgets", "campaign spend"); the output
table is cleared and rewritten on every run.

Usage:
  python -m pacekit.reports.daily_pacing --backend csv --data-dir data/pacing
  pacekit-pacing --backend sheets --spreadsheet-id 1AbC... --today 2025-11-10

Settings (time zone, window length, table names) come from the environment
or config/pacekit/.env; see pacekit.config.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, List
from zoneinfo import ZoneInfo

from pacekit.config import PacingSettings, load_settings, load_sheets_auth
from pacekit.connectors.local import CsvTables
from pacekit.pacing import (
    OUTPUT_COLUMNS,
    PacingError,
    ReportRow,
    aggregate,
    build_report,
    filter_campaigns,
    parse_budget_rows,
    parse_spend_rows,
    rows_to_values,
)
from pacekit.utils.logs import report
from pacekit.utils.paths import resolve
from pacekit.utils.style import ansi

logger = report.settings(__file__)

DEFAULT_DATA_DIR = Path("data") / "pacing"


@dataclass
class RunResult:
    today: date
    rows: List[ReportRow]
    written: bool


def today_in(zone: ZoneInfo) -> date:
    """The run's single reference date; read from the clock once."""
    return datetime.now(zone).date()


def generate(
    tables: Any,
    today: date,
    settings: PacingSettings,
    write: bool = True,
) -> RunResult:
    """Read both inputs, build the report and (optionally) overwrite the destination.

    Both inputs are read and parsed before the destination is touched, so any
    error leaves the previous output in place.
    """
    logger.info("Building pacing report for %s (%s, %d months)", today, settings.timezone.key, settings.window_months)

    budget_rows = tables.read_rows(settings.budgets_table)
    spend_rows = tables.read_rows(settings.spend_table)

    budgets = parse_budget_rows(budget_rows, settings.timezone, table=settings.budgets_table)
    spend = parse_spend_rows(spend_rows, settings.timezone, table=settings.spend_table)
    index = aggregate(spend)
    logger.info("Indexed %d spend records over %d days", len(spend), len(index))

    campaigns = filter_campaigns(budgets, today, settings.window_months)
    logger.info("Kept %d of %d budget records in window", len(campaigns), len(budgets))

    rows = build_report(campaigns, index, today, settings.window_months)
    if write:
        tables.write_rows(settings.output_table, OUTPUT_COLUMNS, rows_to_values(rows))
        logger.info("Wrote %d rows to %r", len(rows), settings.output_table)
    return RunResult(today=today, rows=rows, written=write)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description='Daily Budget Pacing Report')
    p.add_argument('--backend', choices=['csv', 'sheets'], default='csv', help='Where the tables live')
    p.add_argument('--data-dir', default=str(DEFAULT_DATA_DIR), help='Directory of <table>.csv files (csv backend)')
    p.add_argument('--spreadsheet-id', default='', help='Spreadsheet id (sheets backend; overrides SHEETS_SPREADSHEET_ID)')
    p.add_argument('--today', default='', help='Run date YYYY-MM-DD (default: today in PACEKIT_TIMEZONE)')
    p.add_argument('--months', type=int, default=None, help='Trailing window length in months')
    p.add_argument('--budgets', default='', help='Budget table name')
    p.add_argument('--spend', default='', help='Spend table name')
    p.add_argument('--output', default='', help='Destination table name')
    p.add_argument('--dry-run', action='store_true', help='Build the report without writing it')
    return p.parse_args(argv)


def apply_overrides(settings: PacingSettings, ns: argparse.Namespace) -> PacingSettings:
    if ns.months is not None and ns.months <= 0:
        raise SystemExit('--months must be > 0')
    return replace(
        settings,
        window_months=ns.months or settings.window_months,
        budgets_table=ns.budgets or settings.budgets_table,
        spend_table=ns.spend or settings.spend_table,
        output_table=ns.output or settings.output_table,
    )


def parse_today(value: str, zone: ZoneInfo) -> date:
    if not value:
        return today_in(zone)
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except ValueError:
        raise SystemExit(f'--today must be YYYY-MM-DD, got {value!r}') from None


def open_tables(ns: argparse.Namespace) -> Any:
    if ns.backend == 'sheets':
        # Imported lazily so csv runs do not need the Google client stack.
        from pacekit.connectors.sheets import SheetsTables

        auth = load_sheets_auth()
        if ns.spreadsheet_id:
            auth = replace(auth, spreadsheet_id=ns.spreadsheet_id)
        return SheetsTables(auth)
    return CsvTables(resolve(ns.data_dir, Path.cwd()))


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(argv)
    try:
        settings = apply_overrides(load_settings(), ns)
        today = parse_today(ns.today, settings.timezone)
        tables = open_tables(ns)
        result = generate(tables, today, settings, write=not ns.dry_run)
    except PacingError as e:
        logger.error("Pacing report failed: %s", e)
        raise SystemExit(f"{ansi.red}Error:{ansi.reset} {e}") from None

    campaigns = len({r.campaign for r in result.rows})
    print(f"{ansi.magenta}Pacing report{ansi.reset} for {ansi.cyan}{result.today}{ansi.reset}: "
          f"{ansi.green}{len(result.rows)}{ansi.reset} rows, {campaigns} campaign(s)")
    if result.written:
        print(f"  Wrote {ansi.cyan}{settings.output_table}{ansi.reset}")
    else:
        print(f"  {ansi.yellow}Dry run{ansi.reset}, nothing written")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
