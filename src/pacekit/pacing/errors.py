"""Error kinds raised by the pacing pipeline.

Every failure aborts the whole run; nothing is written to the destination
table once one of these is raised.
"""

from __future__ import annotations

from typing import Any, Optional


class PacingError(RuntimeError):
    """Base class for all pipeline failures."""


class ConfigError(PacingError):
    """Invalid settings or missing credentials."""


class MissingSheetError(PacingError):
    """A named input table does not exist."""

    def __init__(self, table: str, source: str = "") -> None:
        self.table = table
        where = f" in {source}" if source else ""
        super().__init__(f"Table {table!r} not found{where}")


class MalformedRowError(PacingError, ValueError):
    """A row is missing a column or holds an unparseable date/number.

    ``row_number`` is 1-based the way a spreadsheet shows it, so the header
    is row 1 and the first data row is row 2.
    """

    def __init__(
        self,
        table: str,
        row_number: int,
        column: int,
        reason: str,
        value: Optional[Any] = None,
    ) -> None:
        self.table = table
        self.row_number = row_number
        self.column = column
        self.reason = reason
        self.value = value
        msg = f"{table} row {row_number}, column {column}: {reason}"
        if value is not None:
            msg += f" (got {value!r})"
        super().__init__(msg)
