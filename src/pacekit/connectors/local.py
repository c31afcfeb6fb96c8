"""CSV-directory tables.

One file per table: ``<directory>/<table name>.csv``. Reads return every row
(header included) as raw string cells so parsing stays in one place; writes
replace the whole file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Sequence

import pandas as pd

from pacekit.pacing.errors import MissingSheetError, PacingError
from pacekit.utils.logs import report

logger = report.settings(__file__)


class CsvTables:
	def __init__(self, directory: str | Path) -> None:
		self.directory = Path(directory)

	def path_for(self, table: str) -> Path:
		return self.directory / f"{table}.csv"

	def read_rows(self, table: str) -> List[List[Any]]:
		path = self.path_for(table)
		if not path.exists():
			raise MissingSheetError(table, str(self.directory))
		try:
			df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=False)
		except pd.errors.EmptyDataError:
			return []
		except pd.errors.ParserError as e:
			raise PacingError(f"Cannot parse {path}: {e}") from e
		rows = df.values.tolist()
		logger.info("Read %d rows from %s", len(rows), path)
		return rows

	def write_rows(self, table: str, header: Sequence[str], rows: Sequence[Sequence[Any]]) -> Path:
		self.directory.mkdir(parents=True, exist_ok=True)
		path = self.path_for(table)
		df = pd.DataFrame(list(rows), columns=list(header))
		df.to_csv(path, index=False)
		logger.info("Wrote %d rows to %s", len(df), path)
		return path
