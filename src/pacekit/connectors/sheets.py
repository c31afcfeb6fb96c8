"""
Google Sheets tables.

Each table is a sheet (tab) in one spreadsheet. Input sheets must already
exist; the destination sheet is created on first write and is cleared before
every write.

Dates are requested as serial day numbers so the parser never has to guess a
locale's day/month order.
"""

from __future__ import annotations

import pickle
from typing import Any, Dict, List, Optional, Sequence

import google.auth.transport.requests
from google.auth.exceptions import RefreshError
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from pacekit.config import SheetsAuth, load_sheets_auth
from pacekit.pacing.errors import ConfigError, MissingSheetError, PacingError
from pacekit.utils.logs import report

logger = report.settings(__file__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def get_creds(auth: SheetsAuth):
	"""Load cached OAuth credentials, refreshing or re-running the consent flow as needed."""
	token = auth.token_file
	if token.exists():
		logger.info("Token file found at %s", token)
		creds = pickle.loads(token.read_bytes())
		if creds.expired and creds.refresh_token:
			logger.info("Token expired, attempting refresh...")
			try:
				creds.refresh(google.auth.transport.requests.Request())
				token.write_bytes(pickle.dumps(creds))
				logger.info("Token refreshed successfully.")
			except RefreshError as e:
				# Revoked or stale; fall through to a fresh OAuth flow.
				logger.warning("Token refresh failed (%s). Removing stale token and starting OAuth flow...", e)
				token.unlink(missing_ok=True)
				creds = None
		if creds and creds.valid:
			return creds

	if not auth.client_secrets.exists():
		raise ConfigError(f"OAuth client secrets not found at {auth.client_secrets}")
	logger.info("Using client secrets file: %s", auth.client_secrets)
	flow = InstalledAppFlow.from_client_secrets_file(str(auth.client_secrets), SCOPES)
	creds = flow.run_local_server(port=0)
	token.parent.mkdir(parents=True, exist_ok=True)
	token.write_bytes(pickle.dumps(creds))
	logger.info("Token created and saved to %s", token)
	return creds


def quote_title(title: str) -> str:
	"""A1-notation sheet reference; single quotes are doubled."""
	return "'" + title.replace("'", "''") + "'"


class SheetsTables:
	def __init__(self, auth: Optional[SheetsAuth] = None, service: Any = None) -> None:
		self.auth = auth or load_sheets_auth()
		if not self.auth.spreadsheet_id:
			raise ConfigError("SHEETS_SPREADSHEET_ID not set (set in config/pacekit/.env or environment)")
		self.spreadsheet_id = self.auth.spreadsheet_id
		self.service = service or build("sheets", "v4", credentials=get_creds(self.auth), cache_discovery=False)

	def _execute(self, request, what: str) -> Dict[str, Any]:
		try:
			return request.execute()
		except HttpError as e:
			raise PacingError(f"Sheets API {what} failed: HTTP {e.resp.status} {e.reason}") from e

	def sheet_ids(self) -> Dict[str, int]:
		"""Map of sheet title -> sheetId for the spreadsheet."""
		meta = self._execute(
			self.service.spreadsheets().get(
				spreadsheetId=self.spreadsheet_id,
				fields="sheets.properties(sheetId,title)",
			),
			"metadata lookup",
		)
		return {
			s["properties"]["title"]: s["properties"]["sheetId"]
			for s in meta.get("sheets", [])
		}

	def read_rows(self, table: str) -> List[List[Any]]:
		if table not in self.sheet_ids():
			raise MissingSheetError(table, f"spreadsheet {self.spreadsheet_id}")
		resp = self._execute(
			self.service.spreadsheets().values().get(
				spreadsheetId=self.spreadsheet_id,
				range=quote_title(table),
				valueRenderOption="UNFORMATTED_VALUE",
				dateTimeRenderOption="SERIAL_NUMBER",
			),
			f"read of {table!r}",
		)
		rows = resp.get("values", [])
		logger.info("Read %d rows from sheet %r", len(rows), table)
		return rows

	def ensure_sheet(self, table: str) -> int:
		"""Return the sheetId for *table*, adding the sheet when it is missing."""
		existing = self.sheet_ids()
		if table in existing:
			return existing[table]
		resp = self._execute(
			self.service.spreadsheets().batchUpdate(
				spreadsheetId=self.spreadsheet_id,
				body={"requests": [{"addSheet": {"properties": {"title": table}}}]},
			),
			f"creation of {table!r}",
		)
		sheet_id = resp["replies"][0]["addSheet"]["properties"]["sheetId"]
		logger.info("Created sheet %r (id %s)", table, sheet_id)
		return sheet_id

	def write_rows(self, table: str, header: Sequence[str], rows: Sequence[Sequence[Any]]) -> int:
		self.ensure_sheet(table)
		values = self.service.spreadsheets().values()
		self._execute(
			values.clear(spreadsheetId=self.spreadsheet_id, range=quote_title(table), body={}),
			f"clear of {table!r}",
		)
		body = {"values": [list(header)] + [list(r) for r in rows]}
		self._execute(
			values.update(
				spreadsheetId=self.spreadsheet_id,
				range=f"{quote_title(table)}!A1",
				valueInputOption="USER_ENTERED",
				body=body,
			),
			f"write of {table!r}",
		)
		logger.info("Wrote %d rows to sheet %r", len(rows), table)
		return len(rows)
