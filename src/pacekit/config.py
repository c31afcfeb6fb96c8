import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from pacekit.pacing.errors import ConfigError
from pacekit.utils.paths import resolve

DEFAULT_ENV_PATH = Path("config/pacekit/.env")
DEFAULT_CLIENT_SECRETS = Path("config/sheets/client_secret.json")
DEFAULT_TOKEN_FILE = Path("config/sheets/token.pickle")


def _maybe_load_dotenv(path: Path = DEFAULT_ENV_PATH) -> None:
	# Already-exported variables win over the file.
	env_file = resolve(path)
	if env_file.exists():
		load_dotenv(env_file, override=False)


@dataclass(frozen=True)
class PacingSettings:
	timezone: ZoneInfo
	window_months: int
	budgets_table: str
	spend_table: str
	output_table: str


@dataclass(frozen=True)
class SheetsAuth:
	spreadsheet_id: str
	client_secrets: Path
	token_file: Path


def _int_env(name: str, default: int) -> int:
	raw = os.getenv(name, "").strip()
	if not raw:
		return default
	try:
		value = int(raw)
	except ValueError:
		raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
	if value <= 0:
		raise ConfigError(f"{name} must be > 0, got {value}")
	return value


def load_zone(name: str) -> ZoneInfo:
	try:
		return ZoneInfo(name)
	except (ZoneInfoNotFoundError, ValueError):
		raise ConfigError(f"Unknown time zone {name!r}") from None


def load_settings(env_path: Path = DEFAULT_ENV_PATH) -> PacingSettings:
	"""Load pipeline settings from env or optional .env file.
	Order of precedence: process env > .env file > defaults.
	"""
	_maybe_load_dotenv(env_path)
	return PacingSettings(
		timezone=load_zone(os.getenv("PACEKIT_TIMEZONE", "UTC").strip() or "UTC"),
		window_months=_int_env("PACEKIT_WINDOW_MONTHS", 9),
		budgets_table=os.getenv("PACEKIT_BUDGETS_TABLE", "campaign budgets"),
		spend_table=os.getenv("PACEKIT_SPEND_TABLE", "campaign spend"),
		output_table=os.getenv("PACEKIT_OUTPUT_TABLE", "daily budget report"),
	)


def load_sheets_auth(env_path: Path = DEFAULT_ENV_PATH) -> SheetsAuth:
	_maybe_load_dotenv(env_path)
	secrets = os.getenv("SHEETS_CLIENT_SECRETS") or str(DEFAULT_CLIENT_SECRETS)
	token = os.getenv("SHEETS_TOKEN_FILE") or str(DEFAULT_TOKEN_FILE)
	return SheetsAuth(
		spreadsheet_id=os.getenv("SHEETS_SPREADSHEET_ID", ""),
		client_secrets=resolve(secrets),
		token_file=resolve(token),
	)
