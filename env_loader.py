"""
Environment variable loader for the sheet data server.
Handles loading credentials and spreadsheet settings from .env file or environment.
"""
import os
import json
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv

from config import ALLOWED_HOSTS, DEFAULT_PORT, DEFAULT_SHEET_NAME, DEFAULT_SPREADSHEET_ID


# Find .env file (look in current dir and parent dirs)
def _find_env_file() -> Path | None:
    current = Path(__file__).parent
    for _ in range(3):  # Check up to 3 levels up
        env_path = current / ".env"
        if env_path.exists():
            return env_path
        current = current.parent
    return None

_env_file = _find_env_file()
if _env_file:
    load_dotenv(_env_file)


def _parse_credentials_json(name: str, raw: str) -> dict:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Invalid {name}: {e}")


def get_google_credentials() -> dict:
    """
    Get Google Service Account credentials.

    Priority:
    1. GOOGLE_CREDENTIALS_FILE (path to JSON file)
    2. GOOGLE_CREDENTIALS_JSON (JSON string content)
    3. SERVICE_ACCOUNT_CREDENTIALS (JSON string content)

    Returns:
        dict: Parsed credentials dictionary

    Raises:
        RuntimeError: If no credentials are configured
    """
    # Option 1: File path
    creds_file = os.environ.get("GOOGLE_CREDENTIALS_FILE")
    if creds_file:
        creds_path = Path(creds_file)
        if not creds_path.exists():
            raise RuntimeError(f"GOOGLE_CREDENTIALS_FILE not found: {creds_file}")
        with open(creds_path, "r") as f:
            return json.load(f)

    # Option 2/3: JSON content
    for name in ("GOOGLE_CREDENTIALS_JSON", "SERVICE_ACCOUNT_CREDENTIALS"):
        creds_json = os.environ.get(name)
        if creds_json:
            return _parse_credentials_json(name, creds_json)

    raise RuntimeError(
        "No Google credentials configured. "
        "Set GOOGLE_CREDENTIALS_FILE, GOOGLE_CREDENTIALS_JSON "
        "or SERVICE_ACCOUNT_CREDENTIALS in .env"
    )


def get_spreadsheet_id() -> str:
    """Get the default spreadsheet ID (SHEET_SPREADSHEET_ID or config)."""
    return os.environ.get("SHEET_SPREADSHEET_ID") or DEFAULT_SPREADSHEET_ID


def get_sheet_name() -> str:
    """Get the default sheet name (SHEET_NAME or config)."""
    return os.environ.get("SHEET_NAME") or DEFAULT_SHEET_NAME


def get_port() -> int:
    """Get server port from environment."""
    return int(os.environ.get("PORT", str(DEFAULT_PORT)))


def get_allowed_hosts() -> list[str]:
    """Get allowed Host headers: config defaults plus MCP_ALLOWED_HOSTS (comma separated)."""
    extra = os.environ.get("MCP_ALLOWED_HOSTS", "")
    hosts = list(ALLOWED_HOSTS)
    for h in extra.split(","):
        h = h.strip()
        if h and h not in hosts:
            hosts.append(h)
    return hosts
