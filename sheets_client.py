"""
Google Sheets API client using gspread.
Provides Service Account authentication and batched range reads.
"""
import json
import gspread
from gspread.exceptions import GSpreadException
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from typing import Any

from config import SCOPES
from lib.errors import TransportError
from lib.types import BatchData


class SheetsClient:
    """Wrapper around gspread for read-only Google Sheets access."""

    def __init__(self, credentials_json: str | dict, scopes: list[str] | None = None):
        """
        Initialize the client with Service Account credentials.

        Args:
            credentials_json: Either a JSON string or dict containing
                             the Service Account credentials.
            scopes: OAuth scopes (defaults to read-only spreadsheets)
        """
        if isinstance(credentials_json, str):
            credentials_json = json.loads(credentials_json)
        creds = Credentials.from_service_account_info(credentials_json, scopes=scopes or SCOPES)
        self.gc = gspread.authorize(creds)
        self._spreadsheet_cache: dict[str, gspread.Spreadsheet] = {}

    def open_by_id(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        """Open a spreadsheet by ID with caching."""
        if spreadsheet_id not in self._spreadsheet_cache:
            self._spreadsheet_cache[spreadsheet_id] = self.gc.open_by_key(spreadsheet_id)
        return self._spreadsheet_cache[spreadsheet_id]

    def get_batch_data(self, spreadsheet_id: str, range_keys: list[str]) -> BatchData:
        """
        Read several ranges in one values:batchGet call.

        The API echoes normalized ranges (e.g. 'DB!A4:A1000'), so results
        are matched to the requested keys by position. Ranges without
        values map to an empty grid.

        Args:
            spreadsheet_id: Spreadsheet ID
            range_keys: A1 ranges, e.g. ['DB!A4:A', 'DB!G4:H40']

        Returns:
            dict mapping each requested range key to its rows

        Raises:
            TransportError: On any API, auth or network failure
        """
        if not range_keys:
            return {}
        try:
            ss = self.open_by_id(spreadsheet_id)
            result = ss.values_batch_get(list(range_keys))
        except (GSpreadException, GoogleAuthError, OSError) as e:
            # Drop a cached handle that may belong to a revoked/deleted spreadsheet
            self.clear_cache(spreadsheet_id)
            raise TransportError(str(e)) from e
        return map_value_ranges(range_keys, result)

    def clear_cache(self, spreadsheet_id: str | None = None) -> None:
        """Clear the spreadsheet cache."""
        if spreadsheet_id:
            self._spreadsheet_cache.pop(spreadsheet_id, None)
        else:
            self._spreadsheet_cache.clear()


def map_value_ranges(range_keys: list[str], result: Any) -> BatchData:
    """
    Map a batchGet response onto the requested range keys.

    Raises:
        TransportError: If the response is not a batchGet payload
    """
    if not isinstance(result, dict):
        raise TransportError(f"malformed batchGet response: {type(result).__name__}")
    value_ranges = result.get("valueRanges", [])
    if not isinstance(value_ranges, list):
        raise TransportError("malformed batchGet response: valueRanges is not a list")

    batch: BatchData = {}
    for key, value_range in zip(range_keys, value_ranges):
        values = value_range.get("values", []) if isinstance(value_range, dict) else []
        batch[key] = values if isinstance(values, list) else []
    return batch


def create_sheets_client() -> SheetsClient:
    """
    Build a SheetsClient from environment credentials.
    """
    from env_loader import get_google_credentials
    return SheetsClient(get_google_credentials())
