"""
Input parsing utilities.

Functions for normalizing MCP tool inputs, which may arrive as
plain strings or as dicts wrapping the value.
"""
from typing import Any


def strip_quotes(s: str) -> str:
    """
    Strip outer quotes from a string.

    Args:
        s: Input string

    Returns:
        String with leading/trailing quotes removed
    """
    s = s.strip()
    if len(s) >= 2 and ((s.startswith('"') and s.endswith('"')) or (s.startswith("'") and s.endswith("'"))):
        return s[1:-1].strip()
    return s


def coerce_str(x: Any, keys: tuple[str, ...] = ()) -> str | None:
    """
    Extract a string from various input formats.

    Handles:
    - Direct string input
    - Dict with specified keys

    Args:
        x: Input value (string, dict, or other)
        keys: Tuple of keys to try in dict order

    Returns:
        Extracted string or None if not found
    """
    if isinstance(x, str):
        return strip_quotes(x)
    if isinstance(x, dict):
        for k in keys:
            v = x.get(k)
            if isinstance(v, str):
                return strip_quotes(v)
    return None


def resolve_sheet_context(
    spreadsheet_id: Any,
    sheet_name: Any,
) -> tuple[str | None, str | None]:
    """
    Resolve spreadsheet_id and sheet_name for sheet data tools.

    A dict passed as spreadsheet_id may carry both values.

    Returns:
        Tuple of (spreadsheet_id_str, sheet_name_str)
    """
    spid = coerce_str(spreadsheet_id, ("spreadsheet_id", "spreadsheetId", "url", "id"))
    name = coerce_str(sheet_name, ("sheet_name", "sheetName", "name"))
    if name is None and isinstance(spreadsheet_id, dict):
        name = coerce_str(spreadsheet_id, ("sheet_name", "sheetName"))
    return spid, name
