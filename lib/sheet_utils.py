"""
Sheet utility functions.
A1 range notation helpers and spreadsheet ID extraction.
"""
import re
from typing import Any


def a1_range(sheet_name: str, cells: str) -> str:
    """
    Build an A1 range key like "DB!A4:A".
    The sheet name is used as-is; the key must match the batch result key.
    """
    return f"{sheet_name}!{cells}"


def extract_spreadsheet_id(url: Any) -> str | None:
    """
    Extract spreadsheet ID from a Google Sheets URL or raw ID string.

    Args:
        url: A Google Sheets URL or raw spreadsheet ID

    Returns:
        The spreadsheet ID if found (at least 25 chars), None otherwise
    """
    if not url:
        return None
    s = str(url)
    match = re.search(r"/spreadsheets/d/([-\w]+)", s)
    if match:
        return match.group(1)
    match = re.search(r"[-\w]{25,}", s)
    return match.group(0) if match else None
