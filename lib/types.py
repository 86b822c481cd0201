"""
Type definitions for the sheet data server.
Provides type safety for responses, raw sheet data and statistics.
"""
from typing import TypedDict, Any


class ErrorDetail(TypedDict):
    """Error detail structure."""
    code: str
    message: str


class SuccessResponse(TypedDict):
    """Successful API response."""
    ok: bool
    op: str
    data: dict[str, Any]


class ErrorResponse(TypedDict):
    """Error API response."""
    ok: bool
    op: str
    error: ErrorDetail


# Union type for all API responses
Response = SuccessResponse | ErrorResponse

# Sheet data types
SheetRow = list[Any]
SheetValues = list[SheetRow]

# One range's cells as returned by the API (ragged rows)
RawGrid = SheetValues

# Batch read result: requested range key -> grid (key may be absent)
BatchData = dict[str, RawGrid | None]

NormalizedList = list[str]
NormalizedPairList = list[tuple[str, str]]


class DataStatistics(TypedDict):
    """Derived counts for one snapshot."""
    total_items: int
    total_pairs: int
    counts: dict[str, int]
