"""
Utility libraries for the sheet data server.
Contains pure functions and value types shared by the core and the server.
"""
from .common import cell_text, is_blank, log, ok, ng
from .errors import (
    ErrorCode,
    SheetDataError,
    ConfigError,
    TransportError,
    NotInitializedError,
    error_response,
)
from .ranges import RangeRole, RangeSpec, SheetConfig, build_range_specs
from .normalizer import to_list, to_pair_list, normalize_grid
from .sheet_utils import a1_range, extract_spreadsheet_id
from .types import (
    Response,
    SuccessResponse,
    ErrorResponse,
    ErrorDetail,
    SheetRow,
    SheetValues,
    RawGrid,
    BatchData,
    DataStatistics,
)

__all__ = [
    # Response types
    "Response",
    "SuccessResponse",
    "ErrorResponse",
    "ErrorDetail",
    "SheetRow",
    "SheetValues",
    "RawGrid",
    "BatchData",
    "DataStatistics",
    # Errors
    "ErrorCode",
    "SheetDataError",
    "ConfigError",
    "TransportError",
    "NotInitializedError",
    "error_response",
    # Ranges
    "RangeRole",
    "RangeSpec",
    "SheetConfig",
    "build_range_specs",
    # Functions
    "cell_text",
    "is_blank",
    "log",
    "ok",
    "ng",
    "to_list",
    "to_pair_list",
    "normalize_grid",
    "a1_range",
    "extract_spreadsheet_id",
]
