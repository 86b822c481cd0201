"""
Standardized error handling for the sheet data server.
Provides error codes, the exception hierarchy and response helpers.
"""
from enum import Enum
from typing import Any

from lib.common import ng


class ErrorCode(str, Enum):
    """Standardized error codes used across the server."""
    CONFIG_ERROR = "CONFIG_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    NOT_INITIALIZED = "NOT_INITIALIZED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SheetDataError(Exception):
    """Base class for errors raised by the fetch layer."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(SheetDataError):
    """Missing or invalid spreadsheet ID / sheet name."""
    code = ErrorCode.CONFIG_ERROR


class TransportError(SheetDataError):
    """Network, auth or API failure while reading the spreadsheet."""
    code = ErrorCode.TRANSPORT_ERROR


class NotInitializedError(SheetDataError):
    """A refresh was requested before any successful initialization."""
    code = ErrorCode.NOT_INITIALIZED

    def __init__(self, message: str = "service is not initialized; call sheet_data_init first") -> None:
        super().__init__(message)


def error_response(op: str, exc: SheetDataError) -> dict[str, Any]:
    """Create an error response from a SheetDataError."""
    return ng(op, exc.code, exc.message)


def internal_error(op: str, message: str) -> dict[str, Any]:
    """Create an INTERNAL_ERROR error response."""
    return ng(op, ErrorCode.INTERNAL_ERROR, message)
