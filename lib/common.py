"""
Common utility functions.
Response helpers and cell text handling shared by all modules.
"""
import sys
from typing import Any


def log(*a: Any) -> None:
    print(*a, file=sys.stderr, flush=True)


def cell_text(val: Any) -> str | None:
    """
    Convert a raw cell value to text.
    None stays None; strings pass through; anything else goes through str().
    """
    if val is None:
        return None
    if isinstance(val, str):
        return val
    return str(val)


def is_blank(val: Any) -> bool:
    """True for falsy values (None, "", 0, False) and whitespace-only text."""
    if not val:
        return True
    text = cell_text(val)
    return text is None or text.strip() == ""


def ok(op: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create a successful response."""
    return {"ok": True, "op": op, "data": data or {}}


def ng(op: str, code: str, message: str, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """Create an error response."""
    error: dict[str, Any] = {"code": code, "message": message}
    if extra:
        error.update(extra)
    return {"ok": False, "op": op, "error": error}
