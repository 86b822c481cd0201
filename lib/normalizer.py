"""
Raw grid normalization.

Pure functions turning a range's raw cells into clean collections.
Malformed or missing data degrades to fewer items, never to an error,
so a partially filled sheet still shows what it has.
"""
from typing import Any

from lib.common import cell_text, is_blank
from lib.ranges import RangeRole, RangeSpec
from lib.types import NormalizedList, NormalizedPairList


def _rows(grid: Any) -> list[Any]:
    if not grid or not isinstance(grid, (list, tuple)):
        return []
    return list(grid)


def to_list(grid: Any) -> NormalizedList:
    """
    Flatten a grid into a list of trimmed, non-empty strings.

    Row order is preserved and duplicates are kept. A non-list row
    counts as a single cell.

    >>> to_list([["alice"], ["  "], [""], ["bob"]])
    ['alice', 'bob']
    """
    out: NormalizedList = []
    for row in _rows(grid):
        cells = row if isinstance(row, (list, tuple)) else [row]
        for cell in cells:
            if is_blank(cell):
                continue
            out.append(cell_text(cell).strip())
    return out


def to_pair_list(grid: Any) -> NormalizedPairList:
    """
    Keep rows whose first two cells are both non-empty.

    Values are returned untrimmed; other rows are dropped silently.

    >>> to_pair_list([["g1", "h1"], ["g2"], ["", "h3"], ["g4", "h4"]])
    [('g1', 'h1'), ('g4', 'h4')]
    """
    out: NormalizedPairList = []
    for row in _rows(grid):
        if not isinstance(row, (list, tuple)) or len(row) < 2:
            continue
        left, right = row[0], row[1]
        if not left or not right:
            continue
        out.append((cell_text(left), cell_text(right)))
    return out


def normalize_grid(spec: RangeSpec, grid: Any) -> NormalizedList | NormalizedPairList:
    """Normalize one range's grid according to its role."""
    if spec.role is RangeRole.PAIR:
        return to_pair_list(grid)
    return to_list(grid)
