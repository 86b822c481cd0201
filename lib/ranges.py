"""
Range definitions and sheet configuration.

A fetch cycle reads a fixed set of partitions from one sheet.
Each partition maps to one A1 range and a role that decides how
its cells are normalized.
"""
from dataclasses import dataclass
from enum import Enum

from config import PARTITION_LAYOUT
from lib.errors import ConfigError
from lib.input_parser import strip_quotes
from lib.sheet_utils import a1_range, extract_spreadsheet_id


class RangeRole(str, Enum):
    """How a range's cells are normalized."""
    LIST = "list"
    PAIR = "pair"


@dataclass(frozen=True)
class RangeSpec:
    """One rectangular region to read and the partition it fills."""
    partition: str
    range_key: str
    role: RangeRole


@dataclass(frozen=True)
class SheetConfig:
    """Validated spreadsheet ID / sheet name pair."""
    spreadsheet_id: str
    sheet_name: str

    @classmethod
    def create(cls, spreadsheet_id: str | None, sheet_name: str | None) -> "SheetConfig":
        """
        Build a config from user input.

        Accepts a full spreadsheet URL in place of the bare ID.

        Raises:
            ConfigError: If either value is missing or blank
        """
        raw_id = strip_quotes(spreadsheet_id) if isinstance(spreadsheet_id, str) else ""
        if not raw_id:
            raise ConfigError("spreadsheet_id is required")
        sid = extract_spreadsheet_id(raw_id) if "/" in raw_id else raw_id
        if not sid:
            raise ConfigError(f"invalid spreadsheet_id: {spreadsheet_id}")

        name = strip_quotes(sheet_name) if isinstance(sheet_name, str) else ""
        if not name:
            raise ConfigError("sheet_name is required")
        return cls(spreadsheet_id=sid, sheet_name=name)

    def to_dict(self) -> dict[str, str]:
        return {"spreadsheet_id": self.spreadsheet_id, "sheet_name": self.sheet_name}


def build_range_specs(sheet_name: str) -> list[RangeSpec]:
    """
    Build the range specs for every partition of a sheet, in layout order.

    >>> [s.range_key for s in build_range_specs("DB")]
    ['DB!A4:A', 'DB!B4:B', 'DB!C4:C', 'DB!G4:H40']
    """
    return [
        RangeSpec(partition=partition, range_key=a1_range(sheet_name, cells), role=RangeRole(role))
        for partition, cells, role in PARTITION_LAYOUT
    ]
