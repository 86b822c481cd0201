"""
Immutable views of fetched sheet data.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class FetchMetadata:
    """When and from where a snapshot was fetched."""
    fetched_at: datetime
    spreadsheet_id: str
    sheet_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "fetched_at": self.fetched_at.isoformat(),
            "spreadsheet_id": self.spreadsheet_id,
            "sheet_name": self.sheet_name,
        }


@dataclass(frozen=True)
class Snapshot:
    """
    One complete normalized view of all partitions.

    Replaced wholesale on every successful fetch; `metadata` is None
    until the first fetch completes.
    """
    normals: tuple[str, ...] = ()
    newbies: tuple[str, ...] = ()
    leaders: tuple[str, ...] = ()
    filter_pairs: tuple[tuple[str, str], ...] = ()
    metadata: FetchMetadata | None = None

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @classmethod
    def from_partitions(cls, partitions: dict[str, list], metadata: FetchMetadata) -> "Snapshot":
        """Build from normalized partition data (missing partitions are empty)."""
        return cls(
            normals=tuple(partitions.get("normals", ())),
            newbies=tuple(partitions.get("newbies", ())),
            leaders=tuple(partitions.get("leaders", ())),
            filter_pairs=tuple(tuple(p) for p in partitions.get("filter_pairs", ())),
            metadata=metadata,
        )

    def partition(self, name: str) -> tuple:
        """Get a partition by name."""
        if name not in ("normals", "newbies", "leaders", "filter_pairs"):
            raise KeyError(name)
        return getattr(self, name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "normals": list(self.normals),
            "newbies": list(self.newbies),
            "leaders": list(self.leaders),
            "filter_pairs": [list(p) for p in self.filter_pairs],
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }
