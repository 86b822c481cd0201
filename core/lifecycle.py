"""
Fetch lifecycle tracking.

Records whether a first successful fetch has happened, which
spreadsheet/sheet it used, when the last successful fetch completed
and the last failure message. Also derives snapshot statistics.
"""
from datetime import datetime
from typing import Any

from config import LIST_PARTITIONS
from core.snapshot import FetchMetadata, Snapshot
from lib.ranges import SheetConfig
from lib.types import DataStatistics


class FetchLifecycleTracker:
    """
    In-memory fetch state for one service instance.

    Once initialized, the tracker stays initialized: failures are
    recorded but never reset the flag.
    """

    def __init__(self) -> None:
        self._initialized = False
        self._config: SheetConfig | None = None
        self._last_fetched_at: datetime | None = None
        self._last_error: str | None = None

    # === State ===

    @property
    def config(self) -> SheetConfig | None:
        """Config stored by the last mark_initialized call."""
        return self._config

    @property
    def last_fetched_at(self) -> datetime | None:
        return self._last_fetched_at

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def mark_initialized(self, config: SheetConfig) -> None:
        """Store config and set the initialized flag (overwrites any earlier config)."""
        self._config = config
        self._initialized = True

    def is_initialized(self) -> bool:
        return self._initialized

    def record_success(self, metadata: FetchMetadata) -> None:
        self._last_fetched_at = metadata.fetched_at
        self._last_error = None

    def record_failure(self, message: str) -> None:
        self._last_error = message

    # === Derived ===

    @staticmethod
    def statistics_for(snapshot: Snapshot | None) -> DataStatistics | None:
        """
        Count items and pairs in a snapshot.

        Returns:
            None if no fetch has completed for the snapshot (no metadata)
        """
        if snapshot is None or snapshot.metadata is None:
            return None
        counts = {name: len(snapshot.partition(name)) for name in LIST_PARTITIONS}
        counts["filter_pairs"] = len(snapshot.filter_pairs)
        return {
            "total_items": sum(counts[name] for name in LIST_PARTITIONS),
            "total_pairs": counts["filter_pairs"],
            "counts": counts,
        }

    def status(self) -> dict[str, Any]:
        """JSON-ready view of the lifecycle state."""
        return {
            "initialized": self._initialized,
            "config": self._config.to_dict() if self._config else None,
            "last_fetched_at": self._last_fetched_at.isoformat() if self._last_fetched_at else None,
            "last_error": self._last_error,
        }
