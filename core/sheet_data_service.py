"""
Sheet data service.

Orchestrates one fetch cycle:
- Build the range specs for every partition
- Read them all with a single batched call
- Normalize each grid by role
- Replace the cached snapshot and update the lifecycle tracker
"""
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable

from core.lifecycle import FetchLifecycleTracker
from core.snapshot import FetchMetadata, Snapshot
from lib.common import log, ok
from lib.errors import NotInitializedError, SheetDataError, TransportError, error_response, internal_error
from lib.normalizer import normalize_grid
from lib.ranges import SheetConfig, build_range_specs
from lib.types import BatchData, DataStatistics
from sheets_client import SheetsClient


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SheetDataService:
    """
    Fetches and normalizes the partitions of one sheet.

    Construct once at the composition root and pass it where needed.
    Not safe for concurrent writers: overlapping fetches race and the
    last one to finish wins.

    Example:
        service = SheetDataService(create_sheets_client())
        result = service.initialize_and_fetch("1AbC...", "DB")
        if result["ok"]:
            snapshot = result["data"]["snapshot"]
        later = service.fetch_default_data("DB")
    """

    INIT_OP = "sheet_data.init"

    def __init__(
        self,
        sheets: SheetsClient,
        clock: Callable[[], datetime] | None = None,
        tracker: FetchLifecycleTracker | None = None,
    ) -> None:
        """
        Args:
            sheets: Client exposing get_batch_data(spreadsheet_id, range_keys)
            clock: Returns the current time for fetch metadata (UTC by default)
            tracker: Lifecycle tracker (a fresh one by default)
        """
        self.sheets = sheets
        self.tracker = tracker or FetchLifecycleTracker()
        self._clock = clock or _utcnow
        self._snapshot = Snapshot.empty()

    @property
    def snapshot(self) -> Snapshot:
        """Last successfully fetched snapshot (empty before the first one)."""
        return self._snapshot

    # === Public operations ===

    def initialize_and_fetch(self, spreadsheet_id: str, sheet_name: str) -> dict[str, Any]:
        """
        Validate config, fetch all partitions and mark the service initialized.

        Never raises. On failure the previous snapshot and initialized
        flag are left as they were.

        Returns:
            ok response with data.snapshot, or error response with the
            failure message (transport messages passed through verbatim)
        """
        op = self.INIT_OP
        try:
            config = SheetConfig.create(spreadsheet_id, sheet_name)
            snapshot = self._fetch(config)
        except SheetDataError as e:
            self.tracker.record_failure(e.message)
            log(f"{op} failed [{e.code.value}]: {e.message}")
            return error_response(op, e)
        except Exception as e:
            self.tracker.record_failure(str(e))
            log(f"{op} failed unexpectedly: {e!r}")
            return internal_error(op, str(e))

        self.tracker.mark_initialized(config)
        self._commit(snapshot)
        return ok(op, {"snapshot": snapshot})

    def fetch_default_data(self, sheet_name: str | None = None) -> Snapshot:
        """
        Refresh using the stored spreadsheet ID.

        Args:
            sheet_name: Sheet to read; defaults to the initialized sheet

        Returns:
            The new snapshot

        Raises:
            NotInitializedError: Before any successful initialize_and_fetch
            ConfigError: If sheet_name is blank
            TransportError: If the batched read fails
        """
        if not self.tracker.is_initialized() or self.tracker.config is None:
            raise NotInitializedError()

        stored = self.tracker.config
        name = stored.sheet_name if sheet_name is None else sheet_name
        config = SheetConfig.create(stored.spreadsheet_id, name)
        try:
            snapshot = self._fetch(config)
        except SheetDataError as e:
            self.tracker.record_failure(e.message)
            log(f"sheet_data.refresh failed [{e.code.value}]: {e.message}")
            raise

        self._commit(snapshot)
        return snapshot

    def get_initialization_status(self) -> bool:
        return self.tracker.is_initialized()

    def get_data_statistics(self, snapshot: Snapshot | None = None) -> DataStatistics | None:
        """Statistics for a snapshot (the cached one by default); None before any fetch."""
        return self.tracker.statistics_for(snapshot if snapshot is not None else self._snapshot)

    def status(self) -> dict[str, Any]:
        """Lifecycle state plus statistics of the cached snapshot."""
        return {**self.tracker.status(), "statistics": self.get_data_statistics()}

    # === Internals ===

    def _fetch(self, config: SheetConfig) -> Snapshot:
        """One batched read plus normalization. All-or-nothing."""
        specs = build_range_specs(config.sheet_name)
        range_keys = [s.range_key for s in specs]
        log(f"Fetching {len(range_keys)} ranges from {config.spreadsheet_id}: {', '.join(range_keys)}")

        try:
            batch: BatchData = self.sheets.get_batch_data(config.spreadsheet_id, range_keys)
        except SheetDataError:
            raise
        except Exception as e:
            raise TransportError(str(e)) from e

        if not isinstance(batch, Mapping):
            raise TransportError(f"malformed batch response: {type(batch).__name__}")

        partitions = {s.partition: normalize_grid(s, batch.get(s.range_key)) for s in specs}
        metadata = FetchMetadata(
            fetched_at=self._clock(),
            spreadsheet_id=config.spreadsheet_id,
            sheet_name=config.sheet_name,
        )
        return Snapshot.from_partitions(partitions, metadata)

    def _commit(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.tracker.record_success(snapshot.metadata)
        stats = self.tracker.statistics_for(snapshot)
        log(
            f"Fetched {snapshot.metadata.sheet_name}: "
            f"{stats['total_items']} items, {stats['total_pairs']} pairs"
        )
