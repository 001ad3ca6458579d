"""
DataStore — the one in-memory cell holding the current client data set.

Two writers share it: refresh() (sheet → parse → records) and
apply_external_update() (chat widget payloads). Every write publishes a new
(snapshot, aggregate) pair in a single assignment; the last writer wins.
"""
from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Mapping
from typing import Any, Callable, Optional

import pandas as pd

from clientorbit.analytics.summary import Aggregate, compute_aggregate
from clientorbit.data.fetcher import SourceFetcher
from clientorbit.data.loader import load_records
from clientorbit.data.normalize import normalize_frame, records_to_frame
from clientorbit.data.schemas import (
    ClientRecord,
    DataSnapshot,
    SnapshotSource,
    is_known_column,
)

Subscriber = Callable[[DataSnapshot, Aggregate], None]

_SCALAR_TYPES = (str, int, float)


class DataStore:
    """Current client records, refresh controller, and change feed."""

    def __init__(self, fetcher: Optional[SourceFetcher] = None) -> None:
        self.fetcher = fetcher or SourceFetcher()
        empty = DataSnapshot(records=(), loading=True, source=SnapshotSource.STARTUP)
        self._published: tuple[DataSnapshot, Aggregate] = (empty, compute_aggregate(()))
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> DataSnapshot:
        return self._published[0]

    @property
    def aggregate(self) -> Aggregate:
        return self._published[1]

    def current(self) -> tuple[DataSnapshot, Aggregate]:
        """Snapshot and its aggregate, read together."""
        return self._published

    def records_frame(self) -> pd.DataFrame:
        """Current records with revenue / items / canonical_status columns."""
        return normalize_frame(records_to_frame(self.snapshot.records))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def refresh(self) -> DataSnapshot:
        """Reload from the sheet (or demo data) and publish the result."""
        print("Refreshing client data...")
        self._publish(dataclasses.replace(self.snapshot, loading=True))
        try:
            result = load_records(self.fetcher)
            snapshot = DataSnapshot(
                records=result.records,
                last_refreshed_at=dt.datetime.now(),
                loading=False,
                source=result.source,
            )
            self._publish(snapshot)
            return snapshot
        finally:
            if self.snapshot.loading:
                self._publish(dataclasses.replace(self.snapshot, loading=False))

    def apply_external_update(self, candidate: Any) -> DataSnapshot | None:
        """Replace the data set with rows pushed by the chat widget.

        Returns the new snapshot, or None if the payload is not a list of
        record-shaped mappings (the current snapshot is kept).
        """
        if not is_record_sequence(candidate):
            print(f"  Warning: ignoring external update ({type(candidate).__name__} is not a record list)")
            return None

        snapshot = DataSnapshot(
            records=tuple(ClientRecord.from_row(row) for row in candidate),
            last_refreshed_at=dt.datetime.now(),
            loading=False,
            source=SnapshotSource.EXTERNAL,
        )
        self._publish(snapshot)
        print(f"  External update applied — {snapshot.record_count:,} records")
        return snapshot

    def _publish(self, snapshot: DataSnapshot) -> None:
        current_snapshot, current_aggregate = self._published
        if snapshot.records is current_snapshot.records:
            aggregate = current_aggregate
        else:
            aggregate = compute_aggregate(snapshot.records)
        self._published = (snapshot, aggregate)

        for callback in list(self._subscribers):
            try:
                callback(snapshot, aggregate)
            except Exception as exc:
                print(f"  Warning: subscriber {getattr(callback, '__name__', callback)!r} failed: {exc}")

    # ------------------------------------------------------------------
    # Change feed
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)


# ---------------------------------------------------------------------------
# External payload validation
# ---------------------------------------------------------------------------

def is_record_shaped(entry: Any) -> bool:
    """A mapping with at least one known column whose known values are scalars."""
    if not isinstance(entry, Mapping):
        return False
    known = [k for k in entry if is_known_column(k)]
    if not known:
        return False
    for key in known:
        value = entry[key]
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, _SCALAR_TYPES):
            return False
    return True


def is_record_sequence(candidate: Any) -> bool:
    if not isinstance(candidate, (list, tuple)):
        return False
    return all(is_record_shaped(entry) for entry in candidate)


# ---------------------------------------------------------------------------
# Notifications
# ---------------------------------------------------------------------------

def notice_for(snapshot: DataSnapshot) -> dict[str, str]:
    """User-facing toast for the outcome that produced a snapshot."""
    if snapshot.is_live:
        return {
            "title": "DATA SYNC COMPLETE",
            "description": f"Successfully loaded {snapshot.record_count} client records from Google Sheets",
            "variant": "default",
        }
    if snapshot.source == SnapshotSource.EXTERNAL:
        return {
            "title": "DATA UPDATED",
            "description": "Sheet data has been refreshed from chatbot response",
            "variant": "default",
        }
    if snapshot.source == SnapshotSource.FALLBACK:
        return {
            "title": "CONNECTION ISSUE",
            "description": "Using demo data. Check Google Sheets permissions and try refreshing.",
            "variant": "destructive",
        }
    return {
        "title": "LOADING",
        "description": "Client data has not been loaded yet",
        "variant": "default",
    }
