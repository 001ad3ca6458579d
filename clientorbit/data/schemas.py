"""
Record and snapshot schemas shared by the loader, store, and API.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping, Union

from clientorbit.config import COLUMN_MAP

ItemCount = Union[str, int, float]

# attribute → spreadsheet header
_HEADER_FOR = {attr: header for header, attr in COLUMN_MAP.items()}


class CanonicalStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    UNKNOWN = "unknown"


class SnapshotSource(str, Enum):
    STARTUP = "startup"
    PRIMARY = "primary"
    PROXY = "proxy"
    FALLBACK = "fallback"
    EXTERNAL = "external"


LIVE_SOURCES = {SnapshotSource.PRIMARY, SnapshotSource.PROXY}


@dataclass(frozen=True)
class ClientRecord:
    """One spreadsheet row. Values are kept as they arrived; see normalize.py."""
    name: str = ""
    item_count: ItemCount = ""
    total_value: str = ""
    status: str = ""
    email: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ClientRecord":
        """Build a record from a row keyed by spreadsheet headers or attribute names.

        Unknown keys are ignored; missing fields become "".
        """
        values = {}
        for f in fields(cls):
            header = _HEADER_FOR[f.name]
            if header in row:
                raw = row[header]
            else:
                raw = row.get(f.name)
            values[f.name] = _coerce_cell(raw, keep_number=f.name == "item_count")
        return cls(**values)

    def to_row(self) -> dict[str, ItemCount]:
        """Return the record keyed by spreadsheet headers."""
        return {_HEADER_FOR[f.name]: getattr(self, f.name) for f in fields(self)}


def _coerce_cell(raw: Any, keep_number: bool = False) -> ItemCount:
    if raw is None:
        return ""
    if keep_number and isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw
    return str(raw)


def is_known_column(key: Any) -> bool:
    return key in COLUMN_MAP or key in _HEADER_FOR


@dataclass(frozen=True)
class DataSnapshot:
    """The held data set. Replaced wholesale, never mutated."""
    records: tuple[ClientRecord, ...] = ()
    last_refreshed_at: dt.datetime = field(default_factory=dt.datetime.now)
    loading: bool = False
    source: SnapshotSource = SnapshotSource.STARTUP

    @property
    def is_live(self) -> bool:
        return self.source in LIVE_SOURCES

    @property
    def record_count(self) -> int:
        return len(self.records)
