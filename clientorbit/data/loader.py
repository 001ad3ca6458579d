"""
Fetch → parse → records, with a single fallback path for every failure.
"""
from __future__ import annotations

from dataclasses import dataclass

from clientorbit.config import FALLBACK_ROWS
from clientorbit.data.errors import SourceError
from clientorbit.data.fetcher import SourceFetcher
from clientorbit.data.parser import parse_csv_text
from clientorbit.data.schemas import LIVE_SOURCES, ClientRecord, SnapshotSource


@dataclass(frozen=True)
class LoadResult:
    records: tuple[ClientRecord, ...]
    source: SnapshotSource

    @property
    def is_live(self) -> bool:
        return self.source in LIVE_SOURCES


def fallback_records() -> tuple[ClientRecord, ...]:
    """The built-in demo data set."""
    return tuple(ClientRecord.from_row(row) for row in FALLBACK_ROWS)


def records_from_text(text: str) -> tuple[ClientRecord, ...]:
    """Parse sheet text into records. Raises EmptySourceError on blank input."""
    return tuple(ClientRecord.from_row(row) for row in parse_csv_text(text))


def load_records(fetcher: SourceFetcher) -> LoadResult:
    """Load client records from the sheet, or the demo set if that fails.

    Never raises for fetch or parse errors; check ``is_live`` on the result.
    """
    try:
        fetched = fetcher.fetch()
        records = records_from_text(fetched.text)
    except SourceError as exc:
        print(f"  Warning: using demo data — {exc}")
        return LoadResult(records=fallback_records(), source=SnapshotSource.FALLBACK)

    print(f"  Loaded {len(records):,} client records ({fetched.source.value})")
    return LoadResult(records=records, source=fetched.source)
