"""
Dashboard aggregates — KPI cards, status distribution, per-client chart series.

compute_aggregate() is pure: same records in, same Aggregate out, no I/O.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable

import pandas as pd

from clientorbit.config import CHART_LABEL_LENGTH, CHART_SERIES_LIMIT, UNKNOWN_STATUS_LABEL
from clientorbit.data.normalize import normalize_frame, records_to_frame
from clientorbit.data.schemas import CanonicalStatus, ClientRecord
from clientorbit.analytics.common import safe_divide, sanitize_for_json


@dataclass(frozen=True)
class ChartPoint:
    label: str
    revenue: float
    item_count: int


@dataclass(frozen=True)
class Aggregate:
    total_clients: int = 0
    total_revenue: float = 0.0
    active_clients: int = 0
    average_order_value: float = 0.0
    status_histogram: dict[CanonicalStatus, int] = field(
        default_factory=lambda: {s: 0 for s in CanonicalStatus}
    )
    status_breakdown: dict[str, int] = field(default_factory=dict)
    chart_series: tuple[ChartPoint, ...] = ()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _chart_label(name: str, position: int) -> str:
    name = str(name or "")
    return name[:CHART_LABEL_LENGTH] if name else f"Client {position + 1}"


def _status_breakdown(df: pd.DataFrame) -> dict[str, int]:
    """Raw status text → count, in first-seen order. Blank counts as Unknown."""
    labels = df["status"].astype(str).where(df["status"].astype(str) != "", UNKNOWN_STATUS_LABEL)
    counts = labels.value_counts(sort=False)
    return {str(label): int(counts[label]) for label in labels.drop_duplicates()}


def _chart_series(df: pd.DataFrame) -> tuple[ChartPoint, ...]:
    head = df.head(CHART_SERIES_LIMIT)
    return tuple(
        ChartPoint(
            label=_chart_label(row.name, i),
            revenue=float(row.revenue),
            item_count=int(row.items),
        )
        for i, row in enumerate(head.itertuples(index=False))
    )


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

def compute_aggregate(records: Iterable[ClientRecord]) -> Aggregate:
    """Summary figures and chart groupings for a record set."""
    df = normalize_frame(records_to_frame(records))
    total_clients = len(df)
    if total_clients == 0:
        return Aggregate()

    total_revenue = float(df["revenue"].sum())
    histogram = {s: 0 for s in CanonicalStatus}
    for status, count in df["canonical_status"].value_counts().items():
        histogram[CanonicalStatus(status)] = int(count)

    return Aggregate(
        total_clients=total_clients,
        total_revenue=total_revenue,
        active_clients=histogram[CanonicalStatus.ACTIVE],
        average_order_value=safe_divide(total_revenue, max(total_clients, 1)),
        status_histogram=histogram,
        status_breakdown=_status_breakdown(df),
        chart_series=_chart_series(df),
    )


def aggregate_to_dict(aggregate: Aggregate) -> dict:
    """JSON-ready form of an Aggregate."""
    return sanitize_for_json(asdict(aggregate))
