"""
Dashboard endpoints — client records, KPI summary, chart data.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from clientorbit.data.store import DataStore
from clientorbit.api.dependencies import get_store
from clientorbit.api.response_models import RecordsResponse, SummaryResponse, ChartsResponse
from clientorbit.analytics.common import sanitize_for_json
from clientorbit.analytics.summary import aggregate_to_dict

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/records", response_model=RecordsResponse)
def records(store: DataStore = Depends(get_store)):
    """Current client rows with normalized revenue, item count, and status bucket."""
    snapshot = store.snapshot
    df = store.records_frame()
    rows = sanitize_for_json(df.to_dict(orient="records"))
    return RecordsResponse(
        records=rows,
        count=len(rows),
        loading=snapshot.loading,
        last_refreshed_at=snapshot.last_refreshed_at,
    )


@router.get("/summary", response_model=SummaryResponse)
def summary(store: DataStore = Depends(get_store)):
    """KPI cards: total clients, revenue, active clients, average order."""
    snapshot, aggregate = store.current()
    return SummaryResponse(
        total_clients=aggregate.total_clients,
        total_revenue=aggregate.total_revenue,
        active_clients=aggregate.active_clients,
        average_order_value=aggregate.average_order_value,
        last_refreshed_at=snapshot.last_refreshed_at,
    )


@router.get("/charts", response_model=ChartsResponse)
def charts(store: DataStore = Depends(get_store)):
    """Status distribution and the first-10-clients revenue/items series."""
    data = aggregate_to_dict(store.aggregate)
    return JSONResponse(content={
        "status_histogram": data["status_histogram"],
        "status_breakdown": data["status_breakdown"],
        "chart_series": data["chart_series"],
    })
