"""
Meta endpoints: health, refresh.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from clientorbit.data.store import DataStore, notice_for
from clientorbit.api.dependencies import get_store
from clientorbit.api.response_models import HealthResponse, Notice, RefreshResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    snapshot = store.snapshot
    return HealthResponse(
        status="loading" if snapshot.loading else "ok",
        records=snapshot.record_count,
        loading=snapshot.loading,
        source=snapshot.source.value,
        live=snapshot.is_live,
        last_refreshed_at=snapshot.last_refreshed_at,
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(store: DataStore = Depends(get_store)):
    """Re-fetch the sheet. Falls back to demo data; check `live` in the reply."""
    snapshot = store.refresh()
    return RefreshResponse(
        live=snapshot.is_live,
        source=snapshot.source.value,
        records=snapshot.record_count,
        last_refreshed_at=snapshot.last_refreshed_at,
        notice=Notice(**notice_for(snapshot)),
    )
