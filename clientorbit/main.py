"""
Client Orbit — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clientorbit.data.store import DataStore
from clientorbit.api.dependencies import set_store
from clientorbit.api.router_meta import router as meta_router
from clientorbit.api.router_dashboard import router as dashboard_router
from clientorbit.api.router_chat import router as chat_router


def create_app(store: Optional[DataStore] = None) -> FastAPI:
    """Build the API. Pass a store to control how it fetches (tests do)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the store and load client data at startup."""
        from clientorbit.config import SHEET_URL, PROXY_URL, FETCH_TIMEOUT_SECONDS
        print(f"  SHEET_URL = {SHEET_URL}")
        print(f"  PROXY_URL = {PROXY_URL}")
        print(f"  FETCH_TIMEOUT_SECONDS = {FETCH_TIMEOUT_SECONDS}")

        data_store = store or DataStore()
        set_store(data_store)
        snapshot = data_store.refresh()

        if snapshot.is_live:
            print(f"\nClient Orbit ready — {snapshot.record_count:,} records ({snapshot.source.value})\n")
        else:
            print(f"\nClient Orbit ready — showing {snapshot.record_count} demo records (sheet unreachable)\n")
        yield
        set_store(None)
        data_store.fetcher.close()

    app = FastAPI(
        title="Client Orbit API",
        description="Client dashboard — sheet-backed records, KPIs, chart data, chat updates",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(dashboard_router)
    app.include_router(chat_router)

    return app


app = create_app()
