"""
FastAPI dependencies — DataStore singleton.
"""
from __future__ import annotations

from fastapi import HTTPException

from clientorbit.data.store import DataStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store
