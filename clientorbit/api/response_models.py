"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Optional, Union

from pydantic import BaseModel, Field


class Notice(BaseModel):
    title: str
    description: str
    variant: str = "default"


class HealthResponse(BaseModel):
    status: str
    records: int
    loading: bool
    source: str
    live: bool
    last_refreshed_at: dt.datetime


class RefreshResponse(BaseModel):
    live: bool
    source: str
    records: int
    last_refreshed_at: dt.datetime
    notice: Notice


class RecordModel(BaseModel):
    name: str
    item_count: Union[int, float, str]
    total_value: str
    status: str
    email: str
    revenue: float
    items: int
    canonical_status: str


class RecordsResponse(BaseModel):
    records: list[RecordModel]
    count: int
    loading: bool
    last_refreshed_at: dt.datetime


class SummaryResponse(BaseModel):
    total_clients: int
    total_revenue: float
    active_clients: int
    average_order_value: float
    last_refreshed_at: dt.datetime


class ChartPointModel(BaseModel):
    label: str
    revenue: float
    item_count: int


class ChartsResponse(BaseModel):
    status_histogram: dict[str, int]
    status_breakdown: dict[str, int]
    chart_series: list[ChartPointModel]


class ChatWebhookReply(BaseModel):
    """Body the chat widget's webhook returns; forwarded here by the widget."""
    response: Optional[str] = None
    message: Optional[str] = None
    sheet_data: Any = Field(default=None, alias="sheetData")


class ChatReplyResponse(BaseModel):
    reply: str
    updated: bool
    records: int
    notice: Optional[Notice] = None
