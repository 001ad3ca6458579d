"""
Chat widget endpoint: the widget forwards its webhook reply here.

A reply may carry `sheetData`, a replacement list of client rows. Invalid
payloads are ignored and reported back as `updated: false`.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from clientorbit.data.store import DataStore, notice_for
from clientorbit.api.dependencies import get_store
from clientorbit.api.response_models import ChatReplyResponse, ChatWebhookReply, Notice

router = APIRouter(prefix="/api/chat", tags=["chat"])

DEFAULT_REPLY = "Response received successfully"


@router.post("/response", response_model=ChatReplyResponse)
def chat_response(body: ChatWebhookReply, store: DataStore = Depends(get_store)):
    """Apply any sheet data in a webhook reply and return the bot's text."""
    reply = body.response or body.message or DEFAULT_REPLY

    snapshot = None
    if body.sheet_data is not None:
        snapshot = store.apply_external_update(body.sheet_data)

    if snapshot is None:
        return ChatReplyResponse(reply=reply, updated=False, records=store.snapshot.record_count)
    return ChatReplyResponse(
        reply=reply,
        updated=True,
        records=snapshot.record_count,
        notice=Notice(**notice_for(snapshot)),
    )
