# trekker/event/event_router.py
from __future__ import annotations

import asyncio
import json

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from trekker.event.event_service import EventBroadcaster

router = APIRouter(prefix="/events", tags=["events"])


def format_sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def event_stream(request: Request, broadcaster: EventBroadcaster):
    yield format_sse({"type": "connected"})

    queue = await broadcaster.subscribe()
    try:
        while not await request.is_disconnected():
            try:
                message = await asyncio.wait_for(queue.get(), timeout=broadcaster.interval)
            except asyncio.TimeoutError:
                continue
            yield format_sse(message)
    finally:
        broadcaster.unsubscribe(queue)


@router.get("")
async def stream_events(request: Request):
    broadcaster: EventBroadcaster = request.app.state.broadcaster
    return StreamingResponse(
        event_stream(request, broadcaster),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
