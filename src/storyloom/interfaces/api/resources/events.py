"""Server-Sent Event helpers shared by the streaming resources."""

import asyncio
import json
from collections.abc import AsyncIterator

import falcon.asgi

from storyloom.infrastructure.realtime.broadcaster import ChangeBroadcaster, ChangeEvent


def sse_event(event: str, data: dict) -> bytes:
    """Format one Server-Sent Event (event + data)."""
    payload = json.dumps(data, ensure_ascii=False)
    return f"event: {event}\ndata: {payload}\n\n".encode("utf-8")


async def _relay(
    broadcaster: ChangeBroadcaster,
    topic: str,
    queue: asyncio.Queue[ChangeEvent],
    first_event: str,
    first_data: dict,
    keepalive: float,
) -> AsyncIterator[bytes]:
    try:
        yield sse_event(first_event, first_data)
        while True:
            try:
                change = await asyncio.wait_for(queue.get(), timeout=keepalive)
            except TimeoutError:
                yield b": keepalive\n\n"
                continue
            yield sse_event(change.event, change.data)
    finally:
        broadcaster.remove_subscriber(topic, queue)


def start_event_stream(
    resp: falcon.asgi.Response,
    broadcaster: ChangeBroadcaster,
    topic: str,
    queue: asyncio.Queue[ChangeEvent],
    first_event: str,
    first_data: dict,
    keepalive: float = 15.0,
) -> None:
    """Stream ``first_event`` and then every change queued on ``queue``.

    The stream owns the subscription and removes it when the client goes away.
    """
    resp.content_type = "text/event-stream"
    resp.set_header("Cache-Control", "no-cache")
    resp.set_header("X-Accel-Buffering", "no")
    resp.stream = _relay(broadcaster, topic, queue, first_event, first_data, keepalive)
    resp.status = falcon.HTTP_200
