"""Tests for the HTTP content store."""

import json
from datetime import UTC, datetime
from uuid import uuid4

import httpx
import pytest

from storyloom.application.dto.phase_dto import PhaseContentUpdate
from storyloom.domain.exceptions import (
    NotFound,
    PermissionDenied,
    StoryloomError,
    TransientWriteFailure,
)
from storyloom.infrastructure.content_store.http_content_store import HttpContentStore

PHASE_ID = uuid4()


def _store(handler) -> HttpContentStore:
    client = httpx.AsyncClient(
        base_url="http://storyloom.test",
        transport=httpx.MockTransport(handler),
    )
    return HttpContentStore("http://storyloom.test", "tok", client=client)


def _content_json() -> dict:
    return {
        "phase_id": str(PHASE_ID),
        "module_id": str(uuid4()),
        "project_id": str(uuid4()),
        "owner_id": "owner-1",
        "title": "Chapter 1",
        "description": None,
        "body": "Once",
        "assigned_to": "bo",
        "updated_at": "2026-03-01T10:00:00+00:00",
        "module_title": "Book One",
        "can_edit": True,
    }


@pytest.mark.asyncio
async def test_fetch_parses_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_content_json())

    store = _store(handler)
    content = await store.fetch(PHASE_ID)
    await store.aclose()

    assert content.phase_id == PHASE_ID
    assert content.body == "Once"
    assert content.updated_at == datetime(2026, 3, 1, 10, tzinfo=UTC)
    assert seen[0].url.path == f"/v1/phases/{PHASE_ID}/content"
    assert seen[0].headers["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
async def test_update_sends_body_and_timestamp() -> None:
    sent: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PUT"
        sent.append(json.loads(request.content))
        return httpx.Response(204)

    store = _store(handler)
    stamp = datetime(2026, 3, 1, 12, tzinfo=UTC)
    await store.update(PHASE_ID, PhaseContentUpdate(body="Twice", updated_at=stamp))

    assert sent == [{"body": "Twice", "updated_at": stamp.isoformat()}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "exc_type"),
    [
        (401, PermissionDenied),
        (403, PermissionDenied),
        (404, NotFound),
        (500, TransientWriteFailure),
        (503, TransientWriteFailure),
    ],
)
async def test_update_error_statuses(status: int, exc_type: type[Exception]) -> None:
    store = _store(lambda request: httpx.Response(status, json={"error": "x"}))
    with pytest.raises(exc_type):
        await store.update(
            PHASE_ID, PhaseContentUpdate(body="x", updated_at=datetime.now(UTC))
        )


@pytest.mark.asyncio
async def test_update_network_error_is_transient() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    store = _store(handler)
    with pytest.raises(TransientWriteFailure):
        await store.update(
            PHASE_ID, PhaseContentUpdate(body="x", updated_at=datetime.now(UTC))
        )


@pytest.mark.asyncio
async def test_fetch_missing_phase() -> None:
    store = _store(lambda request: httpx.Response(404, json={"error": "Phase not found"}))
    with pytest.raises(NotFound):
        await store.fetch(PHASE_ID)


@pytest.mark.asyncio
async def test_fetch_server_error() -> None:
    store = _store(lambda request: httpx.Response(500))
    with pytest.raises(StoryloomError):
        await store.fetch(PHASE_ID)
