"""Content store that talks to the Storyloom REST API."""

from datetime import datetime
from uuid import UUID

import httpx

from storyloom.application.dto.phase_dto import PhaseContent, PhaseContentUpdate
from storyloom.domain.exceptions import (
    NotFound,
    PermissionDenied,
    StoryloomError,
    TransientWriteFailure,
)


def _parse_content(data: dict) -> PhaseContent:
    return PhaseContent(
        phase_id=UUID(data["phase_id"]),
        module_id=UUID(data["module_id"]),
        project_id=UUID(data["project_id"]),
        owner_id=data["owner_id"],
        title=data["title"],
        description=data.get("description"),
        body=data.get("body") or "",
        assigned_to=data.get("assigned_to"),
        updated_at=datetime.fromisoformat(data["updated_at"]),
        module_title=data.get("module_title"),
    )


def _raise_for_status(resp: httpx.Response, phase_id: UUID) -> None:
    if resp.status_code in (401, 403):
        raise PermissionDenied(f"Access to phase {phase_id} denied")
    if resp.status_code == 404:
        raise NotFound("Phase", str(phase_id))


class HttpContentStore:
    """Content store over HTTP using a bearer token."""

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )
        self._headers = {"Authorization": f"Bearer {token}"}

    async def fetch(self, phase_id: UUID) -> PhaseContent:
        """GET /v1/phases/{id}/content."""
        try:
            resp = await self._client.get(f"/v1/phases/{phase_id}/content", headers=self._headers)
        except httpx.HTTPError as e:
            raise StoryloomError(f"Could not load phase {phase_id}: {e}") from e
        _raise_for_status(resp, phase_id)
        if resp.status_code != 200:
            raise StoryloomError(f"Unexpected status {resp.status_code} loading phase {phase_id}")
        return _parse_content(resp.json())

    async def update(self, phase_id: UUID, change: PhaseContentUpdate) -> None:
        """PUT /v1/phases/{id}/content."""
        try:
            resp = await self._client.put(
                f"/v1/phases/{phase_id}/content",
                headers=self._headers,
                json={"body": change.body, "updated_at": change.updated_at.isoformat()},
            )
        except httpx.HTTPError as e:
            raise TransientWriteFailure(f"Could not save phase {phase_id}: {e}") from e
        _raise_for_status(resp, phase_id)
        if resp.status_code >= 400:
            raise TransientWriteFailure(
                f"Saving phase {phase_id} failed with status {resp.status_code}"
            )

    async def aclose(self) -> None:
        await self._client.aclose()
