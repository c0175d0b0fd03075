"""Phase API resources: listing, creation, deletion and editor content."""

from datetime import UTC, datetime
from uuid import UUID

import falcon.asgi

from storyloom.application.dto.phase_dto import (
    PhaseContent,
    PhaseContentUpdate,
    PhaseCreateInput,
)
from storyloom.application.ports.change_notifier import phase_topic
from storyloom.application.use_cases.phase.create_phase import CreatePhaseUseCase
from storyloom.application.use_cases.phase.delete_phase import DeletePhaseUseCase
from storyloom.application.use_cases.phase.get_phase_content import GetPhaseContentUseCase
from storyloom.application.use_cases.phase.list_phases import ListPhasesUseCase
from storyloom.application.use_cases.phase.save_phase_content import SavePhaseContentUseCase
from storyloom.domain.entities import Phase
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.infrastructure.realtime.broadcaster import ChangeBroadcaster
from storyloom.interfaces.api.resources.events import start_event_stream
from storyloom.interfaces.api.resources.projects import module_to_dict


def _phase_to_dict(p: Phase) -> dict:
    return {
        "id": str(p.id),
        "module_id": str(p.module_id),
        "title": p.title,
        "description": p.description,
        "assigned_to": p.assigned_to,
        "created_at": p.created_at.isoformat(),
        "updated_at": p.updated_at.isoformat(),
    }


def _content_to_dict(c: PhaseContent, user_id: str) -> dict:
    return {
        "phase_id": str(c.phase_id),
        "module_id": str(c.module_id),
        "project_id": str(c.project_id),
        "owner_id": c.owner_id,
        "title": c.title,
        "description": c.description,
        "body": c.body,
        "assigned_to": c.assigned_to,
        "updated_at": c.updated_at.isoformat(),
        "module_title": c.module_title,
        "can_edit": c.can_edit(user_id),
    }


class PhasesResource:
    """GET/POST /v1/modules/{id}/phases - list and create phases."""

    def __init__(self, list_phases: ListPhasesUseCase, create_phase: CreatePhaseUseCase) -> None:
        self._list_phases = list_phases
        self._create_phase = create_phase

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        module_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            mod_id = UUID(module_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid module ID"}
            return

        try:
            module, phases = await self._list_phases.execute(user.user_id, mod_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Module not found"}
            return

        resp.media = {
            "module": module_to_dict(module),
            "items": [_phase_to_dict(p) for p in phases],
        }
        resp.status = falcon.HTTP_200

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        module_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            title = body["title"]
            description = body.get("description")
            assigned_to = body.get("assigned_to") or None
            if not isinstance(title, str):
                raise TypeError("title must be a string")
            for value in (description, assigned_to):
                if value is not None and not isinstance(value, str):
                    raise TypeError("description and assigned_to must be strings")
            input_data = PhaseCreateInput(
                module_id=UUID(module_id),
                title=title,
                description=description,
                assigned_to=assigned_to,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            phase = await self._create_phase.execute(user.user_id, input_data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Module not found"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _phase_to_dict(phase)
        resp.status = falcon.HTTP_201


class PhaseResource:
    """DELETE /v1/phases/{id}."""

    def __init__(self, delete_phase: DeletePhaseUseCase) -> None:
        self._delete_phase = delete_phase

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid phase ID"}
            return

        try:
            await self._delete_phase.execute(user.user_id, ph_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return

        resp.status = falcon.HTTP_204


class PhaseContentResource:
    """GET/PUT /v1/phases/{id}/content - editor load and autosave target."""

    def __init__(
        self,
        get_content: GetPhaseContentUseCase,
        save_content: SavePhaseContentUseCase,
    ) -> None:
        self._get_content = get_content
        self._save_content = save_content

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid phase ID"}
            return

        try:
            content = await self._get_content.execute(user.user_id, ph_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return

        resp.media = _content_to_dict(content, user.user_id)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        """Overwrite the phase body. Body: {"body": str, "updated_at": ISO-8601?}."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
            body = await req.get_media()
            text = body["body"]
            if not isinstance(text, str):
                raise TypeError("body must be a string")
            raw_ts = body.get("updated_at")
            updated_at = datetime.fromisoformat(raw_ts) if raw_ts else datetime.now(UTC)
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            await self._save_content.execute(
                user.user_id, ph_id, PhaseContentUpdate(body=text, updated_at=updated_at)
            )
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return

        resp.status = falcon.HTTP_204


class PhaseContentStreamResource:
    """GET /v1/phases/{id}/content/stream - Server-Sent Events of saves to a phase.

    Opens with a ``content`` event carrying the current body; every later
    ``phase.content_updated`` event tells collaborators that someone else's
    save has replaced it.
    """

    def __init__(
        self,
        get_content: GetPhaseContentUseCase,
        broadcaster: ChangeBroadcaster,
        keepalive: float = 15.0,
    ) -> None:
        self._get_content = get_content
        self._broadcaster = broadcaster
        self._keepalive = keepalive

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        phase_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            ph_id = UUID(phase_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid phase ID"}
            return

        topic = phase_topic(ph_id)
        queue = self._broadcaster.add_subscriber(topic)
        try:
            content = await self._get_content.execute(user.user_id, ph_id)
        except PermissionDenied:
            self._broadcaster.remove_subscriber(topic, queue)
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            self._broadcaster.remove_subscriber(topic, queue)
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Phase not found"}
            return
        except Exception:
            self._broadcaster.remove_subscriber(topic, queue)
            raise

        start_event_stream(
            resp,
            self._broadcaster,
            topic,
            queue,
            "content",
            _content_to_dict(content, user.user_id),
            self._keepalive,
        )
