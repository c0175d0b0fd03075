"""Invite API resources."""

from uuid import UUID

import falcon.asgi

from storyloom.application.use_cases.invite.invite_writers import InviteWritersUseCase
from storyloom.application.use_cases.invite.list_invites import ListIncomingInvitesUseCase
from storyloom.application.use_cases.invite.respond_to_invite import RespondToInviteUseCase
from storyloom.domain.entities import ProjectMember
from storyloom.domain.exceptions import (
    InvalidInviteState,
    NotFound,
    PermissionDenied,
    ValidationError,
)


def _invite_to_dict(m: ProjectMember) -> dict:
    return {
        "id": str(m.id),
        "project_id": str(m.project_id),
        "invited_email": m.invited_email,
        "role": m.role.value,
        "status": m.status.value,
        "invited_by": m.invited_by,
        "created_at": m.created_at.isoformat(),
    }


class ProjectInvitesResource:
    """POST /v1/projects/{id}/invites - invite writers by email."""

    def __init__(self, invite_writers: InviteWritersUseCase) -> None:
        self._invite_writers = invite_writers

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        project_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            proj_id = UUID(project_id)
            body = await req.get_media()
            emails = body["emails"]
            if not isinstance(emails, list) or not all(isinstance(item, str) for item in emails):
                raise TypeError("emails must be a list of strings")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            invites = await self._invite_writers.execute(user.user_id, proj_id, emails)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Project not found"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {"items": [_invite_to_dict(m) for m in invites]}
        resp.status = falcon.HTTP_201


class InvitesResource:
    """GET /v1/invites - pending invites for the current user."""

    def __init__(self, list_invites: ListIncomingInvitesUseCase) -> None:
        self._list_invites = list_invites

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        incoming = await self._list_invites.execute(user.email)
        items = []
        for item in incoming:
            data = _invite_to_dict(item.invite)
            data["project_title"] = item.project.title if item.project else None
            items.append(data)
        resp.media = {"items": items}
        resp.status = falcon.HTTP_200


class InviteResponseResource:
    """POST /v1/invites/{id}/accept and /reject."""

    def __init__(self, respond_to_invite: RespondToInviteUseCase) -> None:
        self._respond = respond_to_invite

    async def on_post_accept(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invite_id: str
    ) -> None:
        await self._answer(req, resp, invite_id, accept=True)

    async def on_post_reject(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, invite_id: str
    ) -> None:
        await self._answer(req, resp, invite_id, accept=False)

    async def _answer(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        invite_id: str,
        accept: bool,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            inv_id = UUID(invite_id)
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid invite ID"}
            return

        try:
            invite = await self._respond.execute(user.user_id, user.email, inv_id, accept)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Invite not found"}
            return
        except InvalidInviteState as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
            return

        resp.media = _invite_to_dict(invite)
        resp.status = falcon.HTTP_200
