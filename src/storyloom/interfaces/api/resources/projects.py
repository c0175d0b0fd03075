"""Project API resources."""

from uuid import UUID

import falcon.asgi

from storyloom.application.dto.project_dto import ProjectCreateInput
from storyloom.application.use_cases.project.create_project import CreateProjectUseCase
from storyloom.application.use_cases.project.get_project import GetProjectUseCase
from storyloom.domain.entities import Project, StoryModule
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError


def _project_to_dict(p: Project) -> dict:
    return {
        "id": str(p.id),
        "title": p.title,
        "description": p.description,
        "owner_id": p.owner_id,
        "is_team": p.is_team,
        "created_at": p.created_at.isoformat(),
        "updated_at": p.updated_at.isoformat(),
    }


def module_to_dict(m: StoryModule) -> dict:
    return {
        "id": str(m.id),
        "project_id": str(m.project_id),
        "title": m.title,
        "description": m.description,
        "created_at": m.created_at.isoformat(),
    }


class ProjectsResource:
    """GET/POST /v1/projects - list and create projects."""

    def __init__(self, create_project: CreateProjectUseCase, unit_of_work_factory: type) -> None:
        self._create_project = create_project
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List projects the user owns or has joined."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        cursor = req.get_param("cursor")
        limit = req.get_param_as_int("limit") or 20
        limit = min(max(limit, 1), 100)

        try:
            async with self._uow_factory() as uow:
                projects, next_cursor = await uow.projects.list_for_user(
                    user.user_id,
                    cursor=cursor,
                    limit=limit,
                )
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid cursor"}
            return

        resp.media = {
            "items": [_project_to_dict(p) for p in projects],
            "next_cursor": next_cursor,
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create project, inviting writers for team projects."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            title = body["title"]
            description = body.get("description") or ""
            invites = body.get("invites") or []
            if not isinstance(title, str) or not isinstance(description, str):
                raise TypeError("title and description must be strings")
            if not isinstance(invites, list) or not all(isinstance(i, str) for i in invites):
                raise TypeError("invites must be a list of strings")
            input_data = ProjectCreateInput(
                title=title,
                description=description,
                is_team=bool(body.get("is_team", False)),
                invites=invites,
            )
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            project = await self._create_project.execute(user.user_id, user.email, input_data)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = _project_to_dict(project)
        resp.status = falcon.HTTP_201


class ProjectResource:
    """GET /v1/projects/{id} - project dashboard."""

    def __init__(self, get_project: GetProjectUseCase) -> None:
        self._get_project = get_project

    async def on_get(
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
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid project ID"}
            return

        try:
            detail = await self._get_project.execute(user.user_id, proj_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Project not found"}
            return

        members = []
        for m in detail.members:
            profile = detail.profiles.get(m.user_id) if m.user_id else None
            members.append({
                "id": str(m.id),
                "user_id": m.user_id,
                "role": m.role.value,
                "username": profile.username if profile else None,
                "avatar_url": profile.avatar_url if profile else None,
            })
        resp.media = {
            **_project_to_dict(detail.project),
            "is_owner": detail.project.owner_id == user.user_id,
            "members": members,
            "modules": [module_to_dict(m) for m in detail.modules],
        }
        resp.status = falcon.HTTP_200
