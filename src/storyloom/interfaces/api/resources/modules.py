"""Module API resources."""

from uuid import UUID

import falcon.asgi

from storyloom.application.use_cases.module.create_module import CreateModuleUseCase
from storyloom.domain.exceptions import NotFound, PermissionDenied, ValidationError
from storyloom.interfaces.api.resources.projects import module_to_dict


class ModulesResource:
    """POST /v1/projects/{id}/modules - add module to project."""

    def __init__(self, create_module: CreateModuleUseCase) -> None:
        self._create_module = create_module

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
            title = body["title"]
            description = body.get("description")
            if not isinstance(title, str):
                raise TypeError("title must be a string")
            if description is not None and not isinstance(description, str):
                raise TypeError("description must be a string")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request: {e}"}
            return

        try:
            module = await self._create_module.execute(
                user.user_id, proj_id, title, description
            )
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

        resp.media = module_to_dict(module)
        resp.status = falcon.HTTP_201
