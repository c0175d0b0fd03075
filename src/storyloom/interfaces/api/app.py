"""Falcon ASGI application."""

import logging
from dataclasses import dataclass

import falcon
import falcon.asgi
from falcon.asgi import App

from storyloom.interfaces.api.resources.comments import (
    CommentResource,
    CommentsResource,
    CommentsStreamResource,
)
from storyloom.interfaces.api.resources.health import HealthResource
from storyloom.interfaces.api.resources.invites import (
    InviteResponseResource,
    InvitesResource,
    ProjectInvitesResource,
)
from storyloom.interfaces.api.resources.modules import ModulesResource
from storyloom.interfaces.api.resources.phases import (
    PhaseContentResource,
    PhaseContentStreamResource,
    PhaseResource,
    PhasesResource,
)
from storyloom.interfaces.api.resources.profiles import AvatarResource, MeResource
from storyloom.interfaces.api.resources.projects import ProjectResource, ProjectsResource

logger = logging.getLogger(__name__)


@dataclass
class ApiResources:
    """All resources served by the API."""

    health: HealthResource
    me: MeResource
    avatar: AvatarResource
    projects: ProjectsResource
    project: ProjectResource
    project_invites: ProjectInvitesResource
    modules: ModulesResource
    phases: PhasesResource
    phase: PhaseResource
    phase_content: PhaseContentResource
    phase_content_stream: PhaseContentStreamResource
    comments: CommentsResource
    comments_stream: CommentsStreamResource
    comment: CommentResource
    invites: InvitesResource
    invite_response: InviteResponseResource


async def _log_exception(req, resp, ex, params):
    logger.error("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def create_app(
    resources: ApiResources,
    middleware: list | None = None,
    avatar_route: tuple[str, str] | None = None,
) -> App:
    """Create Falcon ASGI app with routes.

    ``avatar_route`` is ``(url_prefix, absolute_directory)`` for serving
    uploaded avatars as static files.
    """
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _log_exception)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/me", resources.me)
    app.add_route("/v1/me/avatar", resources.avatar)
    app.add_route("/v1/projects", resources.projects)
    app.add_route("/v1/projects/{project_id}", resources.project)
    app.add_route("/v1/projects/{project_id}/invites", resources.project_invites)
    app.add_route("/v1/projects/{project_id}/modules", resources.modules)
    app.add_route("/v1/modules/{module_id}/phases", resources.phases)
    app.add_route("/v1/phases/{phase_id}", resources.phase)
    app.add_route("/v1/phases/{phase_id}/content", resources.phase_content)
    app.add_route("/v1/phases/{phase_id}/content/stream", resources.phase_content_stream)
    app.add_route("/v1/phases/{phase_id}/comments", resources.comments)
    app.add_route("/v1/phases/{phase_id}/comments/stream", resources.comments_stream)
    app.add_route("/v1/comments/{comment_id}", resources.comment)
    app.add_route("/v1/invites", resources.invites)
    app.add_route(
        "/v1/invites/{invite_id}/accept", resources.invite_response, suffix="accept"
    )
    app.add_route(
        "/v1/invites/{invite_id}/reject", resources.invite_response, suffix="reject"
    )

    if avatar_route is not None:
        prefix, directory = avatar_route
        app.add_static_route(prefix, directory)
    return app
