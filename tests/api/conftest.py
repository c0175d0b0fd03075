"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from storyloom.application.use_cases.comment.add_comment import AddCommentUseCase
from storyloom.application.use_cases.comment.list_comments import ListCommentThreadsUseCase
from storyloom.application.use_cases.comment.moderate_comment import (
    DeleteCommentUseCase,
    SetCommentResolvedUseCase,
)
from storyloom.application.use_cases.invite.invite_writers import InviteWritersUseCase
from storyloom.application.use_cases.invite.list_invites import ListIncomingInvitesUseCase
from storyloom.application.use_cases.invite.respond_to_invite import RespondToInviteUseCase
from storyloom.application.use_cases.module.create_module import CreateModuleUseCase
from storyloom.application.use_cases.phase.create_phase import CreatePhaseUseCase
from storyloom.application.use_cases.phase.delete_phase import DeletePhaseUseCase
from storyloom.application.use_cases.phase.get_phase_content import GetPhaseContentUseCase
from storyloom.application.use_cases.phase.list_phases import ListPhasesUseCase
from storyloom.application.use_cases.phase.save_phase_content import SavePhaseContentUseCase
from storyloom.application.use_cases.profile.ensure_profile import EnsureProfileUseCase
from storyloom.application.use_cases.profile.update_avatar import UpdateAvatarUseCase
from storyloom.application.use_cases.project.create_project import CreateProjectUseCase
from storyloom.application.use_cases.project.get_project import GetProjectUseCase
from storyloom.infrastructure.permission.permission_checker import ProjectPermissionChecker
from storyloom.infrastructure.realtime.broadcaster import ChangeBroadcaster
from storyloom.infrastructure.storage.local_avatar_storage import LocalAvatarStorage
from storyloom.interfaces.api.app import ApiResources, create_app
from storyloom.interfaces.api.middleware.auth import RequestUser
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


class AuthBypassMiddleware:
    """Sets context.user from the X-Test-User header (default ``owner-1``).

    ``X-Test-User: -`` simulates an unauthenticated request.
    """

    async def process_request(self, req, resp):
        user_id = req.get_header("X-Test-User") or "owner-1"
        if user_id == "-":
            req.context.user = None
            return
        req.context.user = RequestUser(
            user_id=user_id,
            email=f"{user_id}@example.com",
            username=user_id,
        )


def as_user(user_id: str) -> dict[str, str]:
    return {"X-Test-User": user_id}


@pytest.fixture
def broadcaster() -> ChangeBroadcaster:
    return ChangeBroadcaster()


@pytest.fixture
def app(uow_factory, broadcaster, tmp_path):
    """Falcon ASGI app wired to in-memory repositories and the real permission checker."""
    checker = ProjectPermissionChecker(uow_factory)
    list_threads = ListCommentThreadsUseCase(uow_factory, checker)
    get_content = GetPhaseContentUseCase(uow_factory, checker)
    resources = ApiResources(
        health=HealthResource(),
        me=MeResource(EnsureProfileUseCase(uow_factory)),
        avatar=AvatarResource(
            UpdateAvatarUseCase(
                uow_factory,
                LocalAvatarStorage(str(tmp_path), "/avatars"),
                max_bytes=1024,
            )
        ),
        projects=ProjectsResource(CreateProjectUseCase(uow_factory), uow_factory),
        project=ProjectResource(GetProjectUseCase(uow_factory, checker)),
        project_invites=ProjectInvitesResource(InviteWritersUseCase(uow_factory, checker)),
        modules=ModulesResource(CreateModuleUseCase(uow_factory, checker)),
        phases=PhasesResource(
            ListPhasesUseCase(uow_factory, checker),
            CreatePhaseUseCase(uow_factory, checker),
        ),
        phase=PhaseResource(DeletePhaseUseCase(uow_factory, checker)),
        phase_content=PhaseContentResource(
            get_content,
            SavePhaseContentUseCase(uow_factory, notifier=broadcaster),
        ),
        comments=CommentsResource(
            list_threads, AddCommentUseCase(uow_factory, checker, notifier=broadcaster)
        ),
        phase_content_stream=PhaseContentStreamResource(get_content, broadcaster),
        comments_stream=CommentsStreamResource(list_threads, broadcaster),
        comment=CommentResource(
            SetCommentResolvedUseCase(uow_factory, checker, notifier=broadcaster),
            DeleteCommentUseCase(uow_factory, notifier=broadcaster),
        ),
        invites=InvitesResource(ListIncomingInvitesUseCase(uow_factory)),
        invite_response=InviteResponseResource(RespondToInviteUseCase(uow_factory)),
    )
    return create_app(resources, middleware=[AuthBypassMiddleware()])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
