"""Application entry point and composition root."""

import argparse
import logging
from pathlib import Path

from storyloom import __version__
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
from storyloom.config import get_settings
from storyloom.infrastructure.auth.keycloak_provider import KeycloakProvider
from storyloom.infrastructure.permission.permission_checker import ProjectPermissionChecker
from storyloom.infrastructure.persistence.postgres.connection import create_pool
from storyloom.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from storyloom.infrastructure.realtime.broadcaster import ChangeBroadcaster
from storyloom.infrastructure.storage.local_avatar_storage import LocalAvatarStorage
from storyloom.interfaces.api.app import ApiResources, create_app
from storyloom.interfaces.api.middleware.auth import AuthMiddleware
from storyloom.interfaces.api.middleware.cors import CORSMiddleware
from storyloom.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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


def create_storyloom_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
            cache_ttl=settings.token_cache_ttl,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("KEYCLOAK_CLIENT_SECRET not set; every request is unauthenticated")

    permission_checker = ProjectPermissionChecker(uow_factory)
    broadcaster = ChangeBroadcaster()
    avatar_dir = Path(settings.avatar_storage_dir).resolve()
    avatar_dir.mkdir(parents=True, exist_ok=True)
    avatar_storage = LocalAvatarStorage(str(avatar_dir), settings.avatar_public_url)

    list_threads = ListCommentThreadsUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    get_content = GetPhaseContentUseCase(
        unit_of_work_factory=uow_factory,
        permission_checker=permission_checker,
    )
    resources = ApiResources(
        health=HealthResource(pool),
        me=MeResource(EnsureProfileUseCase(uow_factory)),
        avatar=AvatarResource(
            UpdateAvatarUseCase(
                unit_of_work_factory=uow_factory,
                storage=avatar_storage,
                max_bytes=settings.avatar_max_bytes,
            )
        ),
        projects=ProjectsResource(CreateProjectUseCase(uow_factory), uow_factory),
        project=ProjectResource(
            GetProjectUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            )
        ),
        project_invites=ProjectInvitesResource(
            InviteWritersUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            )
        ),
        modules=ModulesResource(
            CreateModuleUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            )
        ),
        phases=PhasesResource(
            ListPhasesUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            ),
            CreatePhaseUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            ),
        ),
        phase=PhaseResource(
            DeletePhaseUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
            )
        ),
        phase_content=PhaseContentResource(
            get_content,
            SavePhaseContentUseCase(
                unit_of_work_factory=uow_factory,
                notifier=broadcaster,
            ),
        ),
        comments=CommentsResource(
            list_threads,
            AddCommentUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
                notifier=broadcaster,
            ),
        ),
        phase_content_stream=PhaseContentStreamResource(get_content, broadcaster),
        comments_stream=CommentsStreamResource(list_threads, broadcaster),
        comment=CommentResource(
            SetCommentResolvedUseCase(
                unit_of_work_factory=uow_factory,
                permission_checker=permission_checker,
                notifier=broadcaster,
            ),
            DeleteCommentUseCase(
                unit_of_work_factory=uow_factory,
                notifier=broadcaster,
            ),
        ),
        invites=InvitesResource(ListIncomingInvitesUseCase(uow_factory)),
        invite_response=InviteResponseResource(RespondToInviteUseCase(uow_factory)),
    )

    cors_origins = [
        o.strip() for o in settings.cors_origins.split(",") if o.strip()
    ]
    return create_app(
        resources,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool, settings.db_pool_wait_timeout),
            AuthMiddleware(keycloak),
        ],
        avatar_route=(settings.avatar_public_url, str(avatar_dir)),
    )


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_storyloom_app()
    uvicorn.run(app, host=host, port=port, log_level=get_settings().log_level.lower())


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="storyloom", description="Storyloom API server")
    parser.add_argument("--version", action="version", version=f"Storyloom v{__version__}")
    subparsers = parser.add_subparsers(dest="command")
    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port)
    else:
        parser.print_help()
