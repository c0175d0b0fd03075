"""Repository ports."""

from storyloom.application.ports.repositories.comment_repository import CommentRepository
from storyloom.application.ports.repositories.member_repository import MemberRepository
from storyloom.application.ports.repositories.module_repository import ModuleRepository
from storyloom.application.ports.repositories.phase_repository import PhaseRepository
from storyloom.application.ports.repositories.profile_repository import ProfileRepository
from storyloom.application.ports.repositories.project_repository import ProjectRepository

__all__ = [
    "CommentRepository",
    "MemberRepository",
    "ModuleRepository",
    "PhaseRepository",
    "ProfileRepository",
    "ProjectRepository",
]
