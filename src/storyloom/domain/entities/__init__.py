"""Domain entities."""

from storyloom.domain.entities.comment import Comment, CommentThread, build_threads
from storyloom.domain.entities.phase import Phase
from storyloom.domain.entities.profile import Profile
from storyloom.domain.entities.project import Project
from storyloom.domain.entities.project_member import ProjectMember
from storyloom.domain.entities.story_module import StoryModule

__all__ = [
    "Comment",
    "CommentThread",
    "Phase",
    "Profile",
    "Project",
    "ProjectMember",
    "StoryModule",
    "build_threads",
]
