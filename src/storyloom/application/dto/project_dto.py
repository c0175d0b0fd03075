"""Project DTOs."""

from dataclasses import dataclass, field

from storyloom.domain.entities import Profile, Project, ProjectMember, StoryModule


@dataclass
class ProjectCreateInput:
    """Input for creating a project, optionally inviting writers by email."""

    title: str
    description: str = ""
    is_team: bool = False
    invites: list[str] = field(default_factory=list)


@dataclass
class ProjectDetail:
    """Project dashboard: the project, its accepted members and its modules."""

    project: Project
    members: list[ProjectMember]
    modules: list[StoryModule]
    profiles: dict[str, Profile] = field(default_factory=dict)
