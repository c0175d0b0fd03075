"""Pytest fixtures for Storyloom tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from storyloom.application.dto.phase_dto import PhaseContent, PhaseContentUpdate
from storyloom.domain.entities import (
    Comment,
    Phase,
    Profile,
    Project,
    ProjectMember,
    StoryModule,
)
from storyloom.domain.exceptions import NotFound
from storyloom.domain.value_objects import InviteStatus, MemberRole


# --- Fake repositories ---


class FakeProfileRepository:
    """In-memory profile repository."""

    def __init__(self) -> None:
        self._by_id: dict[str, Profile] = {}

    async def get_by_id(self, profile_id: str) -> Profile | None:
        return self._by_id.get(profile_id)

    async def get_many(self, profile_ids: list[str]) -> list[Profile]:
        return [self._by_id[i] for i in profile_ids if i in self._by_id]

    async def create(self, profile: Profile) -> Profile:
        self._by_id[profile.id] = profile
        return profile

    async def update(self, profile: Profile) -> None:
        self._by_id[profile.id] = profile


class FakeProjectRepository:
    """In-memory project repository; visibility is resolved through the member repo."""

    def __init__(self, members: FakeMemberRepository) -> None:
        self._by_id: dict[UUID, Project] = {}
        self._members = members

    async def get_by_id(self, project_id: UUID) -> Project | None:
        return self._by_id.get(project_id)

    async def list_for_user(
        self,
        user_id: str,
        *,
        cursor: str | None = None,
        limit: int = 20,
    ) -> tuple[list[Project], str | None]:
        joined = {
            m.project_id
            for m in self._members._by_id.values()
            if m.user_id == user_id and m.status == InviteStatus.ACCEPTED
        }
        items = [
            p for p in self._by_id.values() if p.owner_id == user_id or p.id in joined
        ]
        items.sort(key=lambda p: p.id)
        if cursor:
            cursor_uuid = UUID(cursor)
            items = [p for p in items if p.id > cursor_uuid]
        page = items[: limit + 1]
        next_cursor = str(page[limit - 1].id) if len(page) > limit else None
        return page[:limit], next_cursor

    async def create(self, project: Project) -> Project:
        self._by_id[project.id] = project
        return project

    async def update(self, project: Project) -> None:
        self._by_id[project.id] = project


class FakeMemberRepository:
    """In-memory project_member repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, ProjectMember] = {}

    async def get_by_id(self, member_id: UUID) -> ProjectMember | None:
        return self._by_id.get(member_id)

    async def list_by_project(
        self, project_id: UUID, status: InviteStatus | None = None
    ) -> list[ProjectMember]:
        items = [
            m
            for m in self._by_id.values()
            if m.project_id == project_id and (status is None or m.status == status)
        ]
        return sorted(items, key=lambda m: m.created_at)

    async def list_pending_for_email(self, email: str) -> list[ProjectMember]:
        return [
            m
            for m in self._by_id.values()
            if m.invited_email == email and m.status == InviteStatus.PENDING
        ]

    async def get_accepted(self, project_id: UUID, user_id: str) -> ProjectMember | None:
        for m in self._by_id.values():
            if (
                m.project_id == project_id
                and m.user_id == user_id
                and m.status == InviteStatus.ACCEPTED
            ):
                return m
        return None

    async def create_batch(self, members: list[ProjectMember]) -> list[ProjectMember]:
        for m in members:
            self._by_id[m.id] = m
        return members

    async def update(self, member: ProjectMember) -> None:
        self._by_id[member.id] = member


class FakeModuleRepository:
    """In-memory module repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, StoryModule] = {}

    async def get_by_id(self, module_id: UUID) -> StoryModule | None:
        return self._by_id.get(module_id)

    async def list_by_project(self, project_id: UUID) -> list[StoryModule]:
        items = [m for m in self._by_id.values() if m.project_id == project_id]
        return sorted(items, key=lambda m: m.created_at)

    async def create(self, module: StoryModule) -> StoryModule:
        self._by_id[module.id] = module
        return module


class FakePhaseRepository:
    """In-memory phase repository."""

    def __init__(self) -> None:
        self._by_id: dict[UUID, Phase] = {}

    async def get_by_id(self, phase_id: UUID) -> Phase | None:
        return self._by_id.get(phase_id)

    async def list_by_module(self, module_id: UUID) -> list[Phase]:
        items = [p for p in self._by_id.values() if p.module_id == module_id]
        return sorted(items, key=lambda p: p.created_at)

    async def create(self, phase: Phase) -> Phase:
        self._by_id[phase.id] = phase
        return phase

    async def update_content(self, phase_id: UUID, content: str, updated_at: datetime) -> None:
        phase = self._by_id.get(phase_id)
        if phase:
            self._by_id[phase_id] = replace(phase, content=content, updated_at=updated_at)

    async def delete(self, phase_id: UUID) -> None:
        self._by_id.pop(phase_id, None)


class FakeCommentRepository:
    """In-memory comment repository; author fields come from the profile repo."""

    def __init__(self, profiles: FakeProfileRepository) -> None:
        self._by_id: dict[UUID, Comment] = {}
        self._profiles = profiles

    def _with_author(self, comment: Comment) -> Comment:
        profile = self._profiles._by_id.get(comment.user_id)
        if not profile:
            return replace(comment)
        return replace(
            comment,
            author_username=profile.username,
            author_avatar_url=profile.avatar_url,
        )

    async def get_by_id(self, comment_id: UUID) -> Comment | None:
        c = self._by_id.get(comment_id)
        return self._with_author(c) if c else None

    async def list_by_phase(self, phase_id: UUID) -> list[Comment]:
        items = [c for c in self._by_id.values() if c.phase_id == phase_id]
        items.sort(key=lambda c: c.created_at)
        return [self._with_author(c) for c in items]

    async def create(self, comment: Comment) -> Comment:
        self._by_id[comment.id] = replace(comment)
        return comment

    async def set_resolved(self, comment_id: UUID, resolved: bool) -> None:
        c = self._by_id.get(comment_id)
        if c:
            self._by_id[comment_id] = replace(c, resolved=resolved)

    async def delete(self, comment_id: UUID) -> None:
        self._by_id.pop(comment_id, None)
        for reply_id in [c.id for c in self._by_id.values() if c.parent_id == comment_id]:
            self._by_id.pop(reply_id, None)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.profiles = FakeProfileRepository()
        self.members = FakeMemberRepository()
        self.projects = FakeProjectRepository(self.members)
        self.modules = FakeModuleRepository()
        self.phases = FakePhaseRepository()
        self.comments = FakeCommentRepository(self.profiles)

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass

    # --- seeding helpers ---

    def add_project(self, owner_id: str = "owner-1", is_team: bool = True, **kwargs) -> Project:
        now = datetime.now(UTC)
        project = Project(
            id=kwargs.pop("id", uuid4()),
            title=kwargs.pop("title", "The Long Night"),
            owner_id=owner_id,
            is_team=is_team,
            created_at=now,
            updated_at=now,
            **kwargs,
        )
        self.projects._by_id[project.id] = project
        return project

    def add_member(
        self,
        project: Project,
        email: str,
        user_id: str | None = None,
        status: InviteStatus = InviteStatus.ACCEPTED,
    ) -> ProjectMember:
        member = ProjectMember(
            id=uuid4(),
            project_id=project.id,
            invited_email=email,
            role=MemberRole.EDITOR,
            status=status,
            created_at=datetime.now(UTC),
            user_id=user_id,
            invited_by=project.owner_id,
        )
        self.members._by_id[member.id] = member
        return member

    def add_module(self, project: Project, title: str = "Book One") -> StoryModule:
        module = StoryModule(
            id=uuid4(),
            project_id=project.id,
            title=title,
            created_at=datetime.now(UTC),
        )
        self.modules._by_id[module.id] = module
        return module

    def add_phase(
        self,
        module: StoryModule,
        title: str = "Chapter 1",
        content: str = "",
        assigned_to: str | None = None,
    ) -> Phase:
        now = datetime.now(UTC)
        phase = Phase(
            id=uuid4(),
            module_id=module.id,
            title=title,
            created_at=now,
            updated_at=now,
            content=content,
            assigned_to=assigned_to,
        )
        self.phases._by_id[phase.id] = phase
        return phase

    def add_comment(
        self,
        phase: Phase,
        user_id: str,
        content: str = "Nice scene",
        parent: Comment | None = None,
        resolved: bool = False,
        created_at: datetime | None = None,
    ) -> Comment:
        comment = Comment(
            id=uuid4(),
            phase_id=phase.id,
            user_id=user_id,
            content=content,
            created_at=created_at or datetime.now(UTC),
            parent_id=parent.id if parent else None,
            resolved=resolved,
        )
        self.comments._by_id[comment.id] = comment
        return comment


@asynccontextmanager
async def fake_uow_factory() -> AsyncIterator[FakeUnitOfWork]:
    """Factory that yields a fresh FakeUnitOfWork per call."""
    uow = FakeUnitOfWork()
    yield uow


def shared_uow_factory(uow: FakeUnitOfWork):
    """Factory that yields the same FakeUnitOfWork on every call."""

    @asynccontextmanager
    async def _factory():
        yield uow

    return _factory


class FakeContentStore:
    """In-memory ContentStore recording every update.

    ``gate`` (an asyncio.Event) holds updates until it is set; ``fail_with``
    makes the next updates raise.
    """

    def __init__(
        self,
        body: str = "",
        owner_id: str = "owner-1",
        assigned_to: str | None = None,
    ) -> None:
        self.phase_id = uuid4()
        self.module_id = uuid4()
        self.project_id = uuid4()
        self.body = body
        self.owner_id = owner_id
        self.assigned_to = assigned_to
        self.updates: list[str] = []
        self.gate: asyncio.Event | None = None
        self.fail_with: Exception | None = None
        self.fetch_error: Exception | None = None

    async def fetch(self, phase_id: UUID) -> PhaseContent:
        if self.fetch_error is not None:
            raise self.fetch_error
        if phase_id != self.phase_id:
            raise NotFound("Phase", str(phase_id))
        return PhaseContent(
            phase_id=self.phase_id,
            module_id=self.module_id,
            project_id=self.project_id,
            owner_id=self.owner_id,
            title="Chapter 1",
            body=self.body,
            updated_at=datetime.now(UTC),
            assigned_to=self.assigned_to,
        )

    async def update(self, phase_id: UUID, change: PhaseContentUpdate) -> None:
        self.updates.append(change.body)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        self.body = change.body


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager that yields ``fake_uow``."""
    return shared_uow_factory(fake_uow)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock


@pytest.fixture
def content_store() -> FakeContentStore:
    return FakeContentStore()
