"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from storyloom.application.ports.repositories import (
    CommentRepository,
    MemberRepository,
    ModuleRepository,
    PhaseRepository,
    ProfileRepository,
    ProjectRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def profiles(self) -> ProfileRepository: ...

    @property
    def projects(self) -> ProjectRepository: ...

    @property
    def members(self) -> MemberRepository: ...

    @property
    def modules(self) -> ModuleRepository: ...

    @property
    def phases(self) -> PhaseRepository: ...

    @property
    def comments(self) -> CommentRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
