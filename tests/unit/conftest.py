"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from domain.entities.user import User, UserRole
from domain.entities.workspace import Workspace, WorkspaceMember, WorkspaceRole


class FakeUnitOfWork:
    """Fake Unit of Work with all 6 repository mocks for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.workspaces = AsyncMock()
        self.boards = AsyncMock()
        self.tasks = AsyncMock()
        self.invitations = AsyncMock()
        self.board_teams = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def user_id() -> UUID:
    """A random user ID."""
    return uuid4()


@pytest.fixture
def workspace_id() -> UUID:
    """A random workspace ID."""
    return uuid4()


def make_user(role: UserRole = UserRole.USER, **kwargs: Any) -> User:
    """Build a user entity with throwaway credentials."""
    kwargs.setdefault("name", "User")
    kwargs.setdefault("email", f"{uuid4().hex[:8]}@example.com")
    kwargs.setdefault("password_hash", "hash")
    return User(role=role, **kwargs)


@pytest.fixture
def user(user_id: UUID) -> User:
    """A plain (non-admin) user."""
    return make_user(id=user_id, name="Alice", email="alice@example.com")


@pytest.fixture
def admin() -> User:
    """A global admin."""
    return make_user(UserRole.ADMIN, name="Root", email="root@example.com")


@pytest.fixture
def creator() -> User:
    """The user who created ``workspace``."""
    return make_user(name="Creator", email="creator@example.com")


@pytest.fixture
def workspace(workspace_id: UUID, creator: User) -> Workspace:
    return Workspace(id=workspace_id, name="Product", created_by=creator.id)


def member_of(
    workspace: Workspace, user: User, role: WorkspaceRole = WorkspaceRole.MEMBER
) -> WorkspaceMember:
    """Membership row for ``user`` in ``workspace``."""
    return WorkspaceMember(workspace_id=workspace.id, user_id=user.id, role=role)
