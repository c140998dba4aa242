"""Workspace service layer with business logic."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from core.exceptions import (
    AlreadyAMemberError,
    CannotRemoveCreatorError,
    UserNotFoundError,
)
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceMember, WorkspaceRole
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_policy import Capability
from domain.services.authorization import authorize_workspace

logger = logging.getLogger(__name__)


class WorkspaceService:
    """Service layer for Workspace business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_all_for_user(self, user: User) -> list[Workspace]:
        """Get the workspaces a user belongs to (every workspace for admins)."""
        async with self._uow_factory() as uow:
            if user.is_admin:
                return await uow.workspaces.get_all()  # type: ignore[no-any-return]
            return await uow.workspaces.get_all_for_user(user.id)  # type: ignore[no-any-return]

    async def get_by_id(self, workspace_id: UUID, user: User) -> Workspace:
        """Get a workspace by ID, verifying membership."""
        async with self._uow_factory() as uow:
            workspace, _ = await authorize_workspace(
                uow, user, workspace_id, Capability.VIEW_WORKSPACE
            )
            return workspace

    async def create(
        self,
        user: User,
        name: str,
        description: str | None = None,
    ) -> Workspace:
        """Create a new workspace and add the creator as Admin."""
        async with self._uow_factory() as uow:
            workspace = Workspace(
                name=name,
                description=description,
                created_by=user.id,
            )
            created = await uow.workspaces.create(workspace)

            await uow.workspaces.add_member(
                WorkspaceMember(
                    workspace_id=created.id,
                    user_id=user.id,
                    role=WorkspaceRole.ADMIN,
                )
            )
            await uow.commit()
            logger.info("Workspace %s created by %s", created.id, user.id)
            return created

    async def update(
        self,
        workspace_id: UUID,
        user: User,
        name: str | None = None,
        description: str | None = None,
    ) -> Workspace:
        """Update a workspace. Requires workspace admin."""
        async with self._uow_factory() as uow:
            workspace, _ = await authorize_workspace(
                uow, user, workspace_id, Capability.MANAGE_WORKSPACE
            )

            if name is not None:
                workspace.name = name
            if description is not None:
                workspace.description = description

            workspace.updated_at = datetime.utcnow()
            updated = await uow.workspaces.update(workspace)
            await uow.commit()
            return updated

    async def delete(self, workspace_id: UUID, user: User) -> None:
        """Delete a workspace with its boards and tasks. Creator only."""
        async with self._uow_factory() as uow:
            await authorize_workspace(uow, user, workspace_id, Capability.DELETE_WORKSPACE)
            await uow.workspaces.delete(workspace_id)
            await uow.commit()
            logger.info("Workspace %s deleted by %s", workspace_id, user.id)

    # --- Members ---

    async def get_members(
        self, workspace_id: UUID, user: User
    ) -> list[tuple[WorkspaceMember, User | None]]:
        """Get the members of a workspace paired with their user records."""
        async with self._uow_factory() as uow:
            _, members = await authorize_workspace(
                uow, user, workspace_id, Capability.VIEW_WORKSPACE
            )
            users = await uow.users.get_many([m.user_id for m in members])
            by_id = {u.id: u for u in users}
            return [(m, by_id.get(m.user_id)) for m in members]

    async def add_member(
        self,
        workspace_id: UUID,
        user: User,
        target_user_id: UUID,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
    ) -> WorkspaceMember:
        """Add a user to a workspace. Requires workspace admin."""
        async with self._uow_factory() as uow:
            _, members = await authorize_workspace(
                uow, user, workspace_id, Capability.MANAGE_WORKSPACE
            )

            if not await uow.users.get(target_user_id):
                raise UserNotFoundError(str(target_user_id))
            if any(m.user_id == target_user_id for m in members):
                raise AlreadyAMemberError(str(target_user_id))

            added = await uow.workspaces.add_member(
                WorkspaceMember(
                    workspace_id=workspace_id,
                    user_id=target_user_id,
                    role=role,
                )
            )
            await uow.commit()
            return added

    async def update_member_role(
        self,
        workspace_id: UUID,
        user: User,
        target_user_id: UUID,
        role: WorkspaceRole,
    ) -> WorkspaceMember:
        """Change a member's role. Requires workspace admin."""
        async with self._uow_factory() as uow:
            _, members = await authorize_workspace(
                uow, user, workspace_id, Capability.MANAGE_WORKSPACE
            )

            if not any(m.user_id == target_user_id for m in members):
                raise UserNotFoundError(str(target_user_id))

            updated = await uow.workspaces.update_member_role(workspace_id, target_user_id, role)
            await uow.commit()
            return updated

    async def remove_member(
        self,
        workspace_id: UUID,
        user: User,
        target_user_id: UUID,
    ) -> None:
        """Remove a member. Admins may remove anyone but the creator; members may leave."""
        async with self._uow_factory() as uow:
            needed = (
                Capability.VIEW_WORKSPACE
                if target_user_id == user.id
                else Capability.MANAGE_WORKSPACE
            )
            workspace, members = await authorize_workspace(uow, user, workspace_id, needed)

            if target_user_id == workspace.created_by:
                raise CannotRemoveCreatorError()
            if not any(m.user_id == target_user_id for m in members):
                raise UserNotFoundError(str(target_user_id))

            await uow.workspaces.remove_member(workspace_id, target_user_id)
            await uow.commit()
