"""User service layer with business logic."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from core.exceptions import AuthorizationError, UserAlreadyExistsError, UserNotFoundError
from domain.entities.invitation import ACTIVE_STATUSES, TeamMember, normalize_email
from domain.entities.user import User, UserRole
from domain.repositories.unit_of_work import IUnitOfWork


class UserService:
    """Service layer for User business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_roster(self, requester_id: UUID) -> list[TeamMember]:
        """Users the requester invited whose invitation is linked and active.

        There is no admin override: everyone sees only their own invitees.
        """
        async with self._uow_factory() as uow:
            return await uow.invitations.get_team_members(  # type: ignore[no-any-return]
                requester_id, ACTIVE_STATUSES
            )

    async def get_by_id(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user

    async def update(
        self,
        actor: User,
        user_id: UUID,
        name: str | None = None,
        email: str | None = None,
        role: UserRole | None = None,
    ) -> User:
        """Update a user's profile. Global admins only."""
        if not actor.is_admin:
            raise AuthorizationError("Only administrators can edit users")

        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            if email is not None:
                normalized = normalize_email(email)
                if normalized != user.email:
                    other = await uow.users.get_by_email(normalized)
                    if other and other.id != user.id:
                        raise UserAlreadyExistsError(normalized)
                    user.email = normalized
            if name is not None:
                user.name = name.strip()
            if role is not None:
                user.role = role

            user.updated_at = datetime.utcnow()
            updated = await uow.users.update(user)
            await uow.commit()
            return updated

    async def delete(self, actor: User, user_id: UUID) -> None:
        """Delete a user. Global admins and workspace creators only."""
        async with self._uow_factory() as uow:
            if not actor.is_admin and await uow.workspaces.count_created_by(actor.id) == 0:
                raise AuthorizationError("Only workspace creators can delete users")

            deleted = await uow.users.delete(user_id)
            if not deleted:
                raise UserNotFoundError(str(user_id))
            await uow.commit()
