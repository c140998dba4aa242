"""Board team service layer."""

import logging
from collections.abc import Callable
from uuid import UUID

from core.exceptions import (
    AlreadyATeamMemberError,
    AuthorizationError,
    BoardNotFoundError,
    TeamAlreadyExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)
from domain.entities.board_team import BoardTeam
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = logging.getLogger(__name__)


class BoardTeamService:
    """Per-board team rosters, managed by the board owner."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user: User, board_id: UUID) -> BoardTeam:
        """Create the team of a board with the requester as first member.

        Raises:
            BoardNotFoundError: If the board doesn't exist.
            AuthorizationError: If the requester neither owns the board nor
                is a global admin.
            TeamAlreadyExistsError: If the board already has a team.
        """
        async with self._uow_factory() as uow:
            board = await uow.boards.get(board_id)
            if not board:
                raise BoardNotFoundError(str(board_id))
            if board.owner_id != user.id and not user.is_admin:
                raise AuthorizationError("Only the board owner can create a team")
            if await uow.board_teams.get_for_board(board_id):
                raise TeamAlreadyExistsError(str(board_id))

            team = BoardTeam(board_id=board_id, created_by=user.id, member_ids=[user.id])
            created = await uow.board_teams.create(team)
            await uow.commit()

        logger.info("Created team %s for board %s", created.id, board_id)
        return created

    async def get_for_board(self, board_id: UUID, user: User) -> BoardTeam:
        """Get the team of a board. Visible to its members and global admins."""
        async with self._uow_factory() as uow:
            team = await uow.board_teams.get_for_board(board_id)
            if not team:
                raise TeamNotFoundError(str(board_id))
            if not team.has_member(user.id) and not user.is_admin:
                raise AuthorizationError("Not a member of this team")
            return team

    async def add_member(self, team_id: UUID, user: User, target_user_id: UUID) -> BoardTeam:
        """Add a user to a team. Requires team creator or global admin."""
        async with self._uow_factory() as uow:
            team = await self._get_managed_team(uow, team_id, user)
            if team.has_member(target_user_id):
                raise AlreadyATeamMemberError(str(target_user_id))
            if not await uow.users.get(target_user_id):
                raise UserNotFoundError(str(target_user_id))

            updated = await uow.board_teams.add_member(team_id, target_user_id)
            await uow.commit()
            return updated  # type: ignore[no-any-return]

    async def remove_member(self, team_id: UUID, user: User, target_user_id: UUID) -> None:
        """Remove a user from a team. Requires team creator or global admin."""
        async with self._uow_factory() as uow:
            await self._get_managed_team(uow, team_id, user)
            await uow.board_teams.remove_member(team_id, target_user_id)
            await uow.commit()

    async def _get_managed_team(self, uow: IUnitOfWork, team_id: UUID, user: User) -> BoardTeam:
        team = await uow.board_teams.get(team_id)
        if not team:
            raise TeamNotFoundError(str(team_id))
        if team.created_by != user.id and not user.is_admin:
            raise AuthorizationError("Only the team creator can manage members")
        return team
