"""SQLAlchemy implementation of BoardTeam repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.board_team import BoardTeam
from infrastructure.database.models import BoardTeamMemberModel, BoardTeamModel


class SQLAlchemyBoardTeamRepository:
    """SQLAlchemy implementation of IBoardTeamRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> BoardTeam | None:
        """Get a team by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def get_for_board(self, board_id: UUID) -> BoardTeam | None:
        """Get the team of a board."""
        stmt = select(BoardTeamModel).where(BoardTeamModel.board_id == board_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, team: BoardTeam) -> BoardTeam:
        """Create a new team with its initial members."""
        model = BoardTeamModel(
            id=team.id,
            board_id=team.board_id,
            created_by=team.created_by,
            created_at=team.created_at,
            members=[
                BoardTeamMemberModel(user_id=user_id, added_at=team.created_at)
                for user_id in dict.fromkeys(team.member_ids)
            ],
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def add_member(self, team_id: UUID, user_id: UUID) -> BoardTeam:
        """Add a user to the team."""
        model = await self._get_model(team_id)
        if not model:
            raise ValueError(f"Team {team_id} not found")

        model.members.append(BoardTeamMemberModel(user_id=user_id))
        await self._session.flush()
        return self._to_entity(model)

    async def remove_member(self, team_id: UUID, user_id: UUID) -> bool:
        """Remove a user from the team."""
        stmt = select(BoardTeamMemberModel).where(
            BoardTeamMemberModel.team_id == team_id,
            BoardTeamMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        member = result.scalar_one_or_none()

        if not member:
            return False

        await self._session.delete(member)
        await self._session.flush()
        return True

    async def _get_model(self, id: UUID) -> BoardTeamModel | None:
        stmt = select(BoardTeamModel).where(BoardTeamModel.id == id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: BoardTeamModel) -> BoardTeam:
        """Convert ORM model to domain entity."""
        return BoardTeam(
            id=model.id,
            board_id=model.board_id,
            created_by=model.created_by,
            member_ids=[m.user_id for m in model.members],
            created_at=model.created_at,
        )
