"""SQLAlchemy implementation of Board repository."""

from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.board import Board
from infrastructure.database.models import (
    BoardMemberModel,
    BoardModel,
    WorkspaceMemberModel,
    WorkspaceModel,
)


class SQLAlchemyBoardRepository:
    """SQLAlchemy implementation of IBoardRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Board | None:
        """Get a board by ID, members included."""
        stmt = select(BoardModel).where(BoardModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_workspace(self, workspace_id: UUID) -> list[Board]:
        """Get all boards of a workspace ordered by creation."""
        stmt = (
            select(BoardModel)
            .where(BoardModel.workspace_id == workspace_id)
            .order_by(BoardModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_visible_to_user(self, user_id: UUID) -> list[Board]:
        """Get boards the user owns or is a member of, in workspaces they belong to."""
        member_workspaces = select(WorkspaceMemberModel.workspace_id).where(
            WorkspaceMemberModel.user_id == user_id
        )
        created_workspaces = select(WorkspaceModel.id).where(WorkspaceModel.created_by == user_id)
        board_memberships = select(BoardMemberModel.board_id).where(
            BoardMemberModel.user_id == user_id
        )
        stmt = (
            select(BoardModel)
            .where(
                or_(
                    BoardModel.workspace_id.in_(member_workspaces),
                    BoardModel.workspace_id.in_(created_workspaces),
                ),
                or_(
                    BoardModel.owner_id == user_id,
                    BoardModel.id.in_(board_memberships),
                ),
            )
            .order_by(BoardModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, board: Board) -> Board:
        """Create a new board with its member list."""
        model = self._to_model(board)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, board: Board) -> Board:
        """Update title, description and member list of a board."""
        stmt = select(BoardModel).where(BoardModel.id == board.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Board {board.id} not found")

        model.title = board.title
        model.description = board.description
        model.updated_at = board.updated_at

        # Diff instead of replacing so unchanged rows keep their identity
        wanted = list(dict.fromkeys(board.member_ids))
        model.members = [m for m in model.members if m.user_id in wanted]
        present = {m.user_id for m in model.members}
        for user_id in wanted:
            if user_id not in present:
                model.members.append(BoardMemberModel(user_id=user_id))

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a board (cascade deletes its tasks)."""
        stmt = select(BoardModel).where(BoardModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: BoardModel) -> Board:
        """Convert ORM model to domain entity."""
        return Board(
            id=model.id,
            title=model.title,
            description=model.description,
            workspace_id=model.workspace_id,
            owner_id=model.owner_id,
            member_ids=[m.user_id for m in model.members],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Board) -> BoardModel:
        """Convert domain entity to ORM model."""
        return BoardModel(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            workspace_id=entity.workspace_id,
            owner_id=entity.owner_id,
            members=[
                BoardMemberModel(user_id=user_id, added_at=entity.created_at)
                for user_id in dict.fromkeys(entity.member_ids)
            ],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
