"""SQLAlchemy implementation of Task repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Task
from infrastructure.database.models import TaskAssigneeModel, TaskModel


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID, assignees included."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_board(self, board_id: UUID) -> list[Task]:
        """Get all tasks on a board ordered by position then creation."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.board_id == board_id)
            .order_by(TaskModel.position, TaskModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_max_position(self, board_id: UUID) -> int:
        """Get the highest position on a board, -1 when empty."""
        stmt = select(func.coalesce(func.max(TaskModel.position), -1)).where(
            TaskModel.board_id == board_id
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def create(self, task: Task) -> Task:
        """Create a new task with its assignees."""
        model = self._to_model(task)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, task: Task) -> Task:
        """Update an existing task, including a move to another board."""
        stmt = select(TaskModel).where(TaskModel.id == task.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Task {task.id} not found")

        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.board_id = task.board_id
        model.attachment = task.attachment
        model.position = task.position
        model.updated_at = task.updated_at

        wanted = list(dict.fromkeys(task.assignee_ids))
        model.assignees = [a for a in model.assignees if a.user_id in wanted]
        present = {a.user_id for a in model.assignees}
        for user_id in wanted:
            if user_id not in present:
                model.assignees.append(TaskAssigneeModel(user_id=user_id))

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a task."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            board_id=model.board_id,
            created_by=model.created_by,
            assignee_ids=[a.user_id for a in model.assignees],
            attachment=model.attachment,
            position=model.position,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            status=entity.status,
            board_id=entity.board_id,
            created_by=entity.created_by,
            assignees=[
                TaskAssigneeModel(user_id=user_id, assigned_at=entity.created_at)
                for user_id in dict.fromkeys(entity.assignee_ids)
            ],
            attachment=entity.attachment,
            position=entity.position,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
