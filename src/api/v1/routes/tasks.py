"""Task API routes.

Create and update take multipart form data so an attachment can travel with
the fields. Assignees may be sent as repeated ``assigned_to`` fields or, as
older clients do, ``assignedTo[]``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_task_service
from api.v1.schemas.task import (
    TaskDetailResponse,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdate,
)
from domain.entities.task import AttachmentUpload, Task
from domain.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

AssignedTo = Annotated[list[UUID] | None, Form()]
AssignedToLegacy = Annotated[list[UUID] | None, Form(alias="assignedTo[]")]
Attachment = Annotated[UploadFile | None, File()]


@router.get(
    "/board/{board_id}",
    response_model=TaskListResponse,
    summary="List tasks of a board",
    responses={
        200: {"description": "Tasks ordered by position"},
        403: {"description": "Not a member"},
        404: {"description": "Board not found"},
    },
)
async def list_board_tasks(
    board_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    """All tasks of a board. Requires workspace membership."""
    tasks = await service.get_for_board(board_id, user)
    data = [_build_task_response(t) for t in tasks]
    return TaskListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Get a task",
    responses={
        200: {"description": "Task details"},
        403: {"description": "Not a member"},
        404: {"description": "Task not found"},
    },
)
async def get_task(
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Get a task by ID."""
    task = await service.get_by_id(task_id, user)
    return TaskDetailResponse(data=_build_task_response(task))


@router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={
        201: {"description": "Task created"},
        400: {"description": "Assignees outside the workspace"},
        403: {"description": "Not a member"},
        404: {"description": "Board not found"},
    },
)
async def create_task(
    user: CurrentUser,
    title: Annotated[str, Form(min_length=1, max_length=255)],
    board: Annotated[UUID, Form()],
    description: Annotated[str | None, Form(max_length=5000)] = None,
    task_status: Annotated[str | None, Form(alias="status", max_length=50)] = None,
    assigned_to: AssignedTo = None,
    assigned_to_legacy: AssignedToLegacy = None,
    attachment: Attachment = None,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Create a task at the end of a board."""
    task = await service.create(
        user=user,
        board_id=board,
        title=title,
        description=description,
        status=task_status,
        assignee_ids=_merge_assignees(assigned_to, assigned_to_legacy),
        attachment=await _read_attachment(attachment),
    )
    return TaskDetailResponse(data=_build_task_response(task))


@router.put(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update or move a task",
    responses={
        200: {"description": "Task updated"},
        400: {"description": "Cross-workspace move or assignees outside the workspace"},
        403: {"description": "Not allowed to edit this task"},
        404: {"description": "Task or target board not found"},
    },
)
async def update_task(
    task_id: UUID,
    user: CurrentUser,
    title: Annotated[str | None, Form(min_length=1, max_length=255)] = None,
    description: Annotated[str | None, Form(max_length=5000)] = None,
    task_status: Annotated[str | None, Form(alias="status", max_length=50)] = None,
    board: Annotated[UUID | None, Form()] = None,
    assigned_to: AssignedTo = None,
    assigned_to_legacy: AssignedToLegacy = None,
    attachment: Attachment = None,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Update a task. Moving it to another board alone only needs membership."""
    task = await service.update(
        task_id=task_id,
        user=user,
        title=title,
        description=description,
        status=task_status,
        assignee_ids=_merge_assignees(assigned_to, assigned_to_legacy),
        board_id=board,
        attachment=await _read_attachment(attachment),
    )
    return TaskDetailResponse(data=_build_task_response(task))


@router.patch(
    "/{task_id}/status",
    response_model=TaskDetailResponse,
    summary="Change task status",
    responses={
        200: {"description": "Status changed"},
        403: {"description": "Not a member"},
        404: {"description": "Task not found"},
    },
)
async def update_task_status(
    task_id: UUID,
    body: TaskStatusUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Set a task's status. Any workspace member may do this."""
    task = await service.update_status(task_id, user, body.status)
    return TaskDetailResponse(data=_build_task_response(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={
        204: {"description": "Task deleted"},
        403: {"description": "Task creator or workspace admin only"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> None:
    """Delete a task."""
    await service.delete(task_id, user)
    return None


def _merge_assignees(
    assigned_to: list[UUID] | None, legacy: list[UUID] | None
) -> list[UUID] | None:
    if assigned_to is None and legacy is None:
        return None
    return [*(assigned_to or []), *(legacy or [])]


async def _read_attachment(upload: UploadFile | None) -> AttachmentUpload | None:
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    return AttachmentUpload(
        filename=upload.filename,
        content=content,
        content_type=upload.content_type,
    )


def _build_task_response(task: Task) -> TaskResponse:
    """Convert domain entity to response schema."""
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        board_id=task.board_id,
        assigned_to=list(task.assignee_ids),
        created_by=task.created_by,
        attachment=task.attachment,
        position=task.position,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )
