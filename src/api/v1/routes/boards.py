"""Board API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_board_service
from api.v1.schemas.board import (
    BoardCreate,
    BoardDetailResponse,
    BoardInviteRequest,
    BoardInviteResponse,
    BoardListResponse,
    BoardResponse,
    BoardUpdate,
)
from domain.entities.board import Board
from domain.services.board_service import BoardService

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get(
    "",
    response_model=BoardListResponse,
    summary="List my boards",
    responses={200: {"description": "Boards the user owns or belongs to"}},
)
async def list_boards(
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardListResponse:
    """Boards in the user's workspaces where they are owner or member."""
    boards = await service.get_all_for_user(user)
    data = [_build_board_response(b) for b in boards]
    return BoardListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/workspace/{workspace_id}",
    response_model=BoardListResponse,
    summary="List boards of a workspace",
    responses={
        200: {"description": "Boards ordered by creation"},
        403: {"description": "Not a member"},
        404: {"description": "Workspace not found"},
    },
)
async def list_workspace_boards(
    workspace_id: UUID,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardListResponse:
    """All boards of a workspace. Requires membership."""
    boards = await service.get_for_workspace(workspace_id, user)
    data = [_build_board_response(b) for b in boards]
    return BoardListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{board_id}",
    response_model=BoardDetailResponse,
    summary="Get a board",
    responses={
        200: {"description": "Board details"},
        403: {"description": "Not a member"},
        404: {"description": "Board not found"},
    },
)
async def get_board(
    board_id: UUID,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    """Get a board by ID. Requires workspace membership."""
    board = await service.get_by_id(board_id, user)
    return BoardDetailResponse(data=_build_board_response(board))


@router.post(
    "",
    response_model=BoardDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a board",
    responses={
        201: {"description": "Board created"},
        400: {"description": "Workspace ID missing"},
        403: {"description": "Not a member"},
        404: {"description": "Workspace not found"},
    },
)
async def create_board(
    body: BoardCreate,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    """Create a board in a workspace. The requester owns it."""
    board = await service.create(
        user=user,
        workspace_id=body.workspace_id,
        title=body.title,
        description=body.description,
    )
    return BoardDetailResponse(data=_build_board_response(board))


@router.put(
    "/{board_id}",
    response_model=BoardDetailResponse,
    summary="Update a board",
    responses={
        200: {"description": "Board updated"},
        400: {"description": "Members outside the workspace"},
        403: {"description": "Board owner or workspace admin only"},
        404: {"description": "Board not found"},
    },
)
async def update_board(
    board_id: UUID,
    body: BoardUpdate,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardDetailResponse:
    """Update a board's title, description or member list."""
    board = await service.update(
        board_id=board_id,
        user=user,
        title=body.title,
        description=body.description,
        member_ids=body.members,
    )
    return BoardDetailResponse(data=_build_board_response(board))


@router.delete(
    "/{board_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a board",
    responses={
        204: {"description": "Board and its tasks deleted"},
        403: {"description": "Board owner or workspace admin only"},
        404: {"description": "Board not found"},
    },
)
async def delete_board(
    board_id: UUID,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> None:
    """Delete a board and all of its tasks."""
    await service.delete(board_id, user)
    return None


@router.post(
    "/{board_id}/invite",
    response_model=BoardInviteResponse,
    summary="Invite a user to a board",
    responses={
        200: {"description": "User added to the board"},
        400: {"description": "Already a board member or not a workspace member"},
        403: {"description": "Not a member"},
        404: {"description": "Board or user not found"},
    },
)
async def invite_to_board(
    board_id: UUID,
    body: BoardInviteRequest,
    user: CurrentUser,
    service: BoardService = Depends(get_board_service),
) -> BoardInviteResponse:
    """Add a workspace member to the board and notify them by email."""
    result = await service.invite(board_id, user, body.user_id)
    return BoardInviteResponse(
        email_sent=result.email_sent,
        data=_build_board_response(result.board),
    )


def _build_board_response(board: Board) -> BoardResponse:
    """Convert domain entity to response schema."""
    return BoardResponse(
        id=board.id,
        title=board.title,
        description=board.description,
        workspace_id=board.workspace_id,
        owner_id=board.owner_id,
        members=list(board.member_ids),
        created_at=board.created_at,
        updated_at=board.updated_at,
    )
