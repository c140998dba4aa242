"""Board team API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_board_team_service, get_invitation_service
from api.v1.routes.users import build_team_member_response
from api.v1.schemas.team import (
    TeamAddMemberRequest,
    TeamCreate,
    TeamDetailResponse,
    TeamResponse,
)
from api.v1.schemas.user import TeamMemberListResponse
from domain.entities.board_team import BoardTeam
from domain.services.board_team_service import BoardTeamService
from domain.services.invitation_service import InvitationService

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get(
    "/members",
    response_model=TeamMemberListResponse,
    summary="List accepted team members",
    responses={200: {"description": "Invitees who accepted the requester's invitation"}},
)
async def list_team_members(
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> TeamMemberListResponse:
    """Accepted invitees of the requester, linked to an account."""
    members = await service.get_team_members(user.id)
    data = [build_team_member_response(m) for m in members]
    return TeamMemberListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=TeamDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a board team",
    responses={
        201: {"description": "Team created"},
        403: {"description": "Board owner only"},
        404: {"description": "Board not found"},
        409: {"description": "Board already has a team"},
    },
)
async def create_team(
    body: TeamCreate,
    user: CurrentUser,
    service: BoardTeamService = Depends(get_board_team_service),
) -> TeamDetailResponse:
    """Create the team of a board with the requester as first member."""
    team = await service.create(user, body.board_id)
    return TeamDetailResponse(data=_build_team_response(team))


@router.get(
    "/board/{board_id}",
    response_model=TeamDetailResponse,
    summary="Get the team of a board",
    responses={
        200: {"description": "Team details"},
        403: {"description": "Not on the team"},
        404: {"description": "Team not found"},
    },
)
async def get_board_team(
    board_id: UUID,
    user: CurrentUser,
    service: BoardTeamService = Depends(get_board_team_service),
) -> TeamDetailResponse:
    """Get a board's team. Visible to team members."""
    team = await service.get_for_board(board_id, user)
    return TeamDetailResponse(data=_build_team_response(team))


@router.post(
    "/{team_id}/add",
    response_model=TeamDetailResponse,
    summary="Add a team member",
    responses={
        200: {"description": "Member added"},
        400: {"description": "Already in the team"},
        403: {"description": "Team creator only"},
        404: {"description": "Team or user not found"},
    },
)
async def add_team_member(
    team_id: UUID,
    body: TeamAddMemberRequest,
    user: CurrentUser,
    service: BoardTeamService = Depends(get_board_team_service),
) -> TeamDetailResponse:
    """Add a user to a board team."""
    team = await service.add_member(team_id, user, body.user_id)
    return TeamDetailResponse(data=_build_team_response(team))


@router.delete(
    "/{team_id}/remove/{member_user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a team member",
    responses={
        204: {"description": "Member removed"},
        403: {"description": "Team creator only"},
        404: {"description": "Team not found"},
    },
)
async def remove_team_member(
    team_id: UUID,
    member_user_id: UUID,
    user: CurrentUser,
    service: BoardTeamService = Depends(get_board_team_service),
) -> None:
    """Remove a user from a board team."""
    await service.remove_member(team_id, user, member_user_id)
    return None


def _build_team_response(team: BoardTeam) -> TeamResponse:
    """Convert domain entity to response schema."""
    return TeamResponse(
        id=team.id,
        board_id=team.board_id,
        created_by=team.created_by,
        members=list(team.member_ids),
        created_at=team.created_at,
    )
