"""Team invitation API routes."""

from fastapi import APIRouter, Depends

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_invitation_service
from api.v1.schemas.invitation import (
    AcceptInvitationResponse,
    SendInvitationRequest,
    SendInvitationResponse,
)
from domain.services.invitation_service import InvitationService

# Mounted under /users next to the user routes; included first so the fixed
# paths win over /users/{user_id}.
router = APIRouter(prefix="/users", tags=["invitations"])


@router.post(
    "/invite",
    response_model=SendInvitationResponse,
    summary="Invite someone to my team",
    responses={
        200: {"description": "Invitation sent or resent"},
        400: {"description": "Invalid email, already in team, or duplicate invitation"},
    },
)
async def send_invitation(
    body: SendInvitationRequest,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> SendInvitationResponse:
    """Email an invitation link. A pending invitation is resent with a new token."""
    result = await service.send_invite(user, body.email)
    return SendInvitationResponse(
        msg=result.message,
        email_sent=result.email_sent,
        user_exists=result.user_exists,
    )


@router.get(
    "/accept-invitation",
    response_model=AcceptInvitationResponse,
    summary="Accept a team invitation",
    responses={
        200: {"description": "Invitation accepted"},
        400: {"description": "Missing or expired token"},
        404: {"description": "Invitation not found or already used"},
    },
)
async def accept_invitation(
    token: str | None = None,
    service: InvitationService = Depends(get_invitation_service),
) -> AcceptInvitationResponse:
    """Redeem the token from an invitation email. No login required."""
    result = await service.accept_invitation(token)
    return AcceptInvitationResponse(
        success=True,
        message=result.message,
        user_exists=result.user_exists,
        email=result.email,
    )
