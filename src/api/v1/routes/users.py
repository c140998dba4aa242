"""User and session API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_auth_service, get_user_service
from api.v1.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TeamMemberListResponse,
    TeamMemberResponse,
    UserDetailResponse,
    UserResponse,
    UserUpdate,
)
from core.config import settings
from domain.entities.invitation import TeamMember
from domain.entities.user import User, UserRole
from domain.services.auth_service import AuthService
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User registered, token issued"},
        400: {"description": "Email already registered"},
        403: {"description": "Admin self-registration disabled"},
    },
)
async def register(
    body: RegisterRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account. Pending invitations for the email are linked to it."""
    user, token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
        role=UserRole(body.role) if body.role else None,
    )
    response.headers[settings.auth_token_header] = token
    return AuthResponse(token=token, user=build_user_response(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    responses={
        200: {"description": "Credentials valid, token issued"},
        400: {"description": "Invalid credentials"},
    },
)
async def login(
    body: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for a token."""
    user, token = await service.login(body.email, body.password)
    response.headers[settings.auth_token_header] = token
    return AuthResponse(token=token, user=build_user_response(user))


@router.get(
    "/me",
    response_model=UserDetailResponse,
    summary="Get current user",
    responses={401: {"description": "Missing or invalid token"}},
)
async def get_me(user: CurrentUser) -> UserDetailResponse:
    """Return the user the bearer token belongs to."""
    return UserDetailResponse(data=build_user_response(user))


@router.get(
    "",
    response_model=TeamMemberListResponse,
    summary="List my team",
    responses={200: {"description": "Invitees linked to the requester"}},
)
async def list_team(
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> TeamMemberListResponse:
    """Users the requester invited who are linked to an account."""
    members = await service.get_roster(user.id)
    data = [build_team_member_response(m) for m in members]
    return TeamMemberListResponse(data=data, meta={"total": len(data)})


@router.get(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="Get a user",
    responses={404: {"description": "User not found"}},
)
async def get_user(
    user_id: UUID,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    """Get any user by ID."""
    found = await service.get_by_id(user_id)
    return UserDetailResponse(data=build_user_response(found))


@router.put(
    "/{user_id}",
    response_model=UserDetailResponse,
    summary="Update a user",
    responses={
        200: {"description": "User updated"},
        400: {"description": "Email already registered"},
        403: {"description": "Administrators only"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    """Update a user's name, email or role. Requires the admin role."""
    updated = await service.update(
        actor=user,
        user_id=user_id,
        name=body.name,
        email=body.email,
        role=UserRole(body.role) if body.role else None,
    )
    return UserDetailResponse(data=build_user_response(updated))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User deleted"},
        403: {"description": "Administrators and workspace creators only"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: UUID,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> None:
    """Delete a user together with everything they created."""
    await service.delete(user, user_id)
    return None


def build_user_response(user: User) -> UserResponse:
    """Convert domain entity to response schema."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def build_team_member_response(member: TeamMember) -> TeamMemberResponse:
    """Convert a roster entry to response schema."""
    return TeamMemberResponse(
        id=member.user_id,
        name=member.name,
        email=member.email,
        role=member.role,
        status=member.status.value,
        invited_at=member.invited_at,
        accepted_at=member.accepted_at,
    )
