"""Workspace API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_workspace_service
from api.v1.schemas.workspace import (
    AddMemberRequest,
    UpdateMemberRoleRequest,
    WorkspaceCreate,
    WorkspaceDetailResponse,
    WorkspaceListResponse,
    WorkspaceMemberListResponse,
    WorkspaceMemberResponse,
    WorkspaceResponse,
    WorkspaceUpdate,
)
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceMember, WorkspaceRole
from domain.services.workspace_service import WorkspaceService

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get(
    "",
    response_model=WorkspaceListResponse,
    summary="List user's workspaces",
    responses={200: {"description": "List of workspaces the user belongs to"}},
)
async def list_workspaces(
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceListResponse:
    """Get all workspaces the authenticated user is a member of."""
    workspaces = await service.get_all_for_user(user)
    data = [_build_workspace_response(ws) for ws in workspaces]
    return WorkspaceListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=WorkspaceDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace",
    responses={201: {"description": "Workspace created successfully"}},
)
async def create_workspace(
    body: WorkspaceCreate,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Create a new workspace. The creator is automatically added as admin."""
    workspace = await service.create(
        user=user,
        name=body.name,
        description=body.description,
    )
    return WorkspaceDetailResponse(data=_build_workspace_response(workspace))


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceDetailResponse,
    summary="Get workspace details",
    responses={
        200: {"description": "Workspace details"},
        403: {"description": "Not a member"},
        404: {"description": "Workspace not found"},
    },
)
async def get_workspace(
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Get a specific workspace by ID. Requires membership."""
    workspace = await service.get_by_id(workspace_id, user)
    return WorkspaceDetailResponse(data=_build_workspace_response(workspace))


@router.put(
    "/{workspace_id}",
    response_model=WorkspaceDetailResponse,
    summary="Update workspace",
    responses={
        200: {"description": "Workspace updated"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Workspace not found"},
    },
)
async def update_workspace(
    workspace_id: UUID,
    body: WorkspaceUpdate,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Update a workspace. Requires workspace admin."""
    workspace = await service.update(
        workspace_id=workspace_id,
        user=user,
        name=body.name,
        description=body.description,
    )
    return WorkspaceDetailResponse(data=_build_workspace_response(workspace))


@router.delete(
    "/{workspace_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete workspace",
    responses={
        204: {"description": "Workspace deleted"},
        403: {"description": "Insufficient permissions (creator only)"},
        404: {"description": "Workspace not found"},
    },
)
async def delete_workspace(
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> None:
    """Delete a workspace with its boards and tasks. Requires the creator."""
    await service.delete(workspace_id, user)
    return None


# --- Member Management ---


@router.get(
    "/{workspace_id}/members",
    response_model=WorkspaceMemberListResponse,
    summary="List workspace members",
    responses={
        200: {"description": "List of workspace members"},
        403: {"description": "Not a member"},
        404: {"description": "Workspace not found"},
    },
)
async def list_members(
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceMemberListResponse:
    """Get all members of a workspace. Requires membership."""
    members = await service.get_members(workspace_id, user)
    data = [_build_member_response(m, u) for m, u in members]
    return WorkspaceMemberListResponse(data=data, meta={"total": len(data)})


@router.post(
    "/{workspace_id}/members",
    response_model=WorkspaceMemberResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add workspace member",
    responses={
        201: {"description": "Member added"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Workspace or user not found"},
        409: {"description": "Already a member"},
    },
)
async def add_member(
    workspace_id: UUID,
    body: AddMemberRequest,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceMemberResponse:
    """Add a user to a workspace. Requires workspace admin."""
    member = await service.add_member(
        workspace_id=workspace_id,
        user=user,
        target_user_id=body.user_id,
        role=WorkspaceRole.from_label(body.role),
    )
    return _build_member_response(member)


@router.put(
    "/{workspace_id}/members/{member_user_id}",
    response_model=WorkspaceMemberResponse,
    summary="Update member role",
    responses={
        200: {"description": "Role updated"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Workspace or member not found"},
    },
)
async def update_member_role(
    workspace_id: UUID,
    member_user_id: UUID,
    body: UpdateMemberRoleRequest,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceMemberResponse:
    """Update a member's role. Requires workspace admin."""
    member = await service.update_member_role(
        workspace_id=workspace_id,
        user=user,
        target_user_id=member_user_id,
        role=WorkspaceRole.from_label(body.role),
    )
    return _build_member_response(member)


@router.delete(
    "/{workspace_id}/members/{member_user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove workspace member",
    responses={
        204: {"description": "Member removed"},
        400: {"description": "Cannot remove the creator"},
        403: {"description": "Insufficient permissions"},
    },
)
async def remove_member(
    workspace_id: UUID,
    member_user_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> None:
    """Remove a member from a workspace or leave the workspace."""
    await service.remove_member(
        workspace_id=workspace_id,
        user=user,
        target_user_id=member_user_id,
    )
    return None


def _build_workspace_response(workspace: Workspace) -> WorkspaceResponse:
    """Convert domain entity to response schema."""
    return WorkspaceResponse(
        id=workspace.id,
        name=workspace.name,
        description=workspace.description,
        created_by=workspace.created_by,
        created_at=workspace.created_at,
        updated_at=workspace.updated_at,
    )


def _build_member_response(
    member: WorkspaceMember, user: User | None = None
) -> WorkspaceMemberResponse:
    """Convert domain entity to response schema."""
    return WorkspaceMemberResponse(
        user_id=member.user_id,
        name=user.name if user else None,
        email=user.email if user else "",
        role=member.role.label,
        joined_at=member.joined_at,
    )
