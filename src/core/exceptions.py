"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    NOT_A_MEMBER = "NOT_A_MEMBER"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    WORKSPACE_NOT_FOUND = "WORKSPACE_NOT_FOUND"
    BOARD_NOT_FOUND = "BOARD_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    INVALID_MEMBERS = "INVALID_MEMBERS"
    CROSS_WORKSPACE_MOVE = "CROSS_WORKSPACE_MOVE"
    ALREADY_A_BOARD_MEMBER = "ALREADY_A_BOARD_MEMBER"
    ALREADY_A_TEAM_MEMBER = "ALREADY_A_TEAM_MEMBER"
    CANNOT_REMOVE_CREATOR = "CANNOT_REMOVE_CREATOR"

    # Invitation errors (400)
    INVITATION_EXPIRED = "INVITATION_EXPIRED"
    ALREADY_IN_TEAM = "ALREADY_IN_TEAM"
    DUPLICATE_INVITATION = "DUPLICATE_INVITATION"

    # Conflict errors (409)
    ALREADY_A_MEMBER = "ALREADY_A_MEMBER"
    TEAM_ALREADY_EXISTS = "TEAM_ALREADY_EXISTS"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Request data failed a business validation rule."""

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
            details=details,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class InvalidCredentialsError(AppException):
    """Email/password pair did not match a user."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
            status_code=400,
        )


class UserAlreadyExistsError(AppException):
    """A user with this email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_ALREADY_EXISTS,
            message="User already exists",
            status_code=400,
            details={"email": email},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class WorkspaceNotFoundError(AppException):
    """Workspace not found."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.WORKSPACE_NOT_FOUND,
            message=f"Workspace not found: {workspace_id}",
            status_code=404,
            details={"workspace_id": workspace_id},
        )


class BoardNotFoundError(AppException):
    """Board not found."""

    def __init__(self, board_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.BOARD_NOT_FOUND,
            message=f"Board not found: {board_id}",
            status_code=404,
            details={"board_id": board_id},
        )


class TaskNotFoundError(AppException):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            status_code=404,
            details={"task_id": task_id},
        )


class TeamNotFoundError(AppException):
    """Board team not found."""

    def __init__(self, identifier: str) -> None:
        super().__init__(
            error_code=ErrorCode.TEAM_NOT_FOUND,
            message="Team not found",
            status_code=404,
            details={"id": identifier},
        )


class NotAMemberError(AppException):
    """User is not a member of the workspace."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_MEMBER,
            message="You are not a member of this workspace",
            status_code=403,
            details={"workspace_id": workspace_id},
        )


class AlreadyAMemberError(AppException):
    """User is already a member of the workspace."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_MEMBER,
            message="User is already a member of this workspace",
            status_code=409,
            details={"user_id": user_id},
        )


class CannotRemoveCreatorError(AppException):
    """The workspace creator cannot be removed from its member list."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.CANNOT_REMOVE_CREATOR,
            message="The workspace creator cannot be removed",
            status_code=400,
        )


class InvalidMembersError(AppException):
    """Some referenced users are not members of the workspace."""

    def __init__(self, message: str, user_ids: list[str]) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_MEMBERS,
            message=message,
            status_code=400,
            details={"user_ids": user_ids},
        )


class CrossWorkspaceMoveError(AppException):
    """A task cannot move to a board in another workspace."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.CROSS_WORKSPACE_MOVE,
            message="Cannot move task to a board in a different workspace",
            status_code=400,
        )


class AlreadyABoardMemberError(AppException):
    """User is already a member of the board."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_BOARD_MEMBER,
            message="User is already a member of this board",
            status_code=400,
            details={"user_id": user_id},
        )


class AlreadyATeamMemberError(AppException):
    """User is already on the board team."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_TEAM_MEMBER,
            message="User already in team",
            status_code=400,
            details={"user_id": user_id},
        )


class TeamAlreadyExistsError(AppException):
    """The board already has a team."""

    def __init__(self, board_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TEAM_ALREADY_EXISTS,
            message="This board already has a team",
            status_code=409,
            details={"board_id": board_id},
        )


class InvitationNotFoundError(AppException):
    """Invitation not found or no longer pending."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_NOT_FOUND,
            message="Invitation not found or already accepted/declined",
            status_code=404,
        )


class InvitationExpiredError(AppException):
    """Invitation token has expired."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_EXPIRED,
            message="Invitation link has expired. Please request a new invitation.",
            status_code=400,
        )


class AlreadyInTeamError(AppException):
    """The invitee already accepted an invitation from this inviter."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_IN_TEAM,
            message="User is already in your team",
            status_code=400,
            details={"email": email},
        )


class DuplicateInvitationError(AppException):
    """An invitation record for this inviter and email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_INVITATION,
            message="Invitation already sent to this email",
            status_code=400,
            details={"email": email},
        )
