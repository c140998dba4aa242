"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader

from api.dependencies.services import get_auth_provider, get_auth_service
from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from domain.entities.user import User
from domain.services.auth_service import AuthService
from infrastructure.auth.jwt_provider import JWTAuthProvider

# Security scheme for OpenAPI docs. The header name is configurable, so a
# plain API key header is used instead of HTTPBearer.
token_header = APIKeyHeader(name=settings.auth_token_header, auto_error=False)

_BEARER_PREFIX = "bearer "


def extract_token(raw: str | None) -> str | None:
    """Strip an optional ``Bearer`` prefix from a header value."""
    if not raw:
        return None
    raw = raw.strip()
    if raw.lower().startswith(_BEARER_PREFIX):
        raw = raw[len(_BEARER_PREFIX) :].strip()
    return raw or None


async def get_current_user(
    header_value: Annotated[str | None, Depends(token_header)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency to get the current authenticated user.

    The stored user is loaded on every request so handlers see the current
    role, not the one baked into the token.

    Raises:
        AuthenticationError: If no token provided, the token is invalid, or
            its subject no longer exists
    """
    token = extract_token(header_value)
    if not token:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    token_user = await auth_provider.validate_token(token)
    if not token_user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    user = await auth_service.get_user(token_user.id)
    if not user:
        raise AuthenticationError(
            message="User not found",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[User, Depends(get_current_user)]
