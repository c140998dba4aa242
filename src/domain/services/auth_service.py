"""Registration, login and token resolution."""

import logging
from collections.abc import Callable
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from core.exceptions import AuthorizationError, InvalidCredentialsError, UserAlreadyExistsError
from domain.entities.invitation import InvitationStatus, normalize_email
from domain.entities.user import User, UserRole
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import IAuthProvider, IPasswordHasher

logger = logging.getLogger(__name__)


class AuthService:
    """Service layer for identity and session business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        auth_provider: IAuthProvider,
        password_hasher: IPasswordHasher,
        allow_admin_self_registration: bool = False,
    ) -> None:
        self._uow_factory = uow_factory
        self._auth = auth_provider
        self._hasher = password_hasher
        self._allow_admin = allow_admin_self_registration

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole | None = None,
    ) -> tuple[User, str]:
        """Create a user and issue a token.

        Every invitation addressed to the email that has no linked member yet
        is linked to the new user, whatever its status.

        Returns:
            Tuple of (User, token).

        Raises:
            AuthorizationError: If the admin role is requested but self
                registration of admins is disabled.
            UserAlreadyExistsError: If the email is taken.
        """
        if role == UserRole.ADMIN and not self._allow_admin:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        normalized = normalize_email(email)
        async with self._uow_factory() as uow:
            if await uow.users.get_by_email(normalized):
                raise UserAlreadyExistsError(normalized)

            user = User(
                name=name.strip(),
                email=normalized,
                password_hash=self._hasher.hash(password),
                role=role or UserRole.USER,
            )
            try:
                created = await uow.users.create(user)
            except IntegrityError as exc:
                await uow.rollback()
                raise UserAlreadyExistsError(normalized) from exc

            linked = await uow.invitations.link_member_by_email(normalized, created.id)
            await uow.commit()

        if linked:
            logger.info("Linked %d invitation(s) to registered user %s", linked, created.id)
        return created, self._auth.create_token(created)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """Verify credentials and issue a token.

        Accepted invitations for the email that have no linked member yet are
        linked to the user.

        Raises:
            InvalidCredentialsError: On unknown email or wrong password.
        """
        normalized = normalize_email(email)
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(normalized)
            if not user or not self._hasher.verify(password, user.password_hash):
                raise InvalidCredentialsError()

            linked = await uow.invitations.link_member_by_email(
                normalized, user.id, statuses=(InvitationStatus.ACCEPTED,)
            )
            if linked:
                await uow.commit()
                logger.info("Linked %d accepted invitation(s) to user %s", linked, user.id)

        return user, self._auth.create_token(user)

    async def get_user(self, user_id: UUID) -> User | None:
        """Resolve a token subject to the stored user."""
        async with self._uow_factory() as uow:
            return await uow.users.get(user_id)  # type: ignore[no-any-return]
