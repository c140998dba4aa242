"""Team invitation workflow: send, resend, accept and list."""

import hashlib
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from urllib.parse import urlencode
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AlreadyInTeamError,
    DuplicateInvitationError,
    InvitationExpiredError,
    InvitationNotFoundError,
    ValidationError,
)
from domain.entities.invitation import (
    INVITATION_EXPIRY_DAYS,
    InvitationStatus,
    TeamInvitation,
    TeamMember,
    normalize_email,
)
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.email.sender import IEmailSender, deliver
from infrastructure.email.templates import team_invitation_email

logger = logging.getLogger(__name__)

INVITE_SENT_MESSAGE = "Invitation sent successfully. User must accept via email to join the team."
INVITE_ACCEPTED_MESSAGE = "Invitation accepted successfully"


@dataclass
class InviteResult:
    """Outcome of sending (or resending) a team invitation."""

    message: str
    email_sent: bool
    user_exists: bool


@dataclass
class AcceptResult:
    """Outcome of redeeming an invitation token."""

    message: str
    user_exists: bool
    email: str


class InvitationService:
    """Service layer for team invitation business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        email_sender: IEmailSender,
        frontend_url: str,
        expiry_days: int = INVITATION_EXPIRY_DAYS,
    ) -> None:
        self._uow_factory = uow_factory
        self._email = email_sender
        self._frontend_url = frontend_url.rstrip("/")
        self._expiry_days = expiry_days

    async def send_invite(self, inviter: User, email: str) -> InviteResult:
        """Invite an email address to the inviter's team.

        A pending invitation is resent with a fresh token and expiry. The
        email always carries both a login and a register link.

        Raises:
            ValidationError: If the email is malformed.
            AlreadyInTeamError: If the invitee already accepted.
            DuplicateInvitationError: If a record for the pair exists in a
                state that cannot be resent.
        """
        if not email or "@" not in email:
            raise ValidationError("Valid email is required")
        normalized = normalize_email(email)

        async with self._uow_factory() as uow:
            existing = await uow.invitations.get_for_inviter_email(inviter.id, normalized)
            if existing and existing.status == InvitationStatus.ACCEPTED:
                raise AlreadyInTeamError(normalized)
            if existing and not existing.is_pending:
                raise DuplicateInvitationError(normalized)

            invitee = await uow.users.get_by_email(normalized)
            raw_token = self._new_token()

            if existing:
                existing.rotate_token(self._hash_token(raw_token), self._expiry_days)
                if existing.member_id is None and invitee:
                    existing.member_id = invitee.id
                await uow.invitations.update(existing)
                await uow.commit()
                logger.info("Resent invitation %s to %s", existing.id, normalized)
            else:
                raw_token = await self._create(uow, inviter, normalized, invitee, raw_token)

        login_url, register_url = self._links(raw_token, normalized)
        message = team_invitation_email(
            to=normalized,
            inviter_name=inviter.name or "Admin",
            inviter_email=inviter.email,
            login_url=login_url,
            register_url=register_url,
            action="login" if invitee else "register",
        )
        email_sent = await deliver(self._email, message)
        return InviteResult(
            message=INVITE_SENT_MESSAGE,
            email_sent=email_sent,
            user_exists=invitee is not None,
        )

    async def accept_invitation(self, token: str | None) -> AcceptResult:
        """Redeem an invitation token. Public: no session required.

        Raises:
            ValidationError: If no token was given.
            InvitationNotFoundError: If the token is unknown or already used.
            InvitationExpiredError: If the token expired.
        """
        if not token:
            raise ValidationError("Invitation token is required")

        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_token_hash(
                self._hash_token(token), status=InvitationStatus.INVITED
            )
            if not invitation:
                raise InvitationNotFoundError()
            if invitation.is_expired:
                raise InvitationExpiredError()

            member = None
            if invitation.member_id is None:
                member = await uow.users.get_by_email(invitation.invited_email)
            invitation.accept(member.id if member else None)

            await uow.invitations.update(invitation)
            await uow.commit()

        logger.info("Invitation %s accepted", invitation.id)
        return AcceptResult(
            message=INVITE_ACCEPTED_MESSAGE,
            user_exists=invitation.member_id is not None,
            email=invitation.invited_email,
        )

    async def get_team_members(self, inviter_id: UUID) -> list[TeamMember]:
        """Invitees who accepted and are linked to a user. No admin override."""
        async with self._uow_factory() as uow:
            return await uow.invitations.get_team_members(
                inviter_id, (InvitationStatus.ACCEPTED,)
            )

    # --- Internal helpers ---

    async def _create(
        self,
        uow: IUnitOfWork,
        inviter: User,
        email: str,
        invitee: User | None,
        raw_token: str,
    ) -> str:
        """Insert a new invitation, regenerating the token once on collision."""
        for attempt in (1, 2):
            invitation = TeamInvitation(
                inviter_id=inviter.id,
                invited_email=email,
                token_hash=self._hash_token(raw_token),
                member_id=invitee.id if invitee else None,
                token_expires_at=datetime.utcnow() + timedelta(days=self._expiry_days),
            )
            try:
                created = await uow.invitations.create(invitation)
                await uow.commit()
            except IntegrityError as exc:
                await uow.rollback()
                if attempt == 1 and self._is_token_collision(exc):
                    logger.warning("Invitation token collision, retrying with a new token")
                    raw_token = self._new_token()
                    continue
                raise DuplicateInvitationError(email) from exc
            logger.info("Created invitation %s for %s", created.id, email)
            return raw_token
        raise DuplicateInvitationError(email)

    def _links(self, raw_token: str, email: str) -> tuple[str, str]:
        query = urlencode({"inviteToken": raw_token, "email": email})
        return (
            f"{self._frontend_url}/login?{query}",
            f"{self._frontend_url}/register?{query}",
        )

    @staticmethod
    def _is_token_collision(exc: IntegrityError) -> bool:
        orig = str(exc.orig).lower() if exc.orig else ""
        return "invitation_token" in orig

    @staticmethod
    def _new_token() -> str:
        """32 random bytes, hex encoded."""
        return secrets.token_hex(32)

    @staticmethod
    def _hash_token(token: str) -> str:
        """Hash a raw invitation token using SHA-256."""
        return hashlib.sha256(token.encode()).hexdigest()
