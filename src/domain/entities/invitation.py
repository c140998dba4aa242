"""Team invitation domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from uuid import UUID, uuid4


class InvitationStatus(StrEnum):
    """Status of a team invitation."""

    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"


# Statuses listed on an inviter's team roster
ACTIVE_STATUSES = (InvitationStatus.INVITED, InvitationStatus.ACCEPTED)

# Default invitation expiry: 7 days
INVITATION_EXPIRY_DAYS = 7


def normalize_email(email: str) -> str:
    """Lowercase and trim an email address for storage and lookups."""
    return email.lower().strip()


@dataclass
class TeamInvitation:
    """Ledger entry recording that ``inviter_id`` invited ``invited_email``.

    ``member_id`` is filled once the invitee is known as a registered user,
    either when the invitation is created, accepted, or when the invitee
    registers or logs in.
    """

    inviter_id: UUID
    invited_email: str
    token_hash: str
    id: UUID = field(default_factory=uuid4)
    member_id: UUID | None = None
    status: InvitationStatus = InvitationStatus.INVITED
    invited_at: datetime = field(default_factory=datetime.utcnow)
    accepted_at: datetime | None = None
    token_expires_at: datetime = field(
        default_factory=lambda: datetime.utcnow() + timedelta(days=INVITATION_EXPIRY_DAYS)
    )
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_expired(self) -> bool:
        """Check if the invitation token has expired."""
        return datetime.utcnow() > self.token_expires_at

    @property
    def is_pending(self) -> bool:
        """Check if the invitation is still waiting to be accepted."""
        return self.status == InvitationStatus.INVITED

    def accept(self, member_id: UUID | None = None) -> None:
        """Mark the invitation as accepted, linking the member if still unset."""
        now = datetime.utcnow()
        self.status = InvitationStatus.ACCEPTED
        self.accepted_at = now
        self.updated_at = now
        if self.member_id is None and member_id is not None:
            self.member_id = member_id

    def rotate_token(self, token_hash: str, expiry_days: int = INVITATION_EXPIRY_DAYS) -> None:
        """Replace the token and restart the expiry window (used on resend)."""
        now = datetime.utcnow()
        self.token_hash = token_hash
        self.token_expires_at = now + timedelta(days=expiry_days)
        self.invited_at = now
        self.updated_at = now


@dataclass
class TeamMember:
    """A linked invitee as seen from the inviter's team roster."""

    user_id: UUID
    name: str
    email: str
    role: str
    status: InvitationStatus
    invited_at: datetime
    accepted_at: datetime | None = None
