"""Team invitation repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.invitation import InvitationStatus, TeamInvitation, TeamMember


class IInvitationRepository(Protocol):
    """Repository interface for TeamInvitation entities."""

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation.

        Raises the driver's integrity error when the token or the
        (inviter, email) pair is already taken.
        """
        ...

    async def get_for_inviter_email(
        self, inviter_id: UUID, email: str
    ) -> TeamInvitation | None:
        """Get the invitation an inviter sent to an email, if any."""
        ...

    async def get_by_token_hash(
        self, token_hash: str, status: InvitationStatus | None = None
    ) -> TeamInvitation | None:
        """Get an invitation by hashed token, optionally filtered by status."""
        ...

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Persist status, token, member link and timestamps."""
        ...

    async def link_member_by_email(
        self,
        email: str,
        member_id: UUID,
        statuses: tuple[InvitationStatus, ...] | None = None,
    ) -> int:
        """Set member_id on unlinked invitations for an email.

        Only rows whose member_id is null are touched. ``statuses`` restricts
        the rows further. Returns the number of rows updated.
        """
        ...

    async def get_team_members(
        self,
        inviter_id: UUID,
        statuses: tuple[InvitationStatus, ...],
    ) -> list[TeamMember]:
        """Get linked invitees of an inviter whose invitation is in ``statuses``."""
        ...
