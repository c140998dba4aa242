"""SQLAlchemy implementation of the team invitation repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.invitation import InvitationStatus, TeamInvitation, TeamMember
from infrastructure.database.models import TeamInvitationModel, UserModel


class SQLAlchemyInvitationRepository:
    """SQLAlchemy implementation of IInvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation. Uniqueness violations propagate."""
        model = self._to_model(invitation)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_for_inviter_email(
        self, inviter_id: UUID, email: str
    ) -> TeamInvitation | None:
        """Get the invitation an inviter sent to an email, if any."""
        stmt = select(TeamInvitationModel).where(
            TeamInvitationModel.inviter_id == inviter_id,
            TeamInvitationModel.invited_email == email,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_token_hash(
        self, token_hash: str, status: InvitationStatus | None = None
    ) -> TeamInvitation | None:
        """Get an invitation by hashed token, optionally filtered by status."""
        stmt = select(TeamInvitationModel).where(
            TeamInvitationModel.invitation_token_hash == token_hash
        )
        if status is not None:
            stmt = stmt.where(TeamInvitationModel.status == status.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Persist status, token, member link and timestamps."""
        stmt = select(TeamInvitationModel).where(TeamInvitationModel.id == invitation.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Invitation {invitation.id} not found")

        model.status = invitation.status.value
        model.member_id = invitation.member_id
        model.invitation_token_hash = invitation.token_hash
        model.token_expires_at = invitation.token_expires_at
        model.invited_at = invitation.invited_at
        model.accepted_at = invitation.accepted_at
        model.updated_at = invitation.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def link_member_by_email(
        self,
        email: str,
        member_id: UUID,
        statuses: tuple[InvitationStatus, ...] | None = None,
    ) -> int:
        """Set member_id on unlinked invitations for an email."""
        stmt = (
            update(TeamInvitationModel)
            .where(
                TeamInvitationModel.invited_email == email,
                TeamInvitationModel.member_id.is_(None),
            )
            .values(member_id=member_id, updated_at=datetime.utcnow())
        )
        if statuses is not None:
            stmt = stmt.where(TeamInvitationModel.status.in_([s.value for s in statuses]))
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount  # type: ignore[attr-defined, no-any-return]

    async def get_team_members(
        self,
        inviter_id: UUID,
        statuses: tuple[InvitationStatus, ...],
    ) -> list[TeamMember]:
        """Get linked invitees of an inviter whose invitation is in ``statuses``."""
        stmt = (
            select(TeamInvitationModel, UserModel)
            .join(UserModel, UserModel.id == TeamInvitationModel.member_id)
            .where(
                TeamInvitationModel.inviter_id == inviter_id,
                TeamInvitationModel.status.in_([s.value for s in statuses]),
            )
            .order_by(TeamInvitationModel.invited_at)
        )
        result = await self._session.execute(stmt)
        return [
            TeamMember(
                user_id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                status=InvitationStatus(invitation.status),
                invited_at=invitation.invited_at,
                accepted_at=invitation.accepted_at,
            )
            for invitation, user in result.all()
        ]

    def _to_entity(self, model: TeamInvitationModel) -> TeamInvitation:
        """Convert ORM model to domain entity."""
        return TeamInvitation(
            id=model.id,
            inviter_id=model.inviter_id,
            invited_email=model.invited_email,
            member_id=model.member_id,
            status=InvitationStatus(model.status),
            token_hash=model.invitation_token_hash,
            token_expires_at=model.token_expires_at,
            invited_at=model.invited_at,
            accepted_at=model.accepted_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: TeamInvitation) -> TeamInvitationModel:
        """Convert domain entity to ORM model."""
        return TeamInvitationModel(
            id=entity.id,
            inviter_id=entity.inviter_id,
            invited_email=entity.invited_email,
            member_id=entity.member_id,
            status=entity.status.value,
            invitation_token_hash=entity.token_hash,
            token_expires_at=entity.token_expires_at,
            invited_at=entity.invited_at,
            accepted_at=entity.accepted_at,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
