"""Pydantic schemas for the team invitation API."""

from pydantic import BaseModel, ConfigDict, Field


class SendInvitationRequest(BaseModel):
    """Schema for inviting an email address to the requester's team."""

    email: str = Field("", max_length=255)


class SendInvitationResponse(BaseModel):
    """Schema for the invitation send/resend response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "msg": "Invitation sent successfully. User must accept via email to join the team.",
                "email_sent": True,
                "user_exists": False,
            }
        }
    )

    msg: str
    email_sent: bool
    user_exists: bool


class AcceptInvitationResponse(BaseModel):
    """Schema for accepting an invitation response."""

    success: bool = True
    message: str
    user_exists: bool
    email: str
