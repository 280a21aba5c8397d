"""
Invitation models.

Pydantic models for issued invitations and the records callers persist.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from ..tokens import DEFAULT_HOURS_VALID, mask_email

TOKEN_HASH_PATTERN = r"^[0-9a-f]{64}$"


class InvitationStatus(str, Enum):
    """Lifecycle states of an invitation record."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"


class VerificationFailure(str, Enum):
    """Why a presented token was rejected."""

    MALFORMED = "malformed"
    MISMATCH = "mismatch"
    ALREADY_ACCEPTED = "already_accepted"
    REVOKED = "revoked"
    EXPIRED = "expired"


class IssuedInvitation(BaseModel):
    """
    A freshly issued invitation.

    This is the only place the raw token exists. Embed ``invite_url`` in the
    invitation email and persist ``token_hash``; never store ``token``.
    """

    email: EmailStr
    token: str = Field(..., min_length=64, max_length=64)
    token_hash: str = Field(..., pattern=TOKEN_HASH_PATTERN)
    expires_at: datetime
    invite_url: str
    issued_at: datetime

    @property
    def masked_email(self) -> str:
        return mask_email(self.email)


class InvitationRecord(BaseModel):
    """
    Invitation record - the storable view of an invitation.

    Holds the token hash, never the raw token. Persisting records is up to
    the caller; the manager only produces and transforms them.
    """

    id: Optional[UUID] = None
    email: EmailStr
    token_hash: str = Field(..., pattern=TOKEN_HASH_PATTERN)
    status: InvitationStatus = InvitationStatus.PENDING

    # Who sent the invite
    invited_by: Optional[UUID] = None
    invited_at: datetime

    expires_at: datetime

    # Tracking
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[UUID] = None
    last_sent_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "email": "newadmin@example.com",
                "token_hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                "status": "pending",
                "invited_by": "012e3456-e89b-12d3-a456-426614174000",
                "invited_at": "2024-01-01T00:00:00Z",
                "expires_at": "2024-01-03T00:00:00Z",
                "accepted_at": None,
                "accepted_by": None,
                "last_sent_at": "2024-01-01T00:00:00Z",
            }
        },
    }

    @property
    def masked_email(self) -> str:
        return mask_email(self.email)


class CreateInvitationRequest(BaseModel):
    """Request model for issuing a new invitation."""

    email: EmailStr = Field(..., description="Email address to invite")
    hours_valid: float = Field(
        default=DEFAULT_HOURS_VALID,
        gt=0,
        description="Hours until invitation expires",
    )


class InvitationVerificationResult(BaseModel):
    """Result of checking a presented token against a record."""

    valid: bool
    failure: Optional[VerificationFailure] = None
    error: Optional[str] = None
    record: Optional[InvitationRecord] = None
