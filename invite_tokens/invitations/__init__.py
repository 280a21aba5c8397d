"""
Invitation workflow module.

Issues, verifies and transitions invitation records.
"""

from .invites import InvitationManager, normalize_email
from .models import (
    CreateInvitationRequest,
    InvitationRecord,
    InvitationStatus,
    InvitationVerificationResult,
    IssuedInvitation,
    VerificationFailure,
)

__all__ = [
    "InvitationManager",
    "normalize_email",
    "CreateInvitationRequest",
    "InvitationRecord",
    "InvitationStatus",
    "InvitationVerificationResult",
    "IssuedInvitation",
    "VerificationFailure",
]
