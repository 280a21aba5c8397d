"""
invite-tokens - invitation token lifecycle for admin invitations.

Generate unguessable tokens, store only their hashes, expire them, and mask
email addresses shown on the accept page.

Example:
    ```python
    from invite_tokens import InvitationManager, mask_email

    invites = InvitationManager()

    # Issue: persist the record, email the link
    issued = invites.issue("new.admin@example.com")
    record = invites.to_record(issued)

    # Redeem: verify the token from the link against the stored record
    result = invites.verify(token_from_url, record)
    if result.valid:
        record = invites.accept(token_from_url, record)

    # Display
    mask_email("alice@example.com")  # "a***e@example.com"
    ```
"""

from .config import InviteConfig, load_config
from .errors import (
    EntropySourceError,
    InvalidArgumentError,
    InvitationError,
    InviteTokenError,
)
from .invitations import (
    InvitationManager,
    InvitationRecord,
    InvitationStatus,
    InvitationVerificationResult,
    IssuedInvitation,
    VerificationFailure,
    normalize_email,
)
from .tokens import (
    generate_invitation_token,
    get_invitation_expiry,
    hash_invitation_token,
    is_invitation_token,
    mask_email,
    tokens_match,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "InviteConfig",
    "load_config",
    # Errors
    "InviteTokenError",
    "EntropySourceError",
    "InvalidArgumentError",
    "InvitationError",
    # Token service
    "generate_invitation_token",
    "hash_invitation_token",
    "get_invitation_expiry",
    "mask_email",
    "is_invitation_token",
    "tokens_match",
    # Invitations
    "InvitationManager",
    "InvitationRecord",
    "InvitationStatus",
    "InvitationVerificationResult",
    "IssuedInvitation",
    "VerificationFailure",
    "normalize_email",
]
