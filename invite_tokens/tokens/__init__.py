"""
Invitation token service.

Generates, hashes and expires invitation tokens, and masks email addresses.
"""

from .service import (
    DEFAULT_HOURS_VALID,
    TOKEN_BYTES,
    RandomBytesProvider,
    generate_invitation_token,
    get_invitation_expiry,
    hash_invitation_token,
    is_invitation_token,
    mask_email,
    tokens_match,
)

__all__ = [
    "DEFAULT_HOURS_VALID",
    "TOKEN_BYTES",
    "RandomBytesProvider",
    "generate_invitation_token",
    "get_invitation_expiry",
    "hash_invitation_token",
    "is_invitation_token",
    "mask_email",
    "tokens_match",
]
