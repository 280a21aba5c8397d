"""
Invitation token primitives.

Pure, stateless helpers used by the issuing side (generate, hash, expiry)
and by the accepting side (hash, compare, mask). Nothing here touches
storage; the raw token only ever leaves this module inside a link.
"""

import hashlib
import hmac
import math
import numbers
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from ..errors import EntropySourceError, InvalidArgumentError

# Bytes of entropy per token (hex-encoded to 64 characters)
TOKEN_BYTES = 32

DEFAULT_HOURS_VALID = 48

MASK = "***"

_TOKEN_RE = re.compile(r"[0-9a-f]{64}")

RandomBytesProvider = Callable[[int], bytes]


def generate_invitation_token(random_bytes: Optional[RandomBytesProvider] = None) -> str:
    """
    Generate a new invitation token.

    Args:
        random_bytes: Source of random bytes, called with the number of bytes
            wanted. Defaults to ``secrets.token_bytes``. Tests inject a
            fixed source here.

    Returns:
        64 lowercase hex characters

    Raises:
        EntropySourceError: If the random source is unavailable or returns
            the wrong number of bytes

    Example:
        ```python
        token = generate_invitation_token()
        token_hash = hash_invitation_token(token)
        ```
    """
    provider = random_bytes or secrets.token_bytes

    try:
        raw = provider(TOKEN_BYTES)
    except (NotImplementedError, OSError) as e:
        raise EntropySourceError("Secure random source is unavailable") from e

    if not isinstance(raw, (bytes, bytearray)) or len(raw) != TOKEN_BYTES:
        raise EntropySourceError(
            f"Random source must return exactly {TOKEN_BYTES} bytes"
        )

    return bytes(raw).hex()


def hash_invitation_token(token: str) -> str:
    """
    Hash an invitation token for storage.

    Uses SHA-256 over the UTF-8 bytes of the token. Any string is accepted
    so that tokens presented by untrusted callers can be hashed and looked up.

    Raises:
        InvalidArgumentError: If token is None or not a string
    """
    if token is None:
        raise InvalidArgumentError("token is required")
    if not isinstance(token, str):
        raise InvalidArgumentError(f"token must be a string, got {type(token).__name__}")

    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def get_invitation_expiry(
    hours_valid: float = DEFAULT_HOURS_VALID,
    now: Optional[datetime] = None,
) -> datetime:
    """
    Compute when an invitation issued now stops being redeemable.

    Args:
        hours_valid: Hours until expiry, must be positive
        now: Reference time (defaults to the current UTC time; naive values are UTC)

    Returns:
        Timezone-aware expiry timestamp

    Raises:
        InvalidArgumentError: If hours_valid is not a positive finite number,
            or is too small or too large to move the expiry
    """
    if isinstance(hours_valid, bool) or not isinstance(hours_valid, numbers.Real):
        raise InvalidArgumentError("hours_valid must be a number")
    try:
        hours = float(hours_valid)
    except OverflowError as e:
        raise InvalidArgumentError("hours_valid is too large") from e
    if not math.isfinite(hours):
        raise InvalidArgumentError("hours_valid must be finite")
    if hours <= 0:
        raise InvalidArgumentError("hours_valid must be greater than zero")

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        # Naive reference times are UTC
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    try:
        expires_at = now + timedelta(hours=hours)
    except OverflowError as e:
        raise InvalidArgumentError("hours_valid is too large") from e

    # Sub-microsecond validity rounds away to nothing
    if expires_at <= now:
        raise InvalidArgumentError("hours_valid is too small")
    return expires_at


def mask_email(email: Any) -> str:
    """
    Partially redact an email address for display.

    ``alice@example.com`` becomes ``a***e@example.com``; local parts of two
    characters or fewer keep only the first one. The domain is always shown.
    Input without a domain is returned unchanged. Never raises.

    Not idempotent: only pass real addresses, never already-masked output.
    """
    if email is None:
        return ""
    if not isinstance(email, str):
        email = str(email)

    local, _, domain = email.partition("@")
    if not domain:
        return email

    if len(local) <= 2:
        return f"{local[:1]}{MASK}@{domain}"

    return f"{local[0]}{MASK}{local[-1]}@{domain}"


def is_invitation_token(value: Any) -> bool:
    """Check that value looks like a token produced by generate_invitation_token."""
    return isinstance(value, str) and _TOKEN_RE.fullmatch(value) is not None


def tokens_match(token: str, token_hash: str) -> bool:
    """
    Check a presented token against a stored hash.

    The comparison runs in constant time.
    """
    if not isinstance(token_hash, str):
        return False
    return hmac.compare_digest(hash_invitation_token(token), token_hash.lower())
