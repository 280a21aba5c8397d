"""
Exceptions raised by invite-tokens.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .invitations.models import VerificationFailure


class InviteTokenError(Exception):
    """Base class for all invite-tokens errors."""


class EntropySourceError(InviteTokenError, RuntimeError):
    """
    The secure random source could not produce bytes.

    Token generation never falls back to a non-cryptographic generator,
    so this is fatal to the caller.
    """


class InvalidArgumentError(InviteTokenError, ValueError):
    """A malformed or out-of-range argument was passed in."""


class InvitationError(InviteTokenError, ValueError):
    """
    An invitation state transition was refused.

    Attributes:
        failure: Why the presented token was rejected, when the refusal
            came from token verification
    """

    def __init__(
        self,
        message: str,
        failure: Optional["VerificationFailure"] = None,
    ) -> None:
        super().__init__(message)
        self.failure = failure
