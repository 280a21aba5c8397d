"""
Invitation workflow helpers.

Issues invitations, verifies presented tokens against stored records and
applies the accept / revoke / resend transitions. Records are plain values:
storing them (and emailing the link) is left to the caller.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Tuple
from urllib.parse import quote
from uuid import UUID

from pydantic import ValidationError

from ..config import InviteConfig, load_config
from ..errors import InvalidArgumentError, InvitationError
from ..tokens import (
    RandomBytesProvider,
    generate_invitation_token,
    get_invitation_expiry,
    hash_invitation_token,
    is_invitation_token,
    mask_email,
    tokens_match,
)
from .models import (
    CreateInvitationRequest,
    InvitationRecord,
    InvitationStatus,
    InvitationVerificationResult,
    IssuedInvitation,
    VerificationFailure,
)

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps coming back from storage are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class InvitationManager:
    """
    Manages invitation issuance and redemption.

    The invitation flow:
    1. Issue an invitation: generate a token, hash it, compute the expiry
    2. Persist the record (hash + expiry) and email the link with the raw token
    3. The invitee opens the link; the presented token is verified
       against the stored record
    4. On success the record is transitioned to accepted

    Example:
        ```python
        invites = InvitationManager()

        issued = invites.issue("new.admin@example.com")
        record = invites.to_record(issued, invited_by=admin.id)
        save(record)                      # caller's storage
        send_email(issued.invite_url)     # caller's mailer

        # Later, on the accept page
        result = invites.verify(token_from_url, record)
        if result.valid:
            record = invites.accept(token_from_url, record, accepted_by=user.id)
        ```
    """

    def __init__(
        self,
        config: Optional[InviteConfig] = None,
        random_bytes: Optional[RandomBytesProvider] = None,
    ) -> None:
        """
        Initialize InvitationManager.

        Args:
            config: Configuration (loaded from the environment if omitted)
            random_bytes: Random byte source for token generation
                (defaults to the secure system source)
        """
        self.config = config or load_config()
        self._random_bytes = random_bytes

    def build_link(self, token: str) -> str:
        """Build the acceptance URL that carries the raw token."""
        return f"{self.config.app_base_url}{self.config.accept_path}?token={quote(token, safe='')}"

    def issue(
        self,
        email: str,
        hours_valid: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> IssuedInvitation:
        """
        Issue a new invitation.

        Args:
            email: Email address to invite (trimmed and lower-cased)
            hours_valid: Hours until expiry (defaults to config.default_hours_valid)
            now: Issue time (defaults to the current UTC time)

        Returns:
            IssuedInvitation holding the raw token and its link

        Raises:
            InvalidArgumentError: If the email or hours_valid is invalid
            EntropySourceError: If no secure random bytes are available

        Example:
            ```python
            issued = invites.issue("new.admin@example.com", hours_valid=72)
            print(issued.invite_url)
            ```
        """
        if hours_valid is None:
            hours_valid = self.config.default_hours_valid
        issued_at = _as_utc(now) if now is not None else _utcnow()

        expires_at = get_invitation_expiry(hours_valid, now=issued_at)

        try:
            request = CreateInvitationRequest(
                email=normalize_email(email),
                hours_valid=hours_valid,
            )
        except ValidationError as e:
            raise InvalidArgumentError(f"A valid email is required: {mask_email(email)}") from e

        token = generate_invitation_token(self._random_bytes)

        issued = IssuedInvitation(
            email=request.email,
            token=token,
            token_hash=hash_invitation_token(token),
            expires_at=expires_at,
            invite_url=self.build_link(token),
            issued_at=issued_at,
        )

        logger.info(
            "Issued invitation for %s (expires %s)",
            issued.masked_email,
            expires_at.isoformat(),
        )
        return issued

    def to_record(
        self,
        issued: IssuedInvitation,
        invited_by: Optional[UUID] = None,
        record_id: Optional[UUID] = None,
    ) -> InvitationRecord:
        """
        Build the pending record to persist for an issued invitation.

        The record carries the token hash only.
        """
        return InvitationRecord(
            id=record_id,
            email=issued.email,
            token_hash=issued.token_hash,
            status=InvitationStatus.PENDING,
            invited_by=invited_by,
            invited_at=issued.issued_at,
            expires_at=issued.expires_at,
            last_sent_at=issued.issued_at,
        )

    def is_expired(self, record: InvitationRecord, now: Optional[datetime] = None) -> bool:
        """Check whether a record is past its expiry (or marked expired)."""
        if record.status == InvitationStatus.EXPIRED:
            return True
        now = _as_utc(now) if now is not None else _utcnow()
        return _as_utc(record.expires_at) < now

    def verify(
        self,
        token: Any,
        record: InvitationRecord,
        now: Optional[datetime] = None,
    ) -> InvitationVerificationResult:
        """
        Verify a presented token against a stored record.

        Checks run in order: token format, hash match, accepted, revoked,
        expired. Bad tokens never raise; the failure is reported instead
        so callers can tell "malformed" from "mismatch" from "expired".

        Args:
            token: Raw token as received (e.g. from a URL parameter)
            record: Stored invitation record
            now: Reference time (defaults to the current UTC time)

        Returns:
            InvitationVerificationResult with validation status

        Example:
            ```python
            result = invites.verify(request.query_params.get("token"), record)
            if not result.valid:
                raise HTTPException(410, result.error)
            ```
        """
        if not is_invitation_token(token):
            return self._reject(record, VerificationFailure.MALFORMED, "Invitation token is malformed")

        if not tokens_match(token, record.token_hash):
            return self._reject(record, VerificationFailure.MISMATCH, "Invalid invitation token")

        if record.status == InvitationStatus.ACCEPTED:
            return self._reject(record, VerificationFailure.ALREADY_ACCEPTED, "Invitation already used")

        if record.status == InvitationStatus.REVOKED:
            return self._reject(record, VerificationFailure.REVOKED, "Invitation revoked")

        if self.is_expired(record, now):
            return self._reject(record, VerificationFailure.EXPIRED, "Invitation expired")

        return InvitationVerificationResult(valid=True, record=record)

    def _reject(
        self,
        record: InvitationRecord,
        failure: VerificationFailure,
        error: str,
    ) -> InvitationVerificationResult:
        logger.warning(
            "Rejected invitation token for %s: %s",
            record.masked_email,
            failure.value,
        )
        # Only a matching token may learn about the record
        matched = failure not in (VerificationFailure.MALFORMED, VerificationFailure.MISMATCH)
        return InvitationVerificationResult(
            valid=False,
            failure=failure,
            error=error,
            record=record if matched else None,
        )

    def accept(
        self,
        token: Any,
        record: InvitationRecord,
        accepted_by: Optional[UUID] = None,
        now: Optional[datetime] = None,
    ) -> InvitationRecord:
        """
        Accept an invitation.

        Args:
            token: Raw token presented by the invitee
            record: Stored invitation record
            accepted_by: ID of the account created for the invitee
            now: Acceptance time (defaults to the current UTC time)

        Returns:
            Updated InvitationRecord (status accepted)

        Raises:
            InvitationError: If the token does not verify; ``failure`` says why
        """
        now = _as_utc(now) if now is not None else _utcnow()

        result = self.verify(token, record, now=now)
        if not result.valid:
            raise InvitationError(result.error or "Invalid invitation", failure=result.failure)

        updated = self._update(
            record,
            status=InvitationStatus.ACCEPTED,
            accepted_at=now,
            accepted_by=accepted_by,
        )
        logger.info("Invitation accepted for %s", updated.masked_email)
        return updated

    def revoke(self, record: InvitationRecord) -> InvitationRecord:
        """
        Revoke a pending invitation.

        Raises:
            InvitationError: If the invitation was already accepted
        """
        if record.status == InvitationStatus.ACCEPTED:
            raise InvitationError("Cannot revoke an accepted invitation")

        updated = self._update(record, status=InvitationStatus.REVOKED)
        logger.info("Invitation revoked for %s", updated.masked_email)
        return updated

    def resend(
        self,
        record: InvitationRecord,
        hours_valid: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> Tuple[IssuedInvitation, InvitationRecord]:
        """
        Re-issue an invitation with a fresh token and expiry.

        The previous token stops matching as soon as the returned record
        replaces the stored one.

        Returns:
            Tuple of (IssuedInvitation with the new raw token, updated record)

        Raises:
            InvitationError: If the invitation was already accepted
        """
        if record.status == InvitationStatus.ACCEPTED:
            raise InvitationError("Cannot resend an accepted invitation")

        issued = self.issue(record.email, hours_valid=hours_valid, now=now)
        updated = self._update(
            record,
            token_hash=issued.token_hash,
            status=InvitationStatus.PENDING,
            invited_at=issued.issued_at,
            expires_at=issued.expires_at,
            accepted_at=None,
            accepted_by=None,
            last_sent_at=issued.issued_at,
        )
        return issued, updated

    def _update(self, record: InvitationRecord, **changes: Any) -> InvitationRecord:
        return InvitationRecord(**{**record.model_dump(), **changes})
