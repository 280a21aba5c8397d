"""
Pytest configuration and fixtures for invite-tokens tests.

Provides configuration, deterministic random sources and sample records.
"""

import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from invite_tokens.config import InviteConfig
from invite_tokens.invitations import InvitationManager, InvitationRecord, InvitationStatus
from invite_tokens.tokens import generate_invitation_token, hash_invitation_token


@pytest.fixture(autouse=True)
def clean_invite_env(monkeypatch):
    """Keep INVITE_* variables from the host environment out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("INVITE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def invite_config():
    """Create a test configuration."""
    return InviteConfig(app_base_url="https://app.example.com")


@pytest.fixture
def fixed_random_bytes():
    """A random source that always returns 0x00, 0x01, ... 0x1f."""
    calls = []

    def provider(n: int) -> bytes:
        calls.append(n)
        return bytes(range(n))

    provider.calls = calls
    return provider


@pytest.fixture
def failing_random_bytes():
    """A random source that is unavailable."""

    def provider(n: int) -> bytes:
        raise OSError("getrandom() failed")

    return provider


@pytest.fixture
def invites(invite_config):
    """Create an InvitationManager using the secure default source."""
    return InvitationManager(invite_config)


@pytest.fixture
def fixed_now():
    """A fixed issue time."""
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_token():
    """A freshly generated invitation token."""
    return generate_invitation_token()


@pytest.fixture
def sample_record(sample_token, fixed_now):
    """Create a pending record matching sample_token."""
    return InvitationRecord(
        id=uuid4(),
        email="invited@example.com",
        token_hash=hash_invitation_token(sample_token),
        status=InvitationStatus.PENDING,
        invited_by=uuid4(),
        invited_at=fixed_now,
        expires_at=fixed_now + timedelta(hours=48),
        last_sent_at=fixed_now,
    )
