"""
Basic invite-tokens usage example.

This example walks an admin invitation through its lifecycle:
- Issuing the invitation (token, hash, expiry, link)
- Verifying the token from the link
- Accepting, then trying to reuse the link

Run with:
    python examples/basic_usage.py
"""

from uuid import uuid4

from invite_tokens import (
    InvitationError,
    InvitationManager,
    InviteConfig,
    mask_email,
)


def main():
    invites = InvitationManager(InviteConfig(app_base_url="http://localhost:3000"))

    # =================================================================
    # 1. Issue
    # =================================================================
    print("Issuing invitation...")

    issued = invites.issue("New.Admin@Example.com", hours_valid=48)
    record = invites.to_record(issued, invited_by=uuid4())

    # Persist `record` (hash only) and email `issued.invite_url`
    print(f"  Invited: {issued.masked_email}")
    print(f"  Link: {issued.invite_url}")
    print(f"  Stored hash: {record.token_hash}")
    print(f"  Expires: {record.expires_at.isoformat()}")

    # =================================================================
    # 2. Verify
    # =================================================================
    print("\nVerifying token from the link...")

    token_from_url = issued.token
    result = invites.verify(token_from_url, record)
    print(f"  Valid: {result.valid} for {mask_email(record.email)}")

    result = invites.verify("not-a-token", record)
    print(f"  Garbage token: {result.failure.value} ({result.error})")

    # =================================================================
    # 3. Accept
    # =================================================================
    print("\nAccepting invitation...")

    record = invites.accept(token_from_url, record, accepted_by=uuid4())
    print(f"  Status: {record.status.value} at {record.accepted_at.isoformat()}")

    try:
        invites.accept(token_from_url, record)
    except InvitationError as e:
        print(f"  Reuse refused: {e} ({e.failure.value})")

    print("\nDone!")


if __name__ == "__main__":
    main()
