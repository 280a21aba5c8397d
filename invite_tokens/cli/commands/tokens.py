"""
CLI commands for the token primitives.
"""

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ...config import load_config
from ...errors import InviteTokenError
from ...invitations import InvitationManager
from ...tokens import (
    generate_invitation_token,
    get_invitation_expiry,
    hash_invitation_token,
    mask_email,
)

console = Console()


def generate_command(
    hours: Optional[float] = typer.Option(
        None, "--hours", help="Hours until expiration (defaults to config)"
    ),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Invitee email (shown masked)"),
) -> None:
    """Generate a token with its hash, expiry and invitation link."""
    try:
        config = load_config()
        token = generate_invitation_token()
        expires_at = get_invitation_expiry(
            hours if hours is not None else config.default_hours_valid
        )
        link = InvitationManager(config).build_link(token)
    except (InviteTokenError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Invitation token generated")
    if email:
        console.print(f"  Email: {mask_email(email)}", markup=False)
    console.print(f"  Token: {token}", soft_wrap=True)
    console.print(f"  Hash: {hash_invitation_token(token)}", soft_wrap=True)
    console.print(f"  Expires: {expires_at.isoformat()}")
    console.print(f"  Link: {link}", soft_wrap=True)


def hash_command(
    token: str = typer.Argument(..., help="Invitation token to hash"),
) -> None:
    """Print the storable hash of a token."""
    console.print(hash_invitation_token(token), soft_wrap=True)


def expiry_command(
    hours: Optional[float] = typer.Option(
        None, "--hours", help="Hours until expiration (defaults to config)"
    ),
) -> None:
    """Print the expiry timestamp for an invitation issued now."""
    try:
        if hours is None:
            hours = load_config().default_hours_valid
        expires_at = get_invitation_expiry(hours)
    except (InviteTokenError, ValidationError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(expires_at.isoformat())


def mask_command(
    email: str = typer.Argument(..., help="Email address to mask"),
) -> None:
    """Print an email address with the local part masked."""
    console.print(mask_email(email), markup=False, soft_wrap=True)
