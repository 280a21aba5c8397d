"""
CLI commands for issuing and verifying invitations.
"""

from pathlib import Path
from typing import Optional
from uuid import UUID

import typer
from rich.console import Console
from rich.markup import escape

from ...config import load_config
from ...errors import InviteTokenError
from ...invitations import InvitationManager, InvitationRecord

console = Console()
app = typer.Typer(help="Issue and verify invitations")


def invites_issue_command(
    email: str = typer.Argument(..., help="Email address to invite"),
    hours: Optional[float] = typer.Option(None, "--hours", help="Hours until expiration"),
    invited_by: Optional[str] = typer.Option(None, "--invited-by", "-i", help="Inviting user ID"),
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Write the invitation record (JSON) to this file"
    ),
) -> None:
    """Issue an invitation and print its link and storable record."""
    try:
        invites = InvitationManager(load_config())
        issued = invites.issue(email, hours_valid=hours)
        record = invites.to_record(
            issued,
            invited_by=UUID(invited_by) if invited_by else None,
        )
    except (InviteTokenError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Invitation issued for {issued.masked_email}")
    console.print(f"  Expires: {issued.expires_at.isoformat()}")
    console.print(f"  Link: {issued.invite_url}", soft_wrap=True)

    record_json = record.model_dump_json(indent=2)
    if out:
        out.write_text(record_json, encoding="utf-8")
        console.print(f"  Record: {out}")
    else:
        console.print(record_json, markup=False, soft_wrap=True)


def invites_verify_command(
    token: str = typer.Argument(..., help="Invitation token from the link"),
    record_path: Path = typer.Option(
        ..., "--record", "-r", help="Invitation record (JSON) to verify against"
    ),
) -> None:
    """Verify a token against a stored invitation record."""
    try:
        record = InvitationRecord.model_validate_json(record_path.read_text(encoding="utf-8"))
        result = InvitationManager(load_config()).verify(token, record)
    except (InviteTokenError, ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not result.valid:
        console.print(f"[red]✗[/red] {result.error} ({result.failure.value})")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Invitation is valid")
    console.print(f"  Email: {record.masked_email}", markup=False)
    console.print(f"  Expires: {record.expires_at.isoformat()}")


app.command(name="issue")(invites_issue_command)
app.command(name="verify")(invites_verify_command)
