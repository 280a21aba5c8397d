"""
invite-tokens CLI - command-line helpers for invitation tokens.

Usage:
    invite-tokens generate          Generate a token, hash, expiry and link
    invite-tokens hash TOKEN        Hash a token for storage
    invite-tokens expiry            Print an expiry timestamp
    invite-tokens mask EMAIL        Mask an email address for display
    invite-tokens invites           Issue and verify invitations
"""

import logging

import typer

from .commands import invites, tokens

# Create the main Typer app
app = typer.Typer(
    name="invite-tokens",
    help="Invitation token lifecycle helpers",
    add_completion=False,
)

# Register top-level commands
app.command(name="generate")(tokens.generate_command)
app.command(name="hash")(tokens.hash_command)
app.command(name="expiry")(tokens.expiry_command)
app.command(name="mask")(tokens.mask_command)

# Add invites subcommand group
app.add_typer(invites.app, name="invites")


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", envvar="INVITE_DEBUG", help="Enable debug logging"),
) -> None:
    """
    invite-tokens - generate, hash and verify invitation tokens.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
