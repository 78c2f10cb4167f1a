"""Password strength command."""

import click

from minibank.domain.security import validate_password

STRENGTH_LABELS = ["Very Weak", "Very Weak", "Weak", "Fair", "Strong", "Very Strong"]


@click.command("password")
@click.argument("candidate", metavar="PASSWORD")
@click.pass_context
def check_password(ctx, candidate: str):
    """Check a password against the strength rules.

    Exits with status 1 when the password is rejected.

    Examples:
        minibank password short
        minibank password 'Str0ng!Pass#2026'
    """
    result = validate_password(candidate)
    click.echo(f"Strength: {STRENGTH_LABELS[result.score]} ({result.score}/5)")

    if result.valid:
        click.echo("Password meets all requirements")
        return

    click.echo("Issues found:")
    for reason in result.reasons:
        click.echo(f"  - {reason}")
    ctx.exit(1)


def register_commands(cli):
    """Register password command with main CLI."""
    cli.add_command(check_password)
