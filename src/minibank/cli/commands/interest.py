"""Interest preview command."""

import click

from minibank.cli.error_handling import handle_domain_error
from minibank.cli.formatting import format_amount
from minibank.domain.errors import DomainError
from minibank.utils.amount_parser import parse_amount


@click.command("interest")
@click.argument("balance", metavar="BALANCE")
@click.option("--months", type=click.IntRange(min=1), default=1, show_default=True,
              help="Number of periods to accrue")
@click.pass_context
def preview_interest(ctx, balance: str, months: int):
    """Show the interest a balance would earn.

    Opens a scratch account with BALANCE and accrues interest once per
    month. Balances at or below the threshold earn nothing.

    Examples:
        minibank interest 1000
        minibank interest 2500 --months 12
    """
    bank = ctx.obj["bank"]

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)

    try:
        account = bank.registry.create_account("Interest", "Preview", opening)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for month in range(1, months + 1):
        result = bank.interest.accrue_interest(account)
        if not result.applied:
            click.echo(result.message)
            break
        click.echo(
            f"Month {month:3d}: +{format_amount(result.interest_applied)} "
            f"-> {format_amount(result.balance)}"
        )

    click.echo(f"Final balance: {format_amount(account.balance)}")


def register_commands(cli):
    """Register interest command with main CLI."""
    cli.add_command(preview_interest)
