"""Main CLI entry point."""

import click

from minibank.config import AppConfig, ConfigurationError
from minibank.factories import create_bank
from minibank.logging_config import setup_logging

# Import and register all commands at module level
from minibank.cli.commands import demo, interest, password, run


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides MINIBANK_LOG_LEVEL environment variable)",
    envvar="MINIBANK_LOG_LEVEL",
)
@click.option(
    "--seed",
    type=int,
    help="Seed for account-number generation, for reproducible output",
)
@click.pass_context
def cli(ctx, log_level: str | None, seed: int | None):
    """minibank - in-memory banking ledger.

    Open accounts, move money, accrue interest and run account security
    checks. State lives only for the duration of a single command.
    """
    ctx.ensure_object(dict)

    try:
        config = AppConfig.from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    setup_logging(level=log_level or config.log_level, format_type=config.log_format)
    ctx.obj["config"] = config
    ctx.obj["bank"] = create_bank(policy=config.policy, seed=seed)


# Register all commands
demo.register_commands(cli)
run.register_commands(cli)
password.register_commands(cli)
interest.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
