"""Scripted walkthrough of the ledger operations."""

import click

from minibank.cli.formatting import echo_accounts, echo_json
from minibank.domain.errors import FrozenAccountError
from minibank.domain.security import validate_password


def _section(title: str) -> None:
    click.echo(f"\n=== {title} ===")


@click.command("demo")
@click.pass_context
def run_demo(ctx):
    """Run a walkthrough of every ledger and security operation.

    Creates three accounts and exercises deposits, withdrawals, transfers,
    interest, history retrieval, password checks, the suspicious-activity
    scan and freezing, printing each result.
    """
    bank = ctx.obj["bank"]
    registry = bank.registry
    ledger = bank.ledger
    security = bank.security

    john = registry.create_account("John", "Doe", 100)
    jane = registry.create_account("Jane", "Smith", 200)
    alice = registry.create_account("Alice", "Johnson", 300)

    _section("Accounts Created")
    echo_accounts(registry.list_accounts())

    _section("Deposit $50 into Account 1")
    echo_json(ledger.deposit(john, 50).to_dict())

    _section("Withdraw $30 from Account 2")
    echo_json(ledger.withdraw(jane, 30).to_dict())

    _section("Transfer $25 from Account 3 to Account 1")
    echo_json([summary.to_dict() for summary in ledger.transfer(alice, john, 25)])

    _section("Calculate Savings Interest (Account 3)")
    echo_json(bank.interest.accrue_interest(alice).to_dict())

    _section("Account 1 Transactions")
    echo_json([txn.to_dict() for txn in ledger.retrieve_in_range(john)])

    _section("Password Validation")
    echo_json(validate_password("short").to_dict())
    echo_json(validate_password("Str0ng!Pass#2026").to_dict())

    _section("Suspicious Activity Check (Account 1)")
    echo_json(security.check_suspicious_activity(john).to_dict())

    _section("Freeze Account 2")
    echo_json(security.update_account_status(jane, "FREEZE", "MGR-001").to_dict())

    _section("Attempt Deposit on Frozen Account")
    try:
        security.deposit_safe(jane, 100)
    except FrozenAccountError as e:
        click.echo(f"Blocked: {e}")

    _section("Unfreeze Account 2")
    echo_json(security.update_account_status(jane, "UNFREEZE").to_dict())

    totals = registry.totals()
    _section("Totals")
    click.echo(f"{totals.account_count} accounts holding ${totals.total_balance:,.2f}")


def register_commands(cli):
    """Register demo command with main CLI."""
    cli.add_command(run_demo)
