"""Replay a script of ledger operations."""

import shlex

import click

from minibank.cli.error_handling import handle_domain_error, report_error
from minibank.cli.formatting import echo_accounts, echo_transactions, format_amount
from minibank.domain.errors import DomainError
from minibank.domain.entities import TransactionType
from minibank.factories import Bank
from minibank.utils.account_resolver import resolve_account
from minibank.utils.amount_parser import parse_amount

SCRIPT_HELP = """\
Each non-blank line holds one operation; '#' starts a comment.
Accounts are referenced by account number or holder name.

\b
    open FIRST LAST AMOUNT
    deposit ACCOUNT AMOUNT
    withdraw ACCOUNT AMOUNT
    withdraw-daily ACCOUNT AMOUNT
    transfer FROM TO AMOUNT
    interest ACCOUNT
    history ACCOUNT [start=DATE] [end=DATE] [type=TYPE]
    freeze ACCOUNT MANAGER
    unfreeze ACCOUNT [MANAGER]
    scan ACCOUNT
    accounts
"""


class ScriptError(ValueError):
    """Malformed script line."""


def _expect(args: list[str], count: int, usage: str) -> None:
    if len(args) != count:
        raise ScriptError(f"Usage: {usage}")


def _open(bank: Bank, args: list[str]) -> None:
    _expect(args, 3, "open FIRST LAST AMOUNT")
    account = bank.registry.create_account(args[0], args[1], parse_amount(args[2]))
    click.echo(
        f"Opened {account.account_number} for {account.full_name} "
        f"with {format_amount(account.balance)}"
    )


def _deposit(bank: Bank, args: list[str]) -> None:
    _expect(args, 2, "deposit ACCOUNT AMOUNT")
    account = resolve_account(bank.registry, args[0])
    bank.security.deposit_safe(account, parse_amount(args[1]))
    click.echo(f"Deposited into {account.account_number}: balance {format_amount(account.balance)}")


def _report_withdrawal(summary) -> None:
    last = summary.transactions[-1]
    if last.type == TransactionType.OVERDRAFT_ATTEMPT:
        click.echo(
            f"Overdraft attempt on {summary.account_number}: "
            f"{format_amount(last.penalty)} penalty applied, "
            f"balance {format_amount(summary.balance)}"
        )
    else:
        click.echo(
            f"Withdrew {format_amount(last.amount)} from {summary.account_number}: "
            f"balance {format_amount(summary.balance)}"
        )


def _withdraw(bank: Bank, args: list[str]) -> None:
    _expect(args, 2, "withdraw ACCOUNT AMOUNT")
    account = resolve_account(bank.registry, args[0])
    _report_withdrawal(bank.ledger.withdraw(account, parse_amount(args[1])))


def _withdraw_daily(bank: Bank, args: list[str]) -> None:
    _expect(args, 2, "withdraw-daily ACCOUNT AMOUNT")
    account = resolve_account(bank.registry, args[0])
    _report_withdrawal(bank.security.withdraw_with_daily_limit(account, parse_amount(args[1])))


def _transfer(bank: Bank, args: list[str]) -> None:
    _expect(args, 3, "transfer FROM TO AMOUNT")
    source = resolve_account(bank.registry, args[0])
    target = resolve_account(bank.registry, args[1])
    source_summary, target_summary = bank.security.transfer_safe(
        source, target, parse_amount(args[2])
    )
    click.echo(
        f"Transferred {args[2]} from {source_summary.account_number} "
        f"({format_amount(source_summary.balance)}) to {target_summary.account_number} "
        f"({format_amount(target_summary.balance)})"
    )


def _interest(bank: Bank, args: list[str]) -> None:
    _expect(args, 1, "interest ACCOUNT")
    account = resolve_account(bank.registry, args[0])
    result = bank.interest.accrue_interest(account)
    if result.applied:
        click.echo(
            f"Interest {format_amount(result.interest_applied)} posted to "
            f"{result.account_number}: balance {format_amount(result.balance)}"
        )
    else:
        click.echo(result.message)


def _history(bank: Bank, args: list[str]) -> None:
    if not args:
        raise ScriptError("Usage: history ACCOUNT [start=DATE] [end=DATE] [type=TYPE]")
    account = resolve_account(bank.registry, args[0])

    filters = {}
    for option in args[1:]:
        key, sep, value = option.partition("=")
        if not sep or key not in ("start", "end", "type"):
            raise ScriptError(f"Unknown history filter '{option}'")
        filters[key] = value

    echo_transactions(
        bank.ledger.retrieve_in_range(
            account,
            start_date=filters.get("start"),
            end_date=filters.get("end"),
            type=filters.get("type"),
        )
    )


def _freeze(bank: Bank, args: list[str]) -> None:
    _expect(args, 2, "freeze ACCOUNT MANAGER")
    account = resolve_account(bank.registry, args[0])
    result = bank.security.update_account_status(account, "FREEZE", args[1])
    click.echo(f"Account {result.account_number} is {result.status.value}")


def _unfreeze(bank: Bank, args: list[str]) -> None:
    if len(args) not in (1, 2):
        raise ScriptError("Usage: unfreeze ACCOUNT [MANAGER]")
    account = resolve_account(bank.registry, args[0])
    manager = args[1] if len(args) == 2 else None
    result = bank.security.update_account_status(account, "UNFREEZE", manager)
    click.echo(f"Account {result.account_number} is {result.status.value}")


def _scan(bank: Bank, args: list[str]) -> None:
    _expect(args, 1, "scan ACCOUNT")
    account = resolve_account(bank.registry, args[0])
    report = bank.security.check_suspicious_activity(account)
    if not report.is_suspicious:
        click.echo(f"No suspicious activity on {account.account_number}")
        return
    for alert in report.alerts:
        click.echo(f"ALERT {account.account_number}: {alert}")


def _accounts(bank: Bank, args: list[str]) -> None:
    _expect(args, 0, "accounts")
    echo_accounts(bank.registry.list_accounts())


OPERATIONS = {
    "open": _open,
    "deposit": _deposit,
    "withdraw": _withdraw,
    "withdraw-daily": _withdraw_daily,
    "transfer": _transfer,
    "interest": _interest,
    "history": _history,
    "freeze": _freeze,
    "unfreeze": _unfreeze,
    "scan": _scan,
    "accounts": _accounts,
}


def run_line(bank: Bank, line: str) -> None:
    """Execute a single script line.

    Raises:
        ScriptError: If the line is malformed
        DomainError: If the operation is rejected
        ValueError: If an amount or account reference is invalid
    """
    try:
        tokens = shlex.split(line, comments=True)
    except ValueError as e:
        raise ScriptError(f"Could not parse line: {e}")
    if not tokens:
        return

    verb, args = tokens[0].lower(), tokens[1:]
    operation = OPERATIONS.get(verb)
    if operation is None:
        raise ScriptError(f"Unknown operation '{verb}'")
    operation(bank, args)


@click.command("run", help=f"Replay a script of operations.\n\n{SCRIPT_HELP}")
@click.argument("script", type=click.File("r"))
@click.option("--stop-on-error", is_flag=True, help="Abort at the first failing line")
@click.pass_context
def run_script(ctx, script, stop_on_error: bool):
    bank = ctx.obj["bank"]

    failures = 0
    for line_number, line in enumerate(script, start=1):
        try:
            run_line(bank, line)
        except (DomainError, ValueError) as e:
            location = f"Line {line_number}"
            if stop_on_error:
                handle_domain_error(ctx, e, location)
            failures += 1
            report_error(e, location)

    if failures:
        click.echo(f"\n{failures} operation(s) failed", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register run command with main CLI."""
    cli.add_command(run_script)
