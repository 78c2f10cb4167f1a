"""Rendering helpers for CLI output."""

import json
from decimal import Decimal
from typing import Any, Iterable

import click

from minibank.domain.entities import Account, Transaction, TransactionType
from minibank.utils.date_parser import format_timestamp


def format_amount(amount: Decimal) -> str:
    """Format an amount for display, rounded to cents."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def echo_json(data: Any) -> None:
    """Print a result payload as indented JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


def describe_transaction(txn: Transaction) -> str:
    """One-line description of a transaction."""
    when = format_timestamp(txn.date)
    line = f"{when} | {txn.type.value:17s} | {format_amount(txn.amount):>12s}"
    if txn.type == TransactionType.OVERDRAFT_ATTEMPT:
        line += f" | penalty {format_amount(txn.penalty)}"
    elif txn.type == TransactionType.TRANSFER_OUT:
        line += f" | to {txn.to_account}"
    elif txn.type == TransactionType.TRANSFER_IN:
        line += f" | from {txn.from_account}"
    return f"{line} | balance {format_amount(txn.new_balance)}"


def echo_transactions(transactions: Iterable[Transaction]) -> None:
    transactions = list(transactions)
    if not transactions:
        click.echo("No transactions found.")
        return
    for txn in transactions:
        click.echo(describe_transaction(txn))


def echo_accounts(accounts: Iterable[Account]) -> None:
    accounts = list(accounts)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(
            f"{acc.account_number} | {acc.full_name:24s} | "
            f"{format_amount(acc.balance):>12s} | {acc.status.value}"
        )
