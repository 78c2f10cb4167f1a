"""Randomized checks that balances always match the transaction history."""

import random
from decimal import Decimal, localcontext

import pytest

from minibank.domain.errors import DomainError
from minibank.factories import create_bank


def _replayed_balance(opening, account):
    return opening + sum((txn.balance_effect for txn in account.transactions), Decimal("0"))


def _check_new_balances(opening, account):
    running = opening
    for txn in account.transactions:
        running += txn.balance_effect
        assert txn.new_balance == running


@pytest.mark.parametrize("seed", range(20))
def test_balance_equals_signed_sum_of_effects(seed, clock):
    # Interest is never rounded, so widen precision to keep sums exact
    with localcontext() as ctx:
        ctx.prec = 400
        _run_random_sequence(seed, clock)


def _run_random_sequence(seed, clock):
    rng = random.Random(seed)
    bank = create_bank(clock=clock, seed=seed)

    openings = {}
    accounts = []
    for i in range(3):
        opening = Decimal(rng.randint(50, 2000))
        account = bank.registry.create_account("Holder", f"No{i}", opening)
        openings[account.account_number] = opening
        accounts.append(account)

    for _ in range(60):
        clock.advance(minutes=rng.randint(0, 90))
        amount = Decimal(rng.randint(1, 150000)) / 100
        account = rng.choice(accounts)
        operation = rng.choice(["deposit", "withdraw", "transfer", "interest", "limited"])
        try:
            if operation == "deposit":
                bank.ledger.deposit(account, amount)
            elif operation == "withdraw":
                bank.ledger.withdraw(account, amount)
            elif operation == "transfer":
                target = rng.choice([acc for acc in accounts if acc is not account])
                bank.ledger.transfer(account, target, amount)
            elif operation == "interest":
                bank.interest.accrue_interest(account)
            else:
                bank.security.withdraw_with_daily_limit(account, amount)
        except DomainError:
            pass

    for account in accounts:
        opening = openings[account.account_number]
        assert account.balance == _replayed_balance(opening, account)
        _check_new_balances(opening, account)


def test_failed_operations_leave_no_trace(bank):
    source = bank.registry.create_account("Alice", "Johnson", 100)
    target = bank.registry.create_account("John", "Doe", 100)

    for attempt in (
        lambda: bank.ledger.transfer(source, target, 500),
        lambda: bank.ledger.deposit(source, -1),
        lambda: bank.ledger.withdraw(source, 0),
    ):
        with pytest.raises(DomainError):
            attempt()

    assert source.balance == Decimal("100")
    assert target.balance == Decimal("100")
    assert source.transactions == [] and target.transactions == []
