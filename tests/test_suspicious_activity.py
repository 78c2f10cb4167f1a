"""Tests for the suspicious-activity scan."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from minibank.domain.entities import Transaction, TransactionType

BASE = datetime(2023, 11, 15, 10, 0, tzinfo=UTC)


def _txn(kind, amount, minutes=0):
    return Transaction(
        type=kind,
        amount=Decimal(str(amount)),
        date=BASE + timedelta(minutes=minutes),
        new_balance=Decimal("0"),
    )


def _withdrawals(account, minutes_list, amount=100):
    for minutes in minutes_list:
        account.transactions.append(_txn(TransactionType.WITHDRAWAL, amount, minutes))


def test_clean_account(security, sample_account):
    report = security.check_suspicious_activity(sample_account)

    assert not report.is_suspicious
    assert report.alerts == ()


def test_high_value_deposit(security, ledger, sample_account):
    ledger.deposit(sample_account, 15000)

    report = security.check_suspicious_activity(sample_account)

    assert report.is_suspicious
    assert report.alerts == ("High-value transaction: $15000 deposit",)


@pytest.mark.parametrize(
    "amount, shown",
    [(15000.0, "$15000"), (Decimal("15000.00"), "$15000"), (Decimal("15000.50"), "$15000.5")],
)
def test_high_value_amount_drops_trailing_zeros(security, ledger, sample_account, amount, shown):
    ledger.deposit(sample_account, amount)

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == (f"High-value transaction: {shown} deposit",)


def test_threshold_is_exclusive(security, ledger, sample_account):
    ledger.deposit(sample_account, 10000)

    assert not security.check_suspicious_activity(sample_account).is_suspicious


@pytest.mark.parametrize(
    "kind, label",
    [
        (TransactionType.WITHDRAWAL, "withdrawal"),
        (TransactionType.TRANSFER_OUT, "transfer"),
        (TransactionType.TRANSFER_IN, "transfer"),
        (TransactionType.INTEREST, "transaction"),
        (TransactionType.OVERDRAFT_ATTEMPT, "transaction"),
    ],
)
def test_high_value_kinds(security, sample_account, kind, label):
    sample_account.transactions.append(_txn(kind, 20000))

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == (f"High-value transaction: $20000 {label}",)


def test_one_alert_per_high_value_transaction(security, sample_account):
    sample_account.transactions.append(_txn(TransactionType.DEPOSIT, 15000))
    sample_account.transactions.append(_txn(TransactionType.TRANSFER_IN, 12000, 60))

    report = security.check_suspicious_activity(sample_account)

    assert len(report.alerts) == 2


def test_rapid_withdrawals(security, sample_account):
    _withdrawals(sample_account, [0, 2, 4])

    report = security.check_suspicious_activity(sample_account)

    assert report.is_suspicious
    assert report.alerts == ("Rapid withdrawals: 3 transactions within 4 minutes",)


def test_rapid_window_boundary_is_inclusive(security, sample_account):
    _withdrawals(sample_account, [0, 1, 5])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 5 minutes",)


def test_spread_out_withdrawals_not_flagged(security, sample_account):
    _withdrawals(sample_account, [0, 3, 6, 9])

    assert not security.check_suspicious_activity(sample_account).is_suspicious


def test_two_withdrawals_not_flagged(security, sample_account):
    _withdrawals(sample_account, [0, 1])

    assert not security.check_suspicious_activity(sample_account).is_suspicious


def test_minimum_reported_span_is_one_minute(security, sample_account):
    _withdrawals(sample_account, [0, 0, 0])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 1 minutes",)


def test_span_rounds_half_up(security, sample_account):
    _withdrawals(sample_account, [0, 1, 2.5])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 3 minutes",)


def test_only_first_window_reported(security, sample_account):
    _withdrawals(sample_account, [0, 1, 2, 60, 61, 62])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 2 minutes",)


def test_first_window_uses_shortest_length(security, sample_account):
    # Four withdrawals inside the window still report the first three
    _withdrawals(sample_account, [0, 1, 2, 3])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 2 minutes",)


def test_insertion_order_does_not_matter(security, sample_account):
    _withdrawals(sample_account, [4, 0, 2])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == ("Rapid withdrawals: 3 transactions within 4 minutes",)


def test_large_withdrawals_excluded_from_rapid_rule(security, sample_account):
    _withdrawals(sample_account, [0, 1], amount=100)
    _withdrawals(sample_account, [2], amount=501)

    assert not security.check_suspicious_activity(sample_account).is_suspicious


def test_small_withdrawal_limit_is_inclusive(security, sample_account):
    _withdrawals(sample_account, [0, 1, 2], amount=500)

    assert security.check_suspicious_activity(sample_account).is_suspicious


def test_overdraft_attempts_excluded_from_rapid_rule(security, sample_account):
    _withdrawals(sample_account, [0, 1])
    sample_account.transactions.append(_txn(TransactionType.OVERDRAFT_ATTEMPT, 100, 2))

    assert not security.check_suspicious_activity(sample_account).is_suspicious


def test_both_rules_combined(security, sample_account):
    sample_account.transactions.append(_txn(TransactionType.DEPOSIT, 15000))
    _withdrawals(sample_account, [10, 11, 12])

    report = security.check_suspicious_activity(sample_account)

    assert report.alerts == (
        "High-value transaction: $15000 deposit",
        "Rapid withdrawals: 3 transactions within 2 minutes",
    )
    assert report.to_dict() == {"isSuspicious": True, "alerts": list(report.alerts)}
