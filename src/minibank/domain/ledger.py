"""Ledger domain service: deposits, withdrawals, transfers and history."""

import logging
from datetime import datetime
from typing import Optional

from minibank.config import LedgerPolicy
from minibank.domain import errors
from minibank.domain.clock import Clock, read_clock, utc_now
from minibank.domain.entities import Account, AccountSummary, Transaction, TransactionType
from minibank.domain.errors import ValidationError
from minibank.domain.validators import require_positive_number
from minibank.utils.date_parser import as_utc, parse_boundary, parse_timestamp

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for recording balance-changing transactions."""

    def __init__(self, policy: Optional[LedgerPolicy] = None, clock: Optional[Clock] = None):
        """Initialize ledger service.

        Args:
            policy: Business rules (defaults to LedgerPolicy())
            clock: Clock used to stamp transactions
        """
        self.policy = policy or LedgerPolicy()
        self.clock = clock or utc_now

    def now(self) -> datetime:
        return read_clock(self.clock)

    def deposit(self, account: Account, amount) -> Account:
        """Deposit money into an account.

        Args:
            account: Target account
            amount: Amount to deposit

        Returns:
            The updated account

        Raises:
            ValidationError: If amount is not a positive number
        """
        value = require_positive_number(amount, "Deposit amount")

        account.transactions.append(
            Transaction(
                type=TransactionType.DEPOSIT,
                amount=value,
                date=self.now(),
                new_balance=account.balance + value,
            )
        )
        account.balance += value
        return account

    def withdraw(self, account: Account, amount) -> AccountSummary:
        """Withdraw money, charging an overdraft penalty on insufficient funds.

        When ``amount`` exceeds the balance the withdrawal is not applied;
        the policy's overdraft penalty is charged instead and an
        OVERDRAFT_ATTEMPT entry records the attempted amount. The balance may
        go negative this way. This is a normal outcome, not an error.

        Args:
            account: Source account
            amount: Amount to withdraw

        Returns:
            Summary of the account after the operation

        Raises:
            ValidationError: If amount is not a positive number
        """
        value = require_positive_number(amount, "Withdrawal amount")

        if value > account.balance:
            penalty = self.policy.overdraft_penalty
            account.balance -= penalty
            account.transactions.append(
                Transaction(
                    type=TransactionType.OVERDRAFT_ATTEMPT,
                    amount=value,
                    date=self.now(),
                    penalty=penalty,
                    new_balance=account.balance,
                )
            )
            logger.warning(
                "Overdraft attempt on %s: requested %s, charged %s penalty",
                account.account_number,
                value,
                penalty,
                extra={"account_number": account.account_number},
            )
            return account.summary()

        account.balance -= value
        account.transactions.append(
            Transaction(
                type=TransactionType.WITHDRAWAL,
                amount=value,
                date=self.now(),
                new_balance=account.balance,
            )
        )
        return account.summary()

    def transfer(
        self, source: Account, target: Account, amount
    ) -> tuple[AccountSummary, AccountSummary]:
        """Move money between two accounts.

        Unlike ``withdraw`` there is no overdraft fallback: a transfer larger
        than the source balance is rejected. Every check runs before either
        account is touched, so a failed transfer changes nothing.

        This sequence is not atomic across threads. Concurrent callers must
        lock both accounts, in ascending account-number order, around it.

        Args:
            source: Account to debit
            target: Account to credit
            amount: Amount to move

        Returns:
            Tuple of (source summary, target summary)

        Raises:
            ValidationError: If an account is missing, the accounts are the
                same, the amount is invalid or funds are insufficient
        """
        if source is None or target is None or not source.account_number or not target.account_number:
            raise ValidationError("Account must be available!")
        if source is target or source.account_number == target.account_number:
            raise ValidationError("Cannot transfer to the same account.")

        value = require_positive_number(amount, "Amount")
        if value > source.balance:
            raise ValidationError("Insufficient funds for transfer.")

        source.balance -= value
        source.transactions.append(
            Transaction(
                type=TransactionType.TRANSFER_OUT,
                to_account=target.account_number,
                amount=value,
                date=self.now(),
                new_balance=source.balance,
            )
        )

        target.balance += value
        target.transactions.append(
            Transaction(
                type=TransactionType.TRANSFER_IN,
                from_account=source.account_number,
                amount=value,
                date=self.now(),
                new_balance=target.balance,
            )
        )

        logger.info(
            "Transferred %s from %s to %s",
            value,
            source.account_number,
            target.account_number,
            extra={"account_number": source.account_number},
        )
        return source.summary(), target.summary()

    def retrieve_in_range(
        self,
        account: Account,
        start_date=None,
        end_date=None,
        type: Optional[str] = None,
    ) -> list[Transaction]:
        """Retrieve an account's transactions within a date range.

        Bare dates ("2023-11-15") cover the whole UTC day: a start date
        begins at midnight and an end date runs through 23:59:59.999. Both
        bounds are inclusive. The account is not modified.

        Args:
            account: Account to query
            start_date: Optional range start (date string, date or datetime)
            end_date: Optional range end (date string, date or datetime)
            type: Optional transaction type, case-insensitive

        Returns:
            New list of matching transactions, newest first

        Raises:
            ValidationError: If a bound is unparsable or start is after end
        """
        if account is None:
            raise ValidationError("Account is required.")

        start = _resolve_boundary(start_date, end_of_day=False)
        end = _resolve_boundary(end_date, end_of_day=True)

        if start is not None and end is not None and start > end:
            raise ValidationError("startDate must be on/before endDate.")

        wanted_type = None
        if type is not None and str(type).strip():
            wanted_type = str(type).strip().upper()

        matches: list[tuple[datetime, Transaction]] = []
        for txn in account.transactions:
            if wanted_type and _type_name(txn) != wanted_type:
                continue
            when = transaction_time(txn)
            if when is None:
                continue
            if start is not None and when < start:
                continue
            if end is not None and when > end:
                continue
            matches.append((when, txn))

        matches.sort(key=lambda item: item[0], reverse=True)
        return [txn for _, txn in matches]


def transaction_time(txn: Transaction) -> Optional[datetime]:
    """Return a transaction's timestamp in UTC, or None if it is unreadable."""
    value = txn.date
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return parse_timestamp(value)
        except ValueError:
            return None
    return None


def _type_name(txn: Transaction) -> str:
    value = getattr(txn.type, "value", txn.type)
    return str(value).upper()


def _resolve_boundary(value, end_of_day: bool) -> Optional[datetime]:
    try:
        return parse_boundary(value, end_of_day=end_of_day)
    except ValueError:
        raise ValidationError(errors.invalid_date(value))
