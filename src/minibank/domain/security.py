"""Account security domain service.

Covers the freeze/unfreeze state machine, the daily withdrawal cap,
password strength rules and the suspicious-activity scan, plus the
freeze-aware wrappers around ledger operations.
"""

import logging
import re
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from minibank.config import LedgerPolicy
from minibank.domain import errors
from minibank.domain.clock import Clock, read_clock, utc_now
from minibank.domain.entities import (
    Account,
    AccountStatus,
    AccountSummary,
    PasswordCheck,
    StatusAction,
    StatusChange,
    StatusSummary,
    SuspiciousActivityReport,
    Transaction,
    TransactionType,
)
from minibank.domain.errors import DailyLimitExceededError, FrozenAccountError, ValidationError
from minibank.domain.ledger import LedgerService, transaction_time
from minibank.domain.validators import require_non_empty_string, require_positive_number
from minibank.utils.date_parser import utc_day_bounds

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 12

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "password123",
        "123456789012",
        "qwertyuiop12",
        "letmein123456",
        "adminadmin123",
        "iloveyou12345",
        "welcome123456",
    }
)

SYSTEM_ACTOR = "system"


class SecurityService:
    """Service enforcing account access policies."""

    def __init__(
        self,
        ledger: Optional[LedgerService] = None,
        policy: Optional[LedgerPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize security service.

        Args:
            ledger: Ledger service the guarded operations delegate to
            policy: Business rules (defaults to the ledger's policy)
            clock: Clock used for status changes and the daily window
        """
        self.ledger = ledger or LedgerService(policy=policy, clock=clock)
        self.policy = policy or self.ledger.policy
        self.clock = clock or self.ledger.clock

    def update_account_status(
        self, account: Account, action: str, manager_id: Optional[str] = None
    ) -> StatusSummary:
        """Freeze or unfreeze an account.

        Freezing requires a manager id. Unfreezing does not; the manager id
        is recorded when given, otherwise "system" is. Requesting the
        state the account is already in records nothing.

        Args:
            account: Target account
            action: "FREEZE" or "UNFREEZE", case-insensitive
            manager_id: Approving manager

        Returns:
            StatusSummary after the request

        Raises:
            ValidationError: If the action is unknown or approval is missing
        """
        if account is None:
            raise ValidationError("Account is required.")

        normalized = require_non_empty_string(action, "Action").upper()
        approver = manager_id.strip() if isinstance(manager_id, str) else ""

        if normalized == StatusAction.FREEZE.value and not approver:
            raise ValidationError("Manager approval is required to freeze an account.")
        if normalized not in (StatusAction.FREEZE.value, StatusAction.UNFREEZE.value):
            raise ValidationError('Action must be "FREEZE" or "UNFREEZE".')

        status_action = StatusAction(normalized)
        next_status = (
            AccountStatus.FROZEN if status_action == StatusAction.FREEZE else AccountStatus.ACTIVE
        )

        if account.status != next_status:
            account.status = next_status
            account.status_history.append(
                StatusChange(
                    action=status_action,
                    by=approver or SYSTEM_ACTOR,
                    date=read_clock(self.clock),
                )
            )
            logger.info(
                "Account %s is now %s (by %s)",
                account.account_number,
                next_status.value,
                approver or SYSTEM_ACTOR,
                extra={"account_number": account.account_number},
            )

        return StatusSummary(
            account_number=account.account_number,
            status=account.status,
            status_history=tuple(account.status_history),
        )

    def assert_not_frozen(self, account: Account) -> None:
        """Raise FrozenAccountError if the account is frozen."""
        if account.status == AccountStatus.FROZEN:
            raise FrozenAccountError(errors.account_frozen())

    def withdrawn_today(self, account: Account, now: Optional[datetime] = None) -> Decimal:
        """Sum the WITHDRAWAL amounts dated on the current UTC day.

        Overdraft attempts do not count toward the total.
        """
        day_start, day_end = utc_day_bounds(now or read_clock(self.clock))
        total = Decimal("0")
        for txn in account.transactions:
            if txn.type != TransactionType.WITHDRAWAL:
                continue
            when = transaction_time(txn)
            if when is not None and day_start <= when <= day_end:
                total += txn.amount
        return total

    def withdraw_with_daily_limit(self, account: Account, amount) -> AccountSummary:
        """Withdraw money subject to the daily withdrawal cap.

        The cap is checked against the requested amount, so a request that
        ends up as an overdraft attempt still counts as requested here.

        Raises:
            FrozenAccountError: If the account is frozen
            ValidationError: If amount is not a positive number
            DailyLimitExceededError: If the cap would be exceeded
        """
        self.assert_not_frozen(account)
        value = require_positive_number(amount, "Withdrawal amount")

        limit = self.policy.daily_withdrawal_limit
        if self.withdrawn_today(account) + value > limit:
            raise DailyLimitExceededError(errors.daily_limit_exceeded(limit))

        return self.ledger.withdraw(account, value)

    def deposit_safe(self, account: Account, amount) -> Account:
        """Deposit unless the account is frozen."""
        self.assert_not_frozen(account)
        return self.ledger.deposit(account, amount)

    def transfer_safe(
        self, source: Account, target: Account, amount
    ) -> tuple[AccountSummary, AccountSummary]:
        """Transfer unless either account is frozen."""
        self.assert_not_frozen(source)
        self.assert_not_frozen(target)
        return self.ledger.transfer(source, target, amount)

    def check_suspicious_activity(self, account: Account) -> SuspiciousActivityReport:
        """Scan an account's history for suspicious patterns.

        Two rules apply: any single transaction above the high-value
        threshold, and a burst of small withdrawals inside the rapid
        window. Only the first qualifying burst is reported.
        """
        alerts: list[str] = []

        for txn in account.transactions:
            if txn.amount > self.policy.high_value_threshold:
                alerts.append(
                    f"High-value transaction: ${_plain_amount(txn.amount)} {_alert_kind(txn)}"
                )

        rapid_alert = self._rapid_withdrawal_alert(account.transactions)
        if rapid_alert:
            alerts.append(rapid_alert)

        report = SuspiciousActivityReport(alerts=tuple(alerts))
        if report.is_suspicious:
            logger.warning(
                "Suspicious activity on %s: %s",
                account.account_number,
                "; ".join(report.alerts),
                extra={"account_number": account.account_number},
            )
        return report

    def _rapid_withdrawal_alert(self, transactions: list[Transaction]) -> Optional[str]:
        times = sorted(
            when
            for when in (
                transaction_time(txn)
                for txn in transactions
                if txn.type == TransactionType.WITHDRAWAL
                and txn.amount <= self.policy.small_withdrawal_limit
            )
            if when is not None
        )

        window = self.policy.rapid_withdrawal_window
        min_count = self.policy.rapid_withdrawal_count
        for i in range(len(times)):
            for j in range(i + min_count - 1, len(times)):
                span = times[j] - times[i]
                if span > window:
                    break
                count = j - i + 1
                minutes = max(1, _round_minutes(span))
                return f"Rapid withdrawals: {count} transactions within {minutes} minutes"
        return None

    def validate_password(self, password) -> PasswordCheck:
        return validate_password(password)


def validate_password(password) -> PasswordCheck:
    """Evaluate a password against the strength rules.

    Every rule is checked; all failures are reported.

    Args:
        password: Candidate password

    Returns:
        PasswordCheck listing the failed rules
    """
    if not isinstance(password, str):
        return PasswordCheck(valid=False, reasons=("Password must be a string",))

    reasons = []
    if len(password) < MIN_PASSWORD_LENGTH:
        reasons.append(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        reasons.append("Password must contain an uppercase letter")
    if not re.search(r"[a-z]", password):
        reasons.append("Password must contain a lowercase letter")
    if not re.search(r"[0-9]", password):
        reasons.append("Password must contain a number")
    if not re.search(r"[^A-Za-z0-9]", password):
        reasons.append("Password must contain a special character")

    lowered = password.lower()
    if lowered in COMMON_PASSWORDS or "password" in lowered:
        reasons.append("Password is too common")

    return PasswordCheck(valid=not reasons, reasons=tuple(reasons))


def _round_minutes(span: timedelta) -> int:
    # Half-up, so a 2.5 minute span reports 3
    minutes = Decimal(str(span.total_seconds())) / 60
    return int(minutes.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _alert_kind(txn: Transaction) -> str:
    if txn.type in (TransactionType.TRANSFER_OUT, TransactionType.TRANSFER_IN):
        return "transfer"
    if txn.type == TransactionType.WITHDRAWAL:
        return "withdrawal"
    if txn.type == TransactionType.DEPOSIT:
        return "deposit"
    return "transaction"


def _plain_amount(amount: Decimal) -> str:
    # 15000.0 renders as 15000, 15000.50 as 15000.5
    return f"{amount.normalize():f}"
