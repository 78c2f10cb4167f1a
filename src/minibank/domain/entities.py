"""Domain model entities for minibank.

Accounts are mutable records shared by reference between the registry and
the services; transactions and status changes are immutable once appended
to an account's history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from minibank.utils.date_parser import format_timestamp


class TransactionType(str, Enum):
    """Kinds of ledger entries."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    OVERDRAFT_ATTEMPT = "OVERDRAFT_ATTEMPT"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"
    INTEREST = "INTEREST"


class AccountStatus(str, Enum):
    """Account access states."""

    ACTIVE = "ACTIVE"
    FROZEN = "FROZEN"


class StatusAction(str, Enum):
    """Status transitions recorded in an account's status history."""

    FREEZE = "FREEZE"
    UNFREEZE = "UNFREEZE"


@dataclass(frozen=True)
class Transaction:
    """Ledger entry appended to an account's history."""

    type: TransactionType
    amount: Decimal
    date: datetime
    new_balance: Decimal
    penalty: Optional[Decimal] = None
    to_account: Optional[str] = None
    from_account: Optional[str] = None

    @property
    def balance_effect(self) -> Decimal:
        """Signed change this entry applied to the balance."""
        if self.type == TransactionType.OVERDRAFT_ATTEMPT:
            return -(self.penalty or Decimal("0"))
        if self.type in (TransactionType.WITHDRAWAL, TransactionType.TRANSFER_OUT):
            return -self.amount
        return self.amount

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type.value}
        if self.to_account is not None:
            data["to"] = self.to_account
        if self.from_account is not None:
            data["from"] = self.from_account
        data["amount"] = self.amount
        data["date"] = format_timestamp(self.date)
        if self.penalty is not None:
            data["penalty"] = self.penalty
        data["newBalance"] = self.new_balance
        return data


@dataclass(frozen=True)
class StatusChange:
    """Freeze or unfreeze event in an account's status history."""

    action: StatusAction
    by: str
    date: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "by": self.by,
            "date": format_timestamp(self.date),
        }


@dataclass(frozen=True)
class AccountSummary:
    """Balance snapshot returned by withdrawals and transfers."""

    account_number: str
    balance: Decimal
    transactions: tuple[Transaction, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountNumber": self.account_number,
            "balance": self.balance,
            "transactions": [txn.to_dict() for txn in self.transactions],
        }


@dataclass
class Account:
    """Bank account domain entity."""

    account_number: str
    first_name: str
    last_name: str
    balance: Decimal
    created_at: datetime
    transactions: list[Transaction] = field(default_factory=list)
    status: AccountStatus = AccountStatus.ACTIVE
    status_history: list[StatusChange] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_frozen(self) -> bool:
        return self.status == AccountStatus.FROZEN

    def summary(self) -> AccountSummary:
        """Return an immutable snapshot of balance and history."""
        return AccountSummary(
            account_number=self.account_number,
            balance=self.balance,
            transactions=tuple(self.transactions),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountNumber": self.account_number,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "balance": self.balance,
            "createdAt": format_timestamp(self.created_at),
            "status": self.status.value,
            "transactions": [txn.to_dict() for txn in self.transactions],
            "statusHistory": [change.to_dict() for change in self.status_history],
        }


@dataclass(frozen=True)
class InterestResult:
    """Outcome of an interest accrual.

    ``interest_applied`` is None when the balance did not qualify, in which
    case ``message`` explains why.
    """

    account_number: str
    balance: Decimal
    interest_applied: Optional[Decimal] = None
    message: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.interest_applied is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "accountNumber": self.account_number,
            "balance": self.balance,
        }
        if self.interest_applied is not None:
            data["interestApplied"] = self.interest_applied
        if self.message is not None:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class StatusSummary:
    """Account status after a freeze/unfreeze request."""

    account_number: str
    status: AccountStatus
    status_history: tuple[StatusChange, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "accountNumber": self.account_number,
            "status": self.status.value,
            "statusHistory": [change.to_dict() for change in self.status_history],
        }


@dataclass(frozen=True)
class PasswordCheck:
    """Password strength evaluation."""

    valid: bool
    reasons: tuple[str, ...] = ()

    @property
    def score(self) -> int:
        """Strength on a 0-5 scale, one point per satisfied rule."""
        if self.valid:
            return 5
        return max(0, 5 - len(self.reasons))

    def to_dict(self) -> dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "reasons": list(self.reasons)}


@dataclass(frozen=True)
class SuspiciousActivityReport:
    """Alerts raised by the suspicious-activity scan."""

    alerts: tuple[str, ...] = ()

    @property
    def is_suspicious(self) -> bool:
        return len(self.alerts) > 0

    def to_dict(self) -> dict[str, Any]:
        return {"isSuspicious": self.is_suspicious, "alerts": list(self.alerts)}


@dataclass(frozen=True)
class RegistryTotals:
    """Aggregate figures across every account in a registry."""

    account_count: int
    total_balance: Decimal
