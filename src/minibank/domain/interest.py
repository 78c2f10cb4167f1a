"""Interest accrual domain service."""

import logging
from typing import Optional

from minibank.config import LedgerPolicy
from minibank.domain.clock import Clock, read_clock, utc_now
from minibank.domain.entities import Account, InterestResult, Transaction, TransactionType

logger = logging.getLogger(__name__)


class InterestService:
    """Service for applying simple monthly interest."""

    def __init__(self, policy: Optional[LedgerPolicy] = None, clock: Optional[Clock] = None):
        """Initialize interest service.

        Args:
            policy: Business rules (defaults to LedgerPolicy())
            clock: Clock used to stamp interest postings
        """
        self.policy = policy or LedgerPolicy()
        self.clock = clock or utc_now

    def accrue_interest(self, account: Account) -> InterestResult:
        """Apply one period of interest to an account.

        Accounts at or below the policy threshold are left untouched and the
        result carries an explanatory message instead of an interest amount.
        Each call applies a single period on the current balance, so repeated
        calls compound. No rounding is performed.

        Args:
            account: Account to credit

        Returns:
            InterestResult with the resulting balance
        """
        threshold = self.policy.interest_threshold
        if account.balance <= threshold:
            return InterestResult(
                account_number=account.account_number,
                balance=account.balance,
                message=(
                    f"Balance ${account.balance:.2f} is not above ${threshold}; "
                    "no interest applied."
                ),
            )

        interest = account.balance * self.policy.monthly_interest_rate
        account.transactions.append(
            Transaction(
                type=TransactionType.INTEREST,
                amount=interest,
                date=read_clock(self.clock),
                new_balance=account.balance + interest,
            )
        )
        account.balance += interest

        logger.info(
            "Posted interest %s to %s",
            interest,
            account.account_number,
            extra={"account_number": account.account_number},
        )
        return InterestResult(
            account_number=account.account_number,
            balance=account.balance,
            interest_applied=interest,
        )
