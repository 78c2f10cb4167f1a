"""Account registry domain service."""

import logging
import random
from decimal import Decimal
from typing import Iterator, Optional

from minibank.config import LedgerPolicy
from minibank.domain import errors
from minibank.domain.clock import Clock, read_clock, utc_now
from minibank.domain.entities import Account, RegistryTotals
from minibank.domain.errors import ValidationError
from minibank.domain.validators import require_non_empty_string, require_number

logger = logging.getLogger(__name__)

ACCOUNT_NUMBER_MIN = 10**9
ACCOUNT_NUMBER_MAX = 10**10 - 1


class AccountRegistry:
    """Ordered in-memory collection of accounts.

    The registry owns account creation and account-number uniqueness. It is
    constructed by the caller and passed to whoever needs it; accounts it
    returns are live references, so later ledger operations are visible
    through any handle.
    """

    def __init__(
        self,
        policy: Optional[LedgerPolicy] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize account registry.

        Args:
            policy: Business rules (defaults to LedgerPolicy())
            clock: Clock used for creation timestamps
            rng: Random source for account numbers
        """
        self.policy = policy or LedgerPolicy()
        self.clock = clock or utc_now
        self.rng = rng or random.Random()
        self._accounts: list[Account] = []
        self._numbers: set[str] = set()

    def create_account(self, first_name: str, last_name: str, initial_deposit) -> Account:
        """Create and register a new account.

        Args:
            first_name: Account holder's first name
            last_name: Account holder's last name
            initial_deposit: Opening balance, at least the policy minimum

        Returns:
            The newly created account

        Raises:
            ValidationError: If a name is blank or the deposit is invalid
        """
        first = require_non_empty_string(first_name, "First name")
        last = require_non_empty_string(last_name, "Last name")
        deposit = require_number(initial_deposit, "Initial deposit")

        minimum = self.policy.minimum_opening_deposit
        if deposit < minimum:
            raise ValidationError(errors.minimum_deposit(minimum))

        account = Account(
            account_number=self._generate_account_number(),
            first_name=first,
            last_name=last,
            balance=deposit,
            created_at=read_clock(self.clock),
        )
        self._accounts.append(account)
        self._numbers.add(account.account_number)

        logger.info(
            "Opened account %s for %s with %s",
            account.account_number,
            account.full_name,
            deposit,
            extra={"account_number": account.account_number},
        )
        return account

    def _generate_account_number(self) -> str:
        while True:
            candidate = str(self.rng.randint(ACCOUNT_NUMBER_MIN, ACCOUNT_NUMBER_MAX))
            if candidate not in self._numbers:
                return candidate

    def list_accounts(self) -> tuple[Account, ...]:
        """Return a snapshot of all accounts in creation order."""
        return tuple(self._accounts)

    def get_account(self, account_number: str) -> Optional[Account]:
        """Get account by account number.

        Returns:
            Account or None if not found
        """
        for account in self._accounts:
            if account.account_number == account_number:
                return account
        return None

    def find_by_holder(self, name: str) -> list[Account]:
        """Find accounts whose holder name matches, ignoring case.

        ``name`` may be a first name, a last name or the full name.
        """
        needle = name.strip().lower()
        if not needle:
            return []
        return [
            account
            for account in self._accounts
            if needle
            in (
                account.first_name.lower(),
                account.last_name.lower(),
                account.full_name.lower(),
            )
        ]

    def totals(self) -> RegistryTotals:
        """Return the account count and the sum of all balances."""
        return RegistryTotals(
            account_count=len(self._accounts),
            total_balance=sum((account.balance for account in self._accounts), Decimal("0")),
        )

    def __len__(self) -> int:
        return len(self._accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(tuple(self._accounts))

    def __contains__(self, account_number: object) -> bool:
        return account_number in self._numbers
