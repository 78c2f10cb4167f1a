"""Factory functions for wiring the domain services together."""

import random
from dataclasses import dataclass
from typing import Optional

from minibank.config import LedgerPolicy
from minibank.domain.clock import Clock, utc_now
from minibank.domain.interest import InterestService
from minibank.domain.ledger import LedgerService
from minibank.domain.registry import AccountRegistry
from minibank.domain.security import SecurityService


@dataclass
class Bank:
    """Registry and services sharing one policy and one clock."""

    registry: AccountRegistry
    ledger: LedgerService
    interest: InterestService
    security: SecurityService


def create_bank(
    policy: Optional[LedgerPolicy] = None,
    clock: Optional[Clock] = None,
    seed: Optional[int] = None,
) -> Bank:
    """Create a Bank with an empty registry.

    Args:
        policy: Business rules. If None, defaults to LedgerPolicy()
        clock: Clock for all timestamps. If None, uses the system UTC clock
        seed: Seed for account-number generation, for reproducible runs

    Returns:
        Bank instance
    """
    policy = policy or LedgerPolicy()
    clock = clock or utc_now

    ledger = LedgerService(policy=policy, clock=clock)
    return Bank(
        registry=AccountRegistry(policy=policy, clock=clock, rng=random.Random(seed)),
        ledger=ledger,
        interest=InterestService(policy=policy, clock=clock),
        security=SecurityService(ledger=ledger, policy=policy, clock=clock),
    )
