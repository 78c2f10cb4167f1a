"""Domain layer for minibank application."""

from minibank.domain.registry import AccountRegistry
from minibank.domain.ledger import LedgerService
from minibank.domain.interest import InterestService
from minibank.domain.security import SecurityService, validate_password

__all__ = [
    "AccountRegistry",
    "LedgerService",
    "InterestService",
    "SecurityService",
    "validate_password",
]
