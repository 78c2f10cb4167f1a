"""Configuration management for minibank."""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal, InvalidOperation

ENV_PREFIX = "MINIBANK_"


class ConfigurationError(ValueError):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class LedgerPolicy:
    """Business rules applied by the ledger and security services."""

    minimum_opening_deposit: Decimal = Decimal("50")
    overdraft_penalty: Decimal = Decimal("5")
    interest_threshold: Decimal = Decimal("500")
    monthly_interest_rate: Decimal = Decimal("0.00167")
    daily_withdrawal_limit: Decimal = Decimal("500")
    high_value_threshold: Decimal = Decimal("10000")
    small_withdrawal_limit: Decimal = Decimal("500")
    rapid_withdrawal_count: int = 3
    rapid_withdrawal_window: timedelta = timedelta(minutes=5)

    @classmethod
    def from_env(cls) -> "LedgerPolicy":
        """Create a policy from MINIBANK_* environment variables."""
        defaults = cls()
        return cls(
            minimum_opening_deposit=_env_decimal(
                "MINIMUM_OPENING_DEPOSIT", defaults.minimum_opening_deposit
            ),
            overdraft_penalty=_env_decimal("OVERDRAFT_PENALTY", defaults.overdraft_penalty),
            interest_threshold=_env_decimal("INTEREST_THRESHOLD", defaults.interest_threshold),
            monthly_interest_rate=_env_decimal(
                "MONTHLY_INTEREST_RATE", defaults.monthly_interest_rate
            ),
            daily_withdrawal_limit=_env_decimal(
                "DAILY_WITHDRAWAL_LIMIT", defaults.daily_withdrawal_limit
            ),
            high_value_threshold=_env_decimal(
                "HIGH_VALUE_THRESHOLD", defaults.high_value_threshold
            ),
            small_withdrawal_limit=_env_decimal(
                "SMALL_WITHDRAWAL_LIMIT", defaults.small_withdrawal_limit
            ),
            rapid_withdrawal_count=_env_int(
                "RAPID_WITHDRAWAL_COUNT", defaults.rapid_withdrawal_count
            ),
            rapid_withdrawal_window=timedelta(
                minutes=_env_int(
                    "RAPID_WITHDRAWAL_WINDOW_MINUTES",
                    int(defaults.rapid_withdrawal_window.total_seconds() // 60),
                )
            ),
        )


@dataclass
class AppConfig:
    """Main configuration for minibank."""

    policy: LedgerPolicy = field(default_factory=LedgerPolicy)
    log_level: str = "WARNING"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        return cls(
            policy=LedgerPolicy.from_env(),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "WARNING"),
            log_format=os.getenv(f"{ENV_PREFIX}LOG_FORMAT", "standard"),
        )


def _env_decimal(name: str, default: Decimal) -> Decimal:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got '{raw}'")
    if not value.is_finite():
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a finite number, got '{raw}'")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got '{raw}'")
