"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class FrozenAccountError(DomainError):
    """Operation attempted on a frozen account through a guarded entry point."""


class DailyLimitExceededError(DomainError):
    """Same-day withdrawals would exceed the daily cap."""


def must_be_string(field_name: str) -> str:
    """Return message for a non-string value."""
    return f"{field_name} must be a string."


def is_required(field_name: str) -> str:
    """Return message for a blank value."""
    return f"{field_name} is required."


def must_be_number(field_name: str) -> str:
    """Return message for a non-numeric value."""
    return f"{field_name} must be a number."


def must_be_positive(field_name: str) -> str:
    """Return message for a zero or negative value."""
    return f"{field_name} must be greater than zero."


def minimum_deposit(minimum) -> str:
    """Return message for an opening deposit under the minimum."""
    return f"The initial deposit must be at least ${minimum}."


def invalid_date(value) -> str:
    """Return message for an unparsable date boundary."""
    return f"Invalid date: {value}"


def account_frozen() -> str:
    """Return message for a blocked operation on a frozen account."""
    return "Account is frozen. Transactions are not allowed."


def daily_limit_exceeded(limit) -> str:
    """Return message when the daily withdrawal cap would be exceeded."""
    return f"Daily withdrawal limit exceeded (${limit} max)"
