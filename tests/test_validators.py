"""Tests for validation primitives."""

from decimal import Decimal

import pytest

from minibank.domain.errors import DomainError, ValidationError
from minibank.domain.validators import (
    require_non_empty_string,
    require_number,
    require_positive_number,
)


def test_non_empty_string_is_trimmed():
    assert require_non_empty_string("  John  ", "First name") == "John"


def test_non_string_rejected():
    with pytest.raises(ValidationError, match="First name must be a string."):
        require_non_empty_string(42, "First name")


def test_blank_string_rejected():
    with pytest.raises(ValidationError, match="First name is required."):
        require_non_empty_string("   ", "First name")


@pytest.mark.parametrize(
    "value, expected",
    [
        (10, Decimal("10")),
        (0.1, Decimal("0.1")),
        (Decimal("12.34"), Decimal("12.34")),
    ],
)
def test_positive_number_returns_decimal(value, expected):
    assert require_positive_number(value, "Amount") == expected


@pytest.mark.parametrize("value", ["10", None, True, float("nan"), float("inf"), Decimal("NaN")])
def test_non_numbers_rejected(value):
    with pytest.raises(ValidationError, match="Amount must be a number."):
        require_positive_number(value, "Amount")


@pytest.mark.parametrize("value", [0, -1, Decimal("-0.01")])
def test_non_positive_rejected(value):
    with pytest.raises(ValidationError, match="Amount must be greater than zero."):
        require_positive_number(value, "Amount")


def test_require_number_allows_negative():
    assert require_number(-5, "Initial deposit") == Decimal("-5")


def test_validation_error_is_value_error():
    """Domain errors stay catchable as ValueError."""
    with pytest.raises(ValueError):
        require_non_empty_string("", "Action")
    assert issubclass(ValidationError, DomainError)
