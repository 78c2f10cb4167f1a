"""Validation primitives shared by the domain services."""

from decimal import Decimal, InvalidOperation
from numbers import Real

from minibank.domain import errors
from minibank.domain.errors import ValidationError


def require_non_empty_string(value, field_name: str) -> str:
    """Validate that a value is a non-empty string after trimming.

    Args:
        value: Value to validate
        field_name: Field name used in error messages

    Returns:
        The trimmed string

    Raises:
        ValidationError: If value is not a string or is blank
    """
    if not isinstance(value, str):
        raise ValidationError(errors.must_be_string(field_name))

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(errors.is_required(field_name))

    return trimmed


def require_number(value, field_name: str) -> Decimal:
    """Validate that a value is a finite number and return it as a Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        ValidationError: If value is not a finite real number
    """
    if isinstance(value, bool):
        raise ValidationError(errors.must_be_number(field_name))

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, Real):
        try:
            amount = Decimal(str(float(value)))
        except (InvalidOperation, ValueError, OverflowError):
            raise ValidationError(errors.must_be_number(field_name))
    else:
        raise ValidationError(errors.must_be_number(field_name))

    if not amount.is_finite():
        raise ValidationError(errors.must_be_number(field_name))
    return amount


def require_positive_number(value, field_name: str) -> Decimal:
    """Validate that a value is a finite number greater than zero.

    Args:
        value: Value to validate
        field_name: Field name used in error messages

    Returns:
        The value as a Decimal

    Raises:
        ValidationError: If value is not a number or is not positive
    """
    amount = require_number(value, field_name)
    if amount <= 0:
        raise ValidationError(errors.must_be_positive(field_name))
    return amount
