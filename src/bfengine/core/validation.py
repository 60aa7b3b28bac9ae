"""Argument guards shared by the calculators."""

import math
from numbers import Real

from bfengine.core.exceptions import InvalidInputError


def require_amount(name: str, value: float, allow_zero: bool = True) -> float:
    """Validate a currency amount and return it as a float.

    Args:
        name: Argument name used in the error
        value: Amount to check
        allow_zero: Whether 0 is acceptable

    Returns:
        The amount as a float

    Raises:
        InvalidInputError: If the amount is not a finite, non-negative number
            (or zero when ``allow_zero`` is False)
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number", field=name, value=value)
    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidInputError(f"{name} must be finite", field=name, value=value)
    if amount < 0:
        raise InvalidInputError(f"{name} cannot be negative", field=name, value=value)
    if amount == 0 and not allow_zero:
        raise InvalidInputError(f"{name} must be positive", field=name, value=value)
    return amount


def require_finite(name: str, value: float) -> float:
    """Validate that a value is a finite number (sign is not checked)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number", field=name, value=value)
    number = float(value)
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite", field=name, value=value)
    return number
