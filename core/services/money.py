"""
Money Utilities - Decimal operations for cart prices.

Prices are kept as Decimal from the catalog snapshot to the stored payload;
floats appear only at the HTTP boundary.
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[str, int, float, Decimal]

# Default precision for money operations (2 decimal places)
MONEY_PRECISION = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a value to Decimal.

    Floats go through their string representation so 10.1 stays 10.1.

    Raises:
        InvalidOperation: value is not a number (NaN and infinities included)
    """
    if isinstance(value, bool):
        raise InvalidOperation(f"not a monetary value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except (InvalidOperation, ValueError) as e:
            raise InvalidOperation(f"not a monetary value: {value!r}") from e
    else:
        raise InvalidOperation(f"not a monetary value: {value!r}")
    if not result.is_finite():
        raise InvalidOperation(f"not a monetary value: {value!r}")
    return result


def round_money(value: Number) -> Decimal:
    """Round monetary value to cents."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Number, factor: Number) -> Decimal:
    """Multiplication of a monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def line_total(unit_price: Number, quantity: int) -> Decimal:
    """Price of `quantity` units, rounded to cents."""
    return round_money(multiply(unit_price, quantity))


def to_float(value: Number) -> float:
    """
    Convert Decimal to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))
