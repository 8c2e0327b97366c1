"""Decimal arithmetic for wagers, odds and winnings.

All compounding runs in MONEY_CONTEXT. Its precision is wide enough that
every product the progression engine can form is exact: a start wager has at
most 12 digits and odds at most 4, so 365 multiplications stay below 1500
significant digits. Values are stored as plain decimal strings and parsed back
without loss.
"""
from decimal import Decimal, Context, InvalidOperation, ROUND_HALF_EVEN, ROUND_HALF_UP
from typing import Union

from marathon.utilities.config import CURRENCY_SYMBOL

MONEY_CONTEXT = Context(prec=2000, rounding=ROUND_HALF_EVEN)
ZERO = Decimal(0)

Number = Union[Decimal, int, str]


def to_decimal(value: Number) -> Decimal:
    """Parse a stored or user supplied value into a Decimal.

    Floats are rejected: they would smuggle binary rounding error into the
    progression.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Unsupported numeric type: {type(value).__name__}")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Not a decimal number: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Not a finite decimal number: {value!r}")
    return result


def multiply(a: Decimal, b: Decimal) -> Decimal:
    return MONEY_CONTEXT.multiply(a, b)


def compound(start: Decimal, odds: Decimal, periods: int) -> Decimal:
    """start * odds ** periods, computed exactly."""
    if periods < 0:
        raise ValueError("periods must be >= 0")
    return MONEY_CONTEXT.multiply(start, MONEY_CONTEXT.power(odds, periods))


def total(values) -> Decimal:
    result = ZERO
    for value in values:
        result = MONEY_CONTEXT.add(result, value)
    return result


def to_storage(value: Decimal) -> str:
    """Plain (never scientific) string form used in the JSON files."""
    return format(value, "f")


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> int:
    """round(100 * part / whole), halves rounded up; 0 when whole is 0."""
    if whole == 0:
        return 0
    return round_half_up(Decimal(100 * part) / Decimal(whole))


def format_money(value: Decimal, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol} {value:,.2f}"
