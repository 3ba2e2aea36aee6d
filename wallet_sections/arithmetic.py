"""Exact arithmetic over decimal-string amounts — no binary floats."""
from __future__ import annotations

import re
from collections.abc import Iterable
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, Inexact

from .errors import InvalidAmount

Amount = str | int | Decimal

# Plain notation only: "12", "-0.5", "+3.", ".25".
_AMOUNT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")

# Maximal precision makes add/multiply exact; Inexact is trapped regardless.
_EXACT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=[Inexact])


def to_decimal(value: Amount | None, *, none_as_zero: bool = False) -> Decimal:
    """Parse an amount into a Decimal without touching float.

    Args:
        value: Decimal string, int or Decimal.
        none_as_zero: Treat ``None`` as ``"0"`` instead of rejecting it.

    Raises:
        InvalidAmount: If the value is not a finite plain decimal number.
    """
    if value is None:
        if none_as_zero:
            return Decimal(0)
        raise InvalidAmount(value)
    if isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidAmount(value)
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        text = value.strip()
        if not _AMOUNT_RE.match(text):
            raise InvalidAmount(value)
        return Decimal(text)
    raise InvalidAmount(value)


def is_valid_amount(value: object) -> bool:
    """Return True if *value* would be accepted by :func:`to_decimal`."""
    try:
        to_decimal(value)  # type: ignore[arg-type]
    except InvalidAmount:
        return False
    return True


def to_amount_string(value: Decimal) -> str:
    """Render a Decimal in canonical plain notation."""
    if value.is_zero():
        value = value.copy_abs()
    return format(value, "f")


def add(a: Amount | None, b: Amount | None) -> str:
    """Exact sum of two amounts; a missing operand counts as zero."""
    result = _EXACT.add(
        to_decimal(a, none_as_zero=True), to_decimal(b, none_as_zero=True)
    )
    return to_amount_string(result)


def multiply(a: Amount, b: Amount) -> str:
    """Exact product of two amounts."""
    return to_amount_string(_EXACT.multiply(to_decimal(a), to_decimal(b)))


def sum_amounts(values: Iterable[Amount | None]) -> str:
    """Fold :func:`add` over *values*, starting from ``"0"``."""
    total = "0"
    for value in values:
        total = add(total, value)
    return total


def compare(a: Amount, b: Amount) -> int:
    """Return -1, 0 or 1 as *a* is less than, equal to or greater than *b*."""
    return int(to_decimal(a).compare(to_decimal(b)))


__all__ = [
    "Amount",
    "add",
    "compare",
    "is_valid_amount",
    "multiply",
    "sum_amounts",
    "to_amount_string",
    "to_decimal",
]
