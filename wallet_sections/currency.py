"""Native-currency display formatting for decimal-string totals."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal

from .arithmetic import Amount, to_decimal
from .errors import UnsupportedCurrency

_DISPLAY = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


@dataclass(frozen=True)
class NativeCurrency:
    """Display settings for a native currency."""

    code: str
    symbol: str
    decimals: int = 2
    alignment: str = "left"


NATIVE_CURRENCIES: dict[str, NativeCurrency] = {
    "USD": NativeCurrency("USD", "$"),
    "EUR": NativeCurrency("EUR", "€"),
    "GBP": NativeCurrency("GBP", "£"),
    "AUD": NativeCurrency("AUD", "A$"),
    "CNY": NativeCurrency("CNY", "¥"),
    "JPY": NativeCurrency("JPY", "¥", decimals=0),
    "KRW": NativeCurrency("KRW", "₩", decimals=0),
    "RUB": NativeCurrency("RUB", "₽", alignment="right"),
    "INR": NativeCurrency("INR", "₹"),
    "ETH": NativeCurrency("ETH", "Ξ", decimals=4),
}


def get_native_currency(code: str) -> NativeCurrency:
    """Look up a currency by code (case-insensitive).

    Raises:
        UnsupportedCurrency: If the currency is not supported.
    """
    try:
        return NATIVE_CURRENCIES[str(code).upper()]
    except KeyError:
        raise UnsupportedCurrency(code) from None


def convert_amount_to_native_display(amount: Amount | None, code: str) -> str:
    """Format *amount* for display, e.g. ``"1234.5"`` → ``"$1,234.50"``."""
    currency = get_native_currency(code)
    value = to_decimal(amount, none_as_zero=True)
    quantum = Decimal(1).scaleb(-currency.decimals)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP, context=_DISPLAY)
    sign = "-" if rounded < 0 else ""
    digits = f"{rounded.copy_abs():,.{currency.decimals}f}"
    if currency.alignment == "right":
        return f"{sign}{digits} {currency.symbol}"
    return f"{sign}{currency.symbol}{digits}"


__all__ = [
    "NATIVE_CURRENCIES",
    "NativeCurrency",
    "convert_amount_to_native_display",
    "get_native_currency",
]
