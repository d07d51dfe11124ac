"""Monetary value helpers."""

from decimal import Decimal, ROUND_HALF_UP

DEFAULT_CURRENCY_SYMBOL = "₹"

CENT = Decimal("0.01")

# Largest amount accepted for a balance, deposit, withdrawal or overdraft
# limit; balances must fit the Numeric(18, 2) storage columns.
MAX_AMOUNT = Decimal("999999999999.99")


def as_decimal(value) -> Decimal:
    """Convert an int or float amount to Decimal; Decimals pass through.

    Floats go through ``str`` so ``12.5`` becomes ``Decimal("12.5")``.

    Raises:
        TypeError: If value is not a number
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Amount must be a number, got {type(value).__name__}")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_cents(amount: Decimal) -> Decimal:
    """Round an amount half-up to two decimal places."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def has_cent_precision(amount: Decimal) -> bool:
    """Return True if the amount has no digits beyond the cent."""
    return amount == amount.quantize(CENT)


def format_money(amount: Decimal, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format an amount for display.

    Uses a fixed two decimal places and grouped thousands, with the sign
    placed before the currency symbol:

    - ``Decimal("1234.5")`` -> ``"₹1,234.50"``
    - ``Decimal("-300")`` -> ``"-₹300.00"``
    """
    rounded = to_cents(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"
