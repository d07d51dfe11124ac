"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_SYMBOLS = re.compile(r"[₹$€£¥]|\bINR\b|\bRs\.?", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount into a Decimal.

    Accepts plain numbers and the forms produced by ``format_money``:
    - "1500"
    - "1,500.50"
    - "₹1,500.50"
    - "-₹300.00"
    - "Rs. 250"

    The sign and range are not checked here; the ledger decides which
    amounts are acceptable for each operation.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = _CURRENCY_SYMBOLS.sub("", amount_str.strip())
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str.strip()}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number (got '{amount_str.strip()}')")
    return amount
