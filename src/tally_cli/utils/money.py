"""Money token helpers."""

import re
from decimal import Decimal, ROUND_HALF_UP

MONEY_RE = re.compile(r"^\$(\d+)(\.\d{2})?$")

CENTS = Decimal("0.01")


def is_money(token: str) -> bool:
    """Check that a token looks like $30 or $30.00."""
    return bool(MONEY_RE.match(token))


def money_to_value(token: str) -> Decimal:
    """Convert a money token to a two-decimal value.
    
    Raises:
        ValueError: If the token is not a money token
    """
    if not is_money(token):
        raise ValueError(f"Not a money amount: {token!r}")
    return Decimal(token[1:]).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Render a value as $30.00 (or -$30.00 for a negative balance)."""
    amount = abs(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${amount}"
