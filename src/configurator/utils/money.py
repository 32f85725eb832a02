"""Currency helpers.

All amounts are Decimal; rounding uses plain (half-up) currency rounding.
"""

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def round_currency(amount: Decimal) -> Decimal:
    """Round an amount to two decimal places, halves away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal) -> str:
    """Format an amount as US dollars (e.g. "$1,299.99")."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(round_currency(amount)):,.2f}"
