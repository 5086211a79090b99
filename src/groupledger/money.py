"""Integer-cent conversion helpers shared by the ledger engine."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(amount: Decimal | int | str) -> int:
    """
    Convert a decimal currency amount to integer cents.
    Uses ROUND_HALF_UP for consistency.

    Args:
        amount: Currency amount (Decimal, int or numeric string)

    Returns:
        Amount in cents (integer)
    """
    cents = Decimal(amount) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-decimal Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


def round_percentage(value: Decimal) -> Decimal:
    """Round a percentage to two decimal places for display."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
