"""Quantity tier selection shared by product and attribute value tier prices."""

from typing import Iterable

from .value_objects import TierBreak


def select_tier(breaks: Iterable[TierBreak], quantity: int) -> TierBreak | None:
    """Pick the tier that applies at a quantity.

    The tier with the largest min_quantity not above the requested quantity
    wins. Among breaks sharing that min_quantity the lowest price wins.

    Returns:
        The applicable TierBreak, or None when the quantity is below every break.
    """
    eligible = [b for b in breaks if b.min_quantity <= quantity]
    if not eligible:
        return None

    threshold = max(b.min_quantity for b in eligible)
    return min(
        (b for b in eligible if b.min_quantity == threshold),
        key=lambda b: b.price.amount,
    )


def lowest_tier(breaks: Iterable[TierBreak]) -> TierBreak | None:
    """Cheapest break at any quantity, smaller quantity first on equal price."""
    breaks = list(breaks)
    if not breaks:
        return None
    return min(breaks, key=lambda b: (b.price.amount, b.min_quantity))
