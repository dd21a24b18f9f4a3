"""Tests for quantity tier selection."""
from decimal import Decimal

from django_pricing.money import Money
from django_pricing.tiers import lowest_tier, select_tier
from django_pricing.value_objects import TierBreak


def _break(quantity, amount):
    return TierBreak(quantity, Money(Decimal(amount), "USD"))


class TestSelectTier:
    """Largest min_quantity not above the quantity wins."""

    def test_no_breaks(self):
        assert select_tier([], 10) is None

    def test_quantity_below_every_break(self):
        assert select_tier([_break(5, "8.00")], 4) is None

    def test_exact_threshold_applies(self):
        assert select_tier([_break(5, "8.00")], 5).price == Money("8.00", "USD")

    def test_largest_eligible_threshold_wins(self):
        breaks = [_break(5, "8.00"), _break(10, "7.00"), _break(20, "6.00")]
        assert select_tier(breaks, 15).min_quantity == 10
        assert select_tier(breaks, 20).min_quantity == 20

    def test_higher_threshold_wins_even_if_pricier(self):
        """Tier order decides, not the price, across thresholds."""
        breaks = [_break(5, "7.00"), _break(10, "7.50")]
        assert select_tier(breaks, 12).price == Money("7.50", "USD")

    def test_equal_thresholds_pick_lowest_price(self):
        breaks = [_break(5, "8.00"), _break(5, "7.25"), _break(5, "7.90")]
        assert select_tier(breaks, 6).price == Money("7.25", "USD")

    def test_accepts_generators(self):
        assert select_tier((b for b in [_break(1, "3.00")]), 1) is not None


class TestLowestTier:
    """Cheapest break regardless of quantity."""

    def test_empty(self):
        assert lowest_tier([]) is None

    def test_cheapest_wins(self):
        breaks = [_break(5, "8.00"), _break(50, "6.00"), _break(10, "7.00")]
        assert lowest_tier(breaks).min_quantity == 50

    def test_equal_prices_prefer_smaller_quantity(self):
        breaks = [_break(10, "6.00"), _break(5, "6.00")]
        assert lowest_tier(breaks).min_quantity == 5
