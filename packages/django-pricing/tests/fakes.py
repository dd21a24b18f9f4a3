"""In-memory pricing collaborators for engine and service tests."""

from decimal import Decimal

from django_pricing.money import Money
from django_pricing.providers import DiscountMatcher, ExchangeRateProvider, TierPriceResolver
from django_pricing.tiers import lowest_tier, select_tier
from django_pricing.value_objects import TierBreak


class FakeTierPriceResolver(TierPriceResolver):
    """Tier schedules keyed by product / attribute value pk."""

    def __init__(self):
        self.product_tiers = {}
        self.attribute_tiers = {}
        self.calls = []

    def add_tier(self, product, min_quantity, amount):
        self.product_tiers.setdefault(product.pk, []).append(
            TierBreak(min_quantity, Money(amount, product.currency))
        )

    def add_attribute_tier(self, value, min_quantity, amount, currency="USD"):
        self.attribute_tiers.setdefault(value.pk, []).append(
            TierBreak(min_quantity, Money(amount, currency))
        )

    async def resolve_tier_price(self, product, quantity):
        self.calls.append(("product", product.pk, quantity))
        tier = select_tier(self.product_tiers.get(product.pk, []), quantity)
        return tier.price if tier else None

    async def resolve_attribute_value_tier_price(self, attribute_value, quantity):
        self.calls.append(("attribute", attribute_value.pk, quantity))
        tier = select_tier(self.attribute_tiers.get(attribute_value.pk, []), quantity)
        return tier.price if tier else None

    async def resolve_lowest_tier_price(self, product):
        self.calls.append(("lowest", product.pk))
        tier = lowest_tier(self.product_tiers.get(product.pk, []))
        return tier.price if tier else None


class FakeDiscountMatcher(DiscountMatcher):
    """Takes a fixed reduction off every price, without flooring."""

    def __init__(self, reduction=None):
        self.reduction = reduction
        self.calls = []

    async def find_best_discount(self, product, customer, quantity, price):
        self.calls.append((product.pk, customer, quantity, price))
        if self.reduction is None:
            return None
        return price - Money(Decimal(str(self.reduction)), price.currency)


class FakeExchangeRateProvider(ExchangeRateProvider):
    """Every pair converts at 1:1."""

    async def get_rate(self, source, target):
        return Decimal("1")
