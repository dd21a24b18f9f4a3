"""Collaborators consumed by the price calculation engine.

Each contract is an abstract base class with async lookups; the engine only
talks to these interfaces. Model* implementations read the storage models
in models.py and translate storage failures into CollaboratorUnavailable.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal

from django.db import DatabaseError

from . import conf
from .exceptions import CollaboratorUnavailable, ConversionUnavailable
from .models import AttributeValueTierPrice, Currency, Discount, TierPrice
from .money import Money, Number
from .tiers import lowest_tier, select_tier
from .value_objects import TierBreak

logger = logging.getLogger(__name__)


async def _fetch(queryset, what: str) -> list:
    try:
        return [row async for row in queryset]
    except DatabaseError as e:
        logger.warning(f"Pricing storage unavailable while loading {what}: {e}")
        raise CollaboratorUnavailable(f"Could not load {what}") from e


# =============================================================================
# Contracts
# =============================================================================

class TierPriceResolver(ABC):
    """Resolves quantity tier prices for products and attribute values."""

    @abstractmethod
    async def resolve_tier_price(self, product, quantity: int) -> Money | None:
        """Tier unit price at this quantity, or None when no tier applies."""
        pass

    @abstractmethod
    async def resolve_attribute_value_tier_price(self, attribute_value, quantity: int) -> Money | None:
        """Tier unit-price delta of an attribute value, or None when no tier applies."""
        pass

    async def resolve_lowest_tier_price(self, product) -> Money | None:
        """Cheapest tier price at any quantity. Resolvers without tiers return None."""
        return None


class DiscountMatcher(ABC):
    """Finds the discount a customer is eligible for."""

    @abstractmethod
    async def find_best_discount(self, product, customer, quantity: int, price: Money) -> Money | None:
        """Return the already-discounted price, or None when nothing applies."""
        pass


class ExchangeRateProvider(ABC):
    """Supplies exchange rates and converts money between currencies."""

    @abstractmethod
    async def get_rate(self, source: str, target: str) -> Decimal:
        """
        Rate to multiply a source amount with to obtain the target amount.

        Raises:
            ConversionUnavailable: If no rate path exists.
        """
        pass

    async def convert(self, money: Money, target: str) -> Money:
        target = target.upper()
        if money.currency == target:
            return money
        rate = await self.get_rate(money.currency, target)
        return money.convert_to(target, rate)


class SessionContext(ABC):
    """Ambient customer and working currency of the current visitor."""

    @abstractmethod
    async def current_customer(self):
        pass

    @abstractmethod
    async def working_currency(self) -> str:
        pass


class BasePriceFormatter(ABC):
    """Turns a per-unit price and a unit label into display text."""

    @abstractmethod
    def format_base_price(self, money: Money, unit_label: str) -> str:
        pass


# =============================================================================
# Model-backed implementations
# =============================================================================

class ModelTierPriceResolver(TierPriceResolver):
    """Tier prices from TierPrice and AttributeValueTierPrice rows."""

    async def _product_breaks(self, product, quantity: int | None = None) -> list[TierBreak]:
        queryset = TierPrice.objects.filter(product_id=product.pk)
        if quantity is not None:
            queryset = queryset.up_to_quantity(quantity)
        tiers = await _fetch(queryset, f"tier prices of product {product.pk}")
        list_price = product.list_price
        return [tier.to_break(list_price) for tier in tiers]

    async def resolve_tier_price(self, product, quantity):
        tier = select_tier(await self._product_breaks(product, quantity), quantity)
        return tier.price if tier else None

    async def resolve_attribute_value_tier_price(self, attribute_value, quantity):
        queryset = (
            AttributeValueTierPrice.objects
            .filter(attribute_value_id=attribute_value.pk)
            .up_to_quantity(quantity)
            .select_related('attribute_value__product')
        )
        rows = await _fetch(queryset, f"tier prices of attribute value {attribute_value.pk}")
        breaks = [
            TierBreak(
                min_quantity=row.quantity,
                price=Money(row.price_adjustment, row.attribute_value.product.currency),
            )
            for row in rows
        ]
        tier = select_tier(breaks, quantity)
        return tier.price if tier else None

    async def resolve_lowest_tier_price(self, product):
        tier = lowest_tier(await self._product_breaks(product))
        return tier.price if tier else None


class ModelDiscountMatcher(DiscountMatcher):
    """
    Picks the eligible Discount with the largest absolute reduction.

    On equal reductions the discount that sorts first (name, then id) wins.
    """

    async def find_best_discount(self, product, customer, quantity, price):
        queryset = (
            Discount.objects.active()
            .for_product(product)
            .for_customer(customer)
            .for_quantity(quantity)
        )
        discounts = await _fetch(queryset, f"discounts of product {product.pk}")

        best = None
        best_reduction = Money.zero(price.currency)
        for discount in discounts:
            reduction = discount.discount_amount(price)
            if reduction > best_reduction:
                best, best_reduction = discount, reduction

        if best is None:
            return None
        logger.debug(f"Discount '{best.name}' takes {best_reduction} off {price}")
        return (price - best_reduction).floor_at_zero()


class ModelExchangeRateProvider(ExchangeRateProvider):
    """Rates derived from active Currency rows: target.rate / source.rate."""

    async def get_rate(self, source, target):
        source, target = source.upper(), target.upper()
        if source == target:
            return Decimal('1')

        queryset = Currency.objects.active().for_codes(source, target)
        rates = {currency.code: currency.rate for currency in await _fetch(queryset, "currencies")}
        if source not in rates or target not in rates:
            raise ConversionUnavailable(source, target)
        return rates[target] / rates[source]


# =============================================================================
# Static implementations
# =============================================================================

class StaticExchangeRateProvider(ExchangeRateProvider):
    """
    Rates from a mapping of (source, target) pairs.

    Usage:
        provider = StaticExchangeRateProvider({('EUR', 'USD'): '1.08'})
        await provider.convert(Money('10', 'USD'), 'EUR')  # inverse is derived
    """

    def __init__(self, rates: dict[tuple[str, str], Number]):
        self.rates = {
            (source.upper(), target.upper()): Decimal(str(rate))
            for (source, target), rate in rates.items()
        }

    async def get_rate(self, source, target):
        source, target = source.upper(), target.upper()
        if source == target:
            return Decimal('1')
        rate = self.rates.get((source, target))
        if rate is not None and rate > 0:
            return rate
        inverse = self.rates.get((target, source))
        if inverse is not None and inverse > 0:
            return Decimal('1') / inverse
        raise ConversionUnavailable(source, target)


class StaticSessionContext(SessionContext):
    """Fixed customer and currency, for jobs and callers without a request."""

    def __init__(self, customer=None, currency: str | None = None):
        self.customer = customer
        self.currency = currency

    async def current_customer(self):
        return self.customer

    async def working_currency(self):
        return (self.currency or conf.get_primary_currency()).upper()


class RequestSessionContext(SessionContext):
    """Customer and working currency of an HTTP request."""

    def __init__(self, request):
        self.request = request

    async def current_customer(self):
        user = await self.request.auser()
        if user is None or not user.is_authenticated:
            return None
        return user

    async def working_currency(self):
        session = getattr(self.request, 'session', None)
        if session is not None:
            currency = await session.aget(conf.get_setting('SESSION_CURRENCY_KEY'))
            if currency:
                return currency.upper()
        return conf.get_primary_currency()


class DefaultBasePriceFormatter(BasePriceFormatter):
    """Formats with PRICING_BASE_PRICE_FORMAT, e.g. '$2.50 / 1 l'."""

    def format_base_price(self, money, unit_label):
        price = money.display(conf.get_currency_symbol(money.currency))
        return conf.get_setting('BASE_PRICE_FORMAT').format(price=price, unit=unit_label)
