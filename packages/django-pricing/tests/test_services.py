"""Tests for the pricing entry points."""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from django.test import override_settings

from django_pricing import services
from django_pricing.engine import PriceCalculationService
from django_pricing.models import Product, ProductAttributeValue
from django_pricing.money import Money
from django_pricing.providers import (
    DefaultBasePriceFormatter,
    ModelDiscountMatcher,
    ModelExchangeRateProvider,
    ModelTierPriceResolver,
    StaticSessionContext,
)
from django_pricing.value_objects import CartItem


@pytest.fixture
def bottle():
    """$10.00 bottle holding 4 l."""
    return Product(
        name="Olive Oil 4 l",
        price=Decimal("10.00"),
        currency="USD",
        base_price_enabled=True,
        base_price_amount=Decimal("4"),
        base_price_base_amount=1,
        base_price_unit="l",
    )


@pytest.mark.asyncio
class TestUnitPriceAndSubtotal:

    async def test_unit_price(self, service, tiers, product):
        tiers.add_tier(product, 5, "8.00")

        price = await services.calculate_unit_price(CartItem(product, quantity=5), service=service)

        assert price.final_price == Money("8.00", "USD")

    async def test_subtotal(self, service, tiers, product):
        tiers.add_tier(product, 5, "8.00")

        subtotal = await services.calculate_subtotal(CartItem(product, quantity=5), service=service)

        assert subtotal == Money("40.00", "USD")

    async def test_ignore_discounts(self, service, discounts, product):
        discounts.reduction = "3.00"
        item = CartItem(product, quantity=2)

        discounted = await services.calculate_subtotal(item, service=service)
        full = await services.calculate_subtotal(item, ignore_discounts=True, service=service)

        assert discounted == Money("14.00", "USD")
        assert full == Money("20.00", "USD")

    async def test_target_currency(self, service, product):
        price = await services.calculate_unit_price(
            CartItem(product), target_currency="eur", service=service
        )

        assert price.final_price == Money("20", "EUR")

    async def test_currency_from_session(self, tiers, discounts, rates, product):
        service = PriceCalculationService(
            tiers, discounts, rates, StaticSessionContext(currency="EUR")
        )

        subtotal = await services.calculate_subtotal(CartItem(product, quantity=3), service=service)

        assert subtotal == Money("60", "EUR")

    async def test_cart_item_customer_reaches_discounts(self, service, discounts, product):
        await services.calculate_unit_price(CartItem(product, customer="buyer"), service=service)

        assert discounts.calls[0][1] == "buyer"


@pytest.mark.asyncio
class TestAttributePriceAdjustments:

    async def test_keyed_by_attribute_value(self, service, product):
        large = ProductAttributeValue(product=product, attribute="Size", name="L",
                                      price_adjustment=Decimal("1.00"))
        gift = ProductAttributeValue(product=product, attribute="Wrapping", name="Gift",
                                     price_adjustment=Decimal("2.00"))
        plain = ProductAttributeValue(product=product, attribute="Color", name="Green")

        adjustments = await services.calculate_attribute_price_adjustments(
            product, [large, gift, plain], service=service
        )

        assert set(adjustments) == {large.pk, gift.pk}
        assert adjustments[large.pk].adjustment == Money("1.00", "USD")
        assert adjustments[gift.pk].adjustment == Money("2.00", "USD")
        assert sum((a.adjustment for a in adjustments.values()), Money.zero("USD")) == Money("3", "USD")

    async def test_empty_selection(self, service, product):
        assert await services.calculate_attribute_price_adjustments(product, [], service=service) == {}

    async def test_converted_to_target_currency(self, service, product):
        large = ProductAttributeValue(product=product, attribute="Size", name="L",
                                      price_adjustment=Decimal("1.50"))

        adjustments = await services.calculate_attribute_price_adjustments(
            product, [large], target_currency="EUR", service=service
        )

        assert adjustments[large.pk].adjustment == Money("3", "EUR")


@pytest.mark.asyncio
class TestBasePriceInfo:

    async def test_price_per_unit(self, service, bottle):
        assert await services.get_base_price_info(bottle, service=service) == "$2.50 / 1 l"

    async def test_fractional_package(self, service, bottle):
        bottle.base_price_amount = Decimal("0.5")

        assert await services.get_base_price_info(bottle, service=service) == "$20.00 / 1 l"

    async def test_reference_amount(self, service, bottle):
        bottle.base_price_amount = Decimal("500")
        bottle.base_price_base_amount = 100
        bottle.base_price_unit = "ml"

        assert await services.get_base_price_info(bottle, service=service) == "$2.00 / 100 ml"

    async def test_uses_discounted_price(self, service, discounts, bottle):
        discounts.reduction = "2.00"

        assert await services.get_base_price_info(bottle, service=service) == "$2.00 / 1 l"

    async def test_target_currency(self, service, bottle):
        text = await services.get_base_price_info(bottle, target_currency="EUR", service=service)

        assert text == "€5.00 / 1 l"

    @pytest.mark.parametrize("amount", [None, Decimal("0")])
    async def test_without_base_price_skips_calculation(self, service, bottle, amount):
        bottle.base_price_amount = amount
        service.calculate_price = AsyncMock()

        assert await services.get_base_price_info(bottle, service=service) == ""
        service.calculate_price.assert_not_called()

    async def test_disabled_base_price(self, service, bottle):
        bottle.base_price_enabled = False

        assert await services.get_base_price_info(bottle, service=service) == ""

    async def test_format_from_settings(self, service, bottle):
        with override_settings(
            PRICING_BASE_PRICE_FORMAT="{price} per {unit}",
            PRICING_CURRENCY_SYMBOLS={"USD": "US$"},
        ):
            text = await services.get_base_price_info(bottle, service=service)

        assert text == "US$2.50 per 1 l"


class TestGetPricingService:

    def test_default_collaborators(self):
        service = services.get_pricing_service()

        assert isinstance(service.tier_prices, ModelTierPriceResolver)
        assert isinstance(service.discounts, ModelDiscountMatcher)
        assert isinstance(service.exchange_rates, ModelExchangeRateProvider)
        assert isinstance(service.session, StaticSessionContext)
        assert isinstance(service.base_price_formatter, DefaultBasePriceFormatter)

    def test_session_is_passed_through(self):
        session = StaticSessionContext(currency="EUR")

        assert services.get_pricing_service(session).session is session

    def test_collaborators_from_settings(self):
        with override_settings(
            PRICING_EXCHANGE_RATE_PROVIDER="fakes.FakeExchangeRateProvider",
        ):
            service = services.get_pricing_service()

        assert type(service.exchange_rates).__name__ == "FakeExchangeRateProvider"
