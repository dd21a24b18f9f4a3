"""Pricing entry points.

Each function builds the options and context for one kind of question,
runs the engine and reshapes its result. The service defaults to the one
configured through PRICING_* settings with a static session; pass
service= to price within a request.
"""

from dataclasses import replace
from typing import Iterable

from django.utils.module_loading import import_string

from . import conf
from .engine import PriceCalculationService
from .money import Money
from .providers import SessionContext, StaticSessionContext
from .value_objects import (
    CalculatedPrice,
    CalculatedPriceAdjustment,
    CartItem,
    CartItemPricingContext,
    ProductPricingContext,
)


def get_pricing_service(session: SessionContext | None = None) -> PriceCalculationService:
    """Build a PriceCalculationService from the collaborator settings."""
    return PriceCalculationService(
        tier_prices=import_string(conf.get_setting('TIER_PRICE_RESOLVER'))(),
        discounts=import_string(conf.get_setting('DISCOUNT_MATCHER'))(),
        exchange_rates=import_string(conf.get_setting('EXCHANGE_RATE_PROVIDER'))(),
        session=session or StaticSessionContext(),
        base_price_formatter=import_string(conf.get_setting('BASE_PRICE_FORMATTER'))(),
    )


async def calculate_unit_price(
    cart_item: CartItem,
    *,
    ignore_discounts: bool = False,
    target_currency: str | None = None,
    service: PriceCalculationService | None = None,
) -> CalculatedPrice:
    """
    Calculate the unit price of a shopping cart line.

    Args:
        cart_item: The cart line to price.
        ignore_discounts: Skip discount lookup entirely.
        target_currency: Currency of the result, session working currency if None.
        service: Calculation service, configured default if None.

    Returns:
        CalculatedPrice for one unit, attribute deltas included.
    """
    service = service or get_pricing_service()
    options = await service.create_default_options(False, cart_item.customer, target_currency)
    options = replace(options, ignore_discounts=ignore_discounts)
    return await service.calculate_price(CartItemPricingContext(cart_item, options))


async def calculate_subtotal(
    cart_item: CartItem,
    *,
    ignore_discounts: bool = False,
    target_currency: str | None = None,
    service: PriceCalculationService | None = None,
) -> Money:
    """Calculate unit price * quantity for a shopping cart line."""
    service = service or get_pricing_service()
    options = await service.create_default_options(False, cart_item.customer, target_currency)
    options = replace(options, ignore_discounts=ignore_discounts)
    _, subtotal = await service.calculate_subtotal(CartItemPricingContext(cart_item, options))
    return subtotal


async def calculate_attribute_price_adjustments(
    product,
    selection: Iterable,
    *,
    customer=None,
    target_currency: str | None = None,
    quantity: int = 1,
    service: PriceCalculationService | None = None,
) -> dict:
    """
    Calculate the unit-price delta of each selected attribute value.

    Typically used to show what a selected option adds on the cart page.
    quantity only matters when attribute values have tier prices; the
    result is always per unit.

    Returns:
        Dict keyed by attribute value pk, values are CalculatedPriceAdjustment.
        Values without a delta are absent.
    """
    service = service or get_pricing_service()
    options = await service.create_default_options(False, customer, target_currency)
    options = replace(options, determine_price_adjustments=True)

    context = ProductPricingContext(product, options, quantity).with_selected_attributes(selection)
    price = await service.calculate_price(context)

    adjustments: dict[object, CalculatedPriceAdjustment] = {}
    for adjustment in price.attribute_price_adjustments:
        adjustments[adjustment.attribute_value_id] = adjustment
    return adjustments


async def get_base_price_info(
    product,
    *,
    customer=None,
    target_currency: str | None = None,
    service: PriceCalculationService | None = None,
) -> str:
    """
    Get the base price text of a product, e.g. '$2.50 / 1 l'.

    Products without base price data return an empty string without any
    calculation.
    """
    if not product.has_base_price:
        return ''

    service = service or get_pricing_service()
    options = await service.create_default_options(False, customer, target_currency)
    price = await service.calculate_price(ProductPricingContext(product, options))
    return service.get_base_price_info(product, price.final_price)
