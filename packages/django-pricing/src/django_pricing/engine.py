"""Price calculation engine.

PriceCalculationService turns a PricingContext into a CalculatedPrice:

1. Base unit price: the quantity tier price when one applies, else the list price
2. Best discount on the base price, floored at zero
3. Attribute value deltas (tier-priced or flat), added to the unit price, floored at zero
4. Conversion of every money value into the target currency
5. Assembly of the immutable result

Lookups go through the collaborators in providers.py. The engine keeps no
state between calls and never turns a collaborator failure into a price.
"""

import asyncio
import logging
from dataclasses import dataclass

from . import conf
from .exceptions import InvalidContext
from .money import Money
from .providers import (
    BasePriceFormatter,
    DefaultBasePriceFormatter,
    DiscountMatcher,
    ExchangeRateProvider,
    SessionContext,
    TierPriceResolver,
)
from .value_objects import (
    CalculatedPrice,
    CalculatedPriceAdjustment,
    CartItemPricingContext,
    PricingContext,
    PricingOptions,
    ProductPricingContext,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Target:
    product: object
    quantity: int
    selected_attributes: tuple
    customer: object


def _unpack(context: PricingContext) -> _Target:
    """Flatten either context shape into what the calculation reads."""
    if isinstance(context, CartItemPricingContext):
        item = context.cart_item
        customer = item.customer if item.customer is not None else context.options.customer
        return _Target(item.product, item.quantity, item.selected_attributes, customer)
    if isinstance(context, ProductPricingContext):
        return _Target(
            context.product,
            context.quantity,
            context.selected_attributes,
            context.options.customer,
        )
    raise InvalidContext(f"Unsupported pricing context: {type(context).__name__}")


class PriceCalculationService:
    """
    Calculates unit prices and subtotals.

    Usage:
        service = PriceCalculationService(
            tier_prices=ModelTierPriceResolver(),
            discounts=ModelDiscountMatcher(),
            exchange_rates=ModelExchangeRateProvider(),
            session=RequestSessionContext(request),
        )
        options = await service.create_default_options(for_listing=False)
        price = await service.calculate_price(ProductPricingContext(product, options, quantity=5))
    """

    def __init__(
        self,
        tier_prices: TierPriceResolver,
        discounts: DiscountMatcher,
        exchange_rates: ExchangeRateProvider,
        session: SessionContext,
        base_price_formatter: BasePriceFormatter | None = None,
    ):
        self.tier_prices = tier_prices
        self.discounts = discounts
        self.exchange_rates = exchange_rates
        self.session = session
        self.base_price_formatter = base_price_formatter or DefaultBasePriceFormatter()

    async def create_default_options(
        self,
        for_listing: bool,
        customer=None,
        target_currency: str | None = None,
    ) -> PricingOptions:
        """
        Build the options for one call.

        Missing customer and currency come from the ambient session. Listing
        options additionally ask for the lowest tier price ("from" prices).
        """
        if customer is None:
            customer = await self.session.current_customer()
        if target_currency is None:
            target_currency = await self.session.working_currency()

        return PricingOptions(
            customer=customer,
            target_currency=target_currency,
            include_tier_prices=bool(conf.get_setting('INCLUDE_TIER_PRICES')),
            determine_lowest_price=bool(
                for_listing and conf.get_setting('LISTING_DETERMINES_LOWEST_PRICE')
            ),
        )

    async def calculate_price(self, context: PricingContext) -> CalculatedPrice:
        """
        Calculate the unit price for a context.

        Raises:
            InvalidContext: If the context shape is not supported.
            ConversionUnavailable: If the target currency cannot be reached.
            CollaboratorUnavailable: If a lookup fails.
        """
        target = _unpack(context)
        options = context.options
        product = target.product

        list_price = product.list_price
        base_price = list_price
        tier_price_applied = False

        if options.include_tier_prices:
            tier_price = await self.tier_prices.resolve_tier_price(product, target.quantity)
            if tier_price is not None:
                logger.debug(f"Tier price {tier_price} applies to {product.pk} at quantity {target.quantity}")
                base_price = tier_price
                tier_price_applied = True

        final_price = base_price
        discount_applied = False
        if not options.ignore_discounts:
            discounted = await self.discounts.find_best_discount(
                product, target.customer, target.quantity, base_price
            )
            if discounted is not None and discounted < base_price:
                final_price = discounted.floor_at_zero()
                discount_applied = True
                logger.debug(f"Discount lowers {product.pk} from {base_price} to {final_price}")

        adjustments = []
        total_delta = Money.zero(list_price.currency)
        if target.selected_attributes:
            deltas = await asyncio.gather(*(
                self._resolve_attribute_delta(value, target.quantity, list_price.currency, options)
                for value in target.selected_attributes
            ))
            adjustments = [
                (value, delta)
                for value, delta in zip(target.selected_attributes, deltas)
                if delta is not None
            ]
            total_delta = sum((delta for _, delta in adjustments), total_delta)
            final_price = (final_price + total_delta).floor_at_zero()
            list_price = (list_price + total_delta).floor_at_zero()

        lowest_price = None
        if options.determine_lowest_price and options.include_tier_prices:
            lowest_price = await self.tier_prices.resolve_lowest_tier_price(product)
            if lowest_price is not None:
                lowest_price = (lowest_price + total_delta).floor_at_zero()

        currency = options.target_currency
        if currency != list_price.currency:
            logger.debug(f"Converting price of {product.pk} from {list_price.currency} to {currency}")
        values = [final_price, list_price, *(delta for _, delta in adjustments)]
        if lowest_price is not None:
            values.append(lowest_price)
        converted = await asyncio.gather(*(
            self.exchange_rates.convert(value, currency) for value in values
        ))
        if lowest_price is not None:
            lowest_price = converted.pop()
        final_price, list_price, *converted_deltas = converted

        price_adjustments = ()
        if options.determine_price_adjustments:
            price_adjustments = tuple(
                CalculatedPriceAdjustment(attribute_value=value, adjustment=delta)
                for (value, _), delta in zip(adjustments, converted_deltas)
            )

        return CalculatedPrice(
            final_price=final_price,
            list_price=list_price,
            discount_applied=discount_applied,
            attribute_price_adjustments=price_adjustments,
            tier_price_applied=tier_price_applied,
            lowest_price=lowest_price,
        )

    async def _resolve_attribute_delta(self, value, quantity, currency, options) -> Money | None:
        delta = None
        if options.include_tier_prices:
            delta = await self.tier_prices.resolve_attribute_value_tier_price(value, quantity)
        if delta is None:
            delta = Money(value.price_adjustment or 0, currency)
        if delta.is_zero():
            return None
        return delta

    async def calculate_subtotal(self, context: PricingContext) -> tuple[CalculatedPrice, Money]:
        """Unit price and unit price * quantity, from a single calculation."""
        unit_price = await self.calculate_price(context)
        quantity = _unpack(context).quantity
        return unit_price, unit_price.final_price * quantity

    def get_base_price_info(self, product, price: Money) -> str:
        """
        Format a price per the product's reference unit, e.g. '$2.50 / 1 l'.

        The product must carry base price data (product.has_base_price);
        callers check that before calculating the price.
        """
        per_unit = price / product.base_price_amount * product.base_price_base_amount
        unit_label = f"{product.base_price_base_amount} {product.base_price_unit}".strip()
        return self.base_price_formatter.format_base_price(per_unit, unit_label)
