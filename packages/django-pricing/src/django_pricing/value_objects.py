"""Value objects for the pricing pipeline.

Options and contexts are built once per call and never mutated; results
are handed back by value.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from .exceptions import InvalidContext
from .money import Money


@dataclass(frozen=True)
class TierBreak:
    """One break point of a quantity tier schedule."""

    min_quantity: int
    price: Money


@dataclass(frozen=True)
class PricingOptions:
    """Per-call configuration, see PriceCalculationService.create_default_options()."""

    customer: Any
    target_currency: str
    ignore_discounts: bool = False
    determine_price_adjustments: bool = False
    include_tier_prices: bool = True
    determine_lowest_price: bool = False

    def __post_init__(self):
        object.__setattr__(self, "target_currency", self.target_currency.upper())


@dataclass(frozen=True)
class CartItem:
    """The slice of an organized shopping cart line the pricing pipeline needs."""

    product: Any
    quantity: int = 1
    selected_attributes: tuple = ()
    customer: Any = None

    def __post_init__(self):
        object.__setattr__(self, "selected_attributes", tuple(self.selected_attributes))


def _validate(product, quantity, selected_attributes) -> None:
    if product is None:
        raise InvalidContext("A product is required")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidContext(f"Quantity must be an integer >= 1, got {quantity!r}")

    seen = set()
    for value in selected_attributes:
        if value.pk in seen:
            raise InvalidContext(f"Attribute value {value.pk} selected more than once")
        seen.add(value.pk)
        if value.product_id != product.pk:
            raise InvalidContext(
                f"Attribute value {value.pk} does not belong to product {product.pk}"
            )


@dataclass(frozen=True)
class ProductPricingContext:
    """Price a product on its own, e.g. on a product detail or listing page."""

    product: Any
    options: PricingOptions
    quantity: int = 1
    selected_attributes: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "selected_attributes", tuple(self.selected_attributes))
        _validate(self.product, self.quantity, self.selected_attributes)

    def with_selected_attributes(self, selection: Iterable) -> "ProductPricingContext":
        """Return a copy with the given attribute values added to the selection."""
        return ProductPricingContext(
            product=self.product,
            options=self.options,
            quantity=self.quantity,
            selected_attributes=self.selected_attributes + tuple(selection),
        )


@dataclass(frozen=True)
class CartItemPricingContext:
    """Price a shopping cart line, using the line's customer and selection."""

    cart_item: CartItem
    options: PricingOptions

    def __post_init__(self):
        if not isinstance(self.cart_item, CartItem):
            raise InvalidContext(f"Expected a CartItem, got {type(self.cart_item).__name__}")
        item = self.cart_item
        _validate(item.product, item.quantity, item.selected_attributes)

    @property
    def quantity(self) -> int:
        return self.cart_item.quantity


PricingContext = Union[ProductPricingContext, CartItemPricingContext]


@dataclass(frozen=True)
class CalculatedPriceAdjustment:
    """Resolved unit-price delta contributed by one selected attribute value."""

    attribute_value: Any
    adjustment: Money

    @property
    def attribute_value_id(self):
        return self.attribute_value.pk


@dataclass(frozen=True)
class CalculatedPrice:
    """Immutable result of a price calculation.

    All money values are expressed in the options' target currency.

    Attributes:
        final_price: Unit price the customer pays, attribute deltas included
        list_price: Catalog list price plus attribute deltas, before tiers and discounts
        discount_applied: Whether a discount reduced the price
        attribute_price_adjustments: Per-attribute breakdown (only when requested)
        tier_price_applied: Whether a quantity tier replaced the list price
        lowest_price: Lowest tier price at any quantity (listing pages only)
    """

    final_price: Money
    list_price: Money
    discount_applied: bool = False
    attribute_price_adjustments: tuple[CalculatedPriceAdjustment, ...] = field(default=())
    tier_price_applied: bool = False
    lowest_price: Money | None = None

    @property
    def savings(self) -> Money:
        """Amount saved against the list price, never negative."""
        return (self.list_price - self.final_price).floor_at_zero()

    @property
    def has_price_range(self) -> bool:
        return self.lowest_price is not None and self.lowest_price < self.final_price
