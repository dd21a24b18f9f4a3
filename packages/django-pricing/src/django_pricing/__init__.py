"""Django Pricing - unit price, subtotal and base price calculation.

Reconciles list price, quantity tier prices, attribute price adjustments,
discounts and currency conversion into one CalculatedPrice.

Usage:
    INSTALLED_APPS = [
        ...
        'django_pricing',
    ]

    from django_pricing import CartItem, calculate_unit_price

    price = await calculate_unit_price(CartItem(product, quantity=5, customer=user))

See conf.py for all configuration options.
"""

__version__ = "0.1.0"

__all__ = [
    "Money",
    "PricingError",
    "InvalidContext",
    "ConversionUnavailable",
    "CollaboratorUnavailable",
    "CurrencyMismatchError",
    "PricingOptions",
    "CartItem",
    "ProductPricingContext",
    "CartItemPricingContext",
    "CalculatedPrice",
    "CalculatedPriceAdjustment",
    "PriceCalculationService",
    "get_pricing_service",
    "calculate_unit_price",
    "calculate_subtotal",
    "calculate_attribute_price_adjustments",
    "get_base_price_info",
]


def __getattr__(name):
    """Lazy imports to prevent AppRegistryNotReady errors."""
    if name == "Money":
        from .money import Money
        return Money
    if name in ("PricingError", "InvalidContext", "ConversionUnavailable",
                "CollaboratorUnavailable", "CurrencyMismatchError"):
        from . import exceptions
        return getattr(exceptions, name)
    if name in ("PricingOptions", "CartItem", "ProductPricingContext",
                "CartItemPricingContext", "CalculatedPrice", "CalculatedPriceAdjustment"):
        from . import value_objects
        return getattr(value_objects, name)
    if name == "PriceCalculationService":
        from .engine import PriceCalculationService
        return PriceCalculationService
    if name in ("get_pricing_service", "calculate_unit_price", "calculate_subtotal",
                "calculate_attribute_price_adjustments", "get_base_price_info"):
        from . import services
        return getattr(services, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
