"""Django Pricing configuration.

All settings can be overridden in your Django settings.py.

Example:
    # settings.py
    PRICING_PRIMARY_CURRENCY = 'EUR'
    PRICING_BASE_PRICE_FORMAT = '{price} per {unit}'
    PRICING_EXCHANGE_RATE_PROVIDER = 'myshop.rates.EcbExchangeRateProvider'

Settings are read at call time so tests can use override_settings().
"""

from django.conf import settings

from django_pricing.money import CURRENCY_SYMBOLS


DEFAULTS = {
    # Working currency when the session does not carry one
    'PRIMARY_CURRENCY': 'USD',
    # Session key holding the visitor's working currency
    'SESSION_CURRENCY_KEY': 'pricing_currency',
    # Placeholders: {price} (formatted money), {unit} (e.g. "1 l")
    'BASE_PRICE_FORMAT': '{price} / {unit}',
    'CURRENCY_SYMBOLS': {},
    'INCLUDE_TIER_PRICES': True,
    # What create_default_options(for_listing=True) turns on
    'LISTING_DETERMINES_LOWEST_PRICE': True,
    # Collaborators used by services.get_pricing_service()
    'TIER_PRICE_RESOLVER': 'django_pricing.providers.ModelTierPriceResolver',
    'DISCOUNT_MATCHER': 'django_pricing.providers.ModelDiscountMatcher',
    'EXCHANGE_RATE_PROVIDER': 'django_pricing.providers.ModelExchangeRateProvider',
    'BASE_PRICE_FORMATTER': 'django_pricing.providers.DefaultBasePriceFormatter',
}


def get_setting(name: str, default=None):
    """Get a setting with PRICING_ prefix, falling back to DEFAULTS."""
    if default is None:
        default = DEFAULTS.get(name)
    return getattr(settings, f"PRICING_{name}", default)


def get_primary_currency() -> str:
    return get_setting('PRIMARY_CURRENCY').upper()


def get_currency_symbol(currency: str) -> str | None:
    """Symbol for display, settings override the built-in table."""
    overrides = get_setting('CURRENCY_SYMBOLS') or {}
    if currency in overrides:
        return overrides[currency]
    return CURRENCY_SYMBOLS.get(currency)
