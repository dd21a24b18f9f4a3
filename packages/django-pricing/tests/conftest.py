import django
import pytest
from django.conf import settings


def pytest_configure():
    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY="test-secret-key-for-pricing",
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django_pricing",
            ],
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            USE_TZ=True,
            PRICING_PRIMARY_CURRENCY="USD",
        )
    django.setup()


@pytest.fixture
def tiers():
    """In-memory tier price resolver."""
    from fakes import FakeTierPriceResolver
    return FakeTierPriceResolver()


@pytest.fixture
def discounts():
    """Discount matcher that finds nothing until given a reduction."""
    from fakes import FakeDiscountMatcher
    return FakeDiscountMatcher()


@pytest.fixture
def rates():
    """USD -> EUR at 2.0, nothing else."""
    from django_pricing.providers import StaticExchangeRateProvider
    return StaticExchangeRateProvider({("USD", "EUR"): "2.0"})


@pytest.fixture
def session():
    from django_pricing.providers import StaticSessionContext
    return StaticSessionContext(customer=None, currency="USD")


@pytest.fixture
def service(tiers, discounts, rates, session):
    """Calculation service wired to in-memory collaborators."""
    from django_pricing.engine import PriceCalculationService
    return PriceCalculationService(
        tier_prices=tiers,
        discounts=discounts,
        exchange_rates=rates,
        session=session,
    )


@pytest.fixture
def product():
    """Unsaved $10.00 product."""
    from decimal import Decimal
    from django_pricing.models import Product
    return Product(name="Olive Oil", price=Decimal("10.00"), currency="USD")
