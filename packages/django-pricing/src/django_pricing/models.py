"""Storage models backing the default pricing collaborators.

The calculation engine never reads these directly; it goes through the
providers in providers.py, which translate rows into Money and TierBreak
values. Amounts are stored in the product's native currency.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .money import Money
from .value_objects import TierBreak


def _amount_field(verbose_name, **kwargs):
    return models.DecimalField(verbose_name, max_digits=18, decimal_places=4, **kwargs)


class PricingBaseModel(models.Model):
    """UUID primary key and timestamps for all pricing models."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        abstract = True


# =============================================================================
# Currency
# =============================================================================

class CurrencyQuerySet(models.QuerySet):
    """Custom queryset for Currency model."""

    def active(self):
        return self.filter(is_active=True)

    def for_codes(self, *codes):
        return self.filter(code__in=[code.upper() for code in codes])


class Currency(PricingBaseModel):
    """
    A currency with its exchange rate against the primary store currency.

    rate is the number of units of this currency per one unit of the
    primary currency, so the rate from A to B is B.rate / A.rate.
    """

    code = models.CharField(_('code'), max_length=3, unique=True, help_text="ISO 4217 code")
    name = models.CharField(_('name'), max_length=100, blank=True, default='')
    rate = models.DecimalField(
        _('rate'),
        max_digits=18,
        decimal_places=8,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0.00000001'))],
    )
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    objects = CurrencyQuerySet.as_manager()

    class Meta:
        app_label = 'django_pricing'
        ordering = ['code']
        verbose_name_plural = _('currencies')
        constraints = [
            models.CheckConstraint(condition=Q(rate__gt=0), name='pricing_currency_rate_positive'),
        ]

    def __str__(self):
        return self.code

    def save(self, *args, **kwargs):
        self.code = self.code.upper()
        super().save(*args, **kwargs)


# =============================================================================
# Product
# =============================================================================

class Product(PricingBaseModel):
    """
    A sellable product with its list price and optional base price data.

    Base price: a product holding base_price_amount=0.5 of base_price_unit='l'
    with base_price_base_amount=1 shows its price per 1 l.
    """

    name = models.CharField(_('name'), max_length=255)
    sku = models.CharField(_('SKU'), max_length=100, blank=True, default='', db_index=True)
    price = _amount_field(_('price'), validators=[MinValueValidator(Decimal('0'))])
    currency = models.CharField(_('currency'), max_length=3, default='USD')

    base_price_enabled = models.BooleanField(_('base price enabled'), default=False)
    base_price_amount = _amount_field(
        _('base price amount'),
        null=True,
        blank=True,
        help_text="Package content measured in base_price_unit",
    )
    base_price_base_amount = models.PositiveIntegerField(
        _('base price reference amount'),
        default=1,
        help_text="Reference quantity the base price is expressed for",
    )
    base_price_unit = models.CharField(_('base price unit'), max_length=20, blank=True, default='')

    class Meta:
        app_label = 'django_pricing'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def list_price(self) -> Money:
        return Money(self.price, self.currency)

    @property
    def has_base_price(self) -> bool:
        return bool(self.base_price_enabled and self.base_price_amount)


# =============================================================================
# Tier prices
# =============================================================================

class TierCalculationMethod(models.TextChoices):
    """How a tier price value is turned into a unit price."""

    FIXED = 'fixed', 'Fixed price'
    PERCENTAL = 'percental', 'Percent off list price'
    ADJUSTMENT = 'adjustment', 'Amount off list price'


class TierPriceQuerySet(models.QuerySet):
    """Custom queryset for tier price models."""

    def up_to_quantity(self, quantity):
        return self.filter(quantity__lte=quantity)


class TierPrice(PricingBaseModel):
    """Unit price applying once the purchased quantity reaches `quantity`."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='tier_prices',
    )
    quantity = models.PositiveIntegerField(_('minimum quantity'), validators=[MinValueValidator(1)])
    value = _amount_field(_('value'))
    calculation_method = models.CharField(
        _('calculation method'),
        max_length=20,
        choices=TierCalculationMethod.choices,
        default=TierCalculationMethod.FIXED,
    )

    objects = TierPriceQuerySet.as_manager()

    class Meta:
        app_label = 'django_pricing'
        ordering = ['quantity', 'value']
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name='pricing_tierprice_quantity_min'),
        ]

    def __str__(self):
        return f"{self.product_id} x{self.quantity}: {self.value} ({self.calculation_method})"

    def effective_price(self, list_price: Money) -> Money:
        """Resolve the unit price this tier stands for, never below zero."""
        if self.calculation_method == TierCalculationMethod.PERCENTAL:
            price = list_price - list_price * (self.value / Decimal('100'))
        elif self.calculation_method == TierCalculationMethod.ADJUSTMENT:
            price = list_price - Money(self.value, list_price.currency)
        else:
            price = Money(self.value, list_price.currency)
        return price.floor_at_zero()

    def to_break(self, list_price: Money) -> TierBreak:
        return TierBreak(min_quantity=self.quantity, price=self.effective_price(list_price))


# =============================================================================
# Attribute values
# =============================================================================

class ProductAttributeValue(PricingBaseModel):
    """A selectable variant value (e.g. Size: XL) with an optional unit-price delta."""

    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='attribute_values',
    )
    attribute = models.CharField(_('attribute'), max_length=100)
    name = models.CharField(_('name'), max_length=100)
    price_adjustment = _amount_field(_('price adjustment'), default=Decimal('0'))
    display_order = models.PositiveIntegerField(_('display order'), default=0)

    class Meta:
        app_label = 'django_pricing'
        ordering = ['attribute', 'display_order', 'name']

    def __str__(self):
        return f"{self.attribute}: {self.name}"


class AttributeValueTierPrice(PricingBaseModel):
    """Quantity-tiered unit-price delta for an attribute value."""

    attribute_value = models.ForeignKey(
        ProductAttributeValue,
        on_delete=models.CASCADE,
        related_name='tier_prices',
    )
    quantity = models.PositiveIntegerField(_('minimum quantity'), validators=[MinValueValidator(1)])
    price_adjustment = _amount_field(_('price adjustment'))

    objects = TierPriceQuerySet.as_manager()

    class Meta:
        app_label = 'django_pricing'
        ordering = ['quantity', 'price_adjustment']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=1),
                name='pricing_attrtierprice_quantity_min',
            ),
        ]

    def __str__(self):
        return f"{self.attribute_value_id} x{self.quantity}: {self.price_adjustment}"


# =============================================================================
# Discounts
# =============================================================================

class DiscountQuerySet(models.QuerySet):
    """Custom queryset for Discount model."""

    def active(self, as_of=None):
        """Active discounts whose [starts_at, ends_at) window contains as_of."""
        check_time = as_of or timezone.now()
        return (
            self.filter(is_active=True)
            .filter(Q(starts_at__isnull=True) | Q(starts_at__lte=check_time))
            .filter(Q(ends_at__isnull=True) | Q(ends_at__gt=check_time))
        )

    def for_product(self, product):
        return self.filter(products__pk=product.pk)

    def for_customer(self, customer):
        """Discounts open to everyone, plus those limited to this customer."""
        if customer is None:
            return self.filter(customers__isnull=True)
        return self.filter(Q(customers__isnull=True) | Q(customers=customer)).distinct()

    def for_quantity(self, quantity):
        return self.filter(minimum_quantity__lte=quantity)


class Discount(PricingBaseModel):
    """
    Percentage or fixed-amount discount assigned to products.

    Usage:
        discount = Discount.objects.create(name='Summer', use_percentage=True,
                                           percentage=Decimal('10'))
        discount.products.add(product)
    """

    name = models.CharField(_('name'), max_length=255)
    use_percentage = models.BooleanField(_('use percentage'), default=False)
    percentage = models.DecimalField(
        _('percentage'),
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
    )
    amount = _amount_field(
        _('amount'),
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Fixed amount off, in the product's currency",
    )
    minimum_quantity = models.PositiveIntegerField(_('minimum quantity'), default=1)
    starts_at = models.DateTimeField(_('starts at'), null=True, blank=True)
    ends_at = models.DateTimeField(_('ends at'), null=True, blank=True)
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    products = models.ManyToManyField(Product, related_name='discounts', blank=True)
    customers = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='pricing_discounts',
        blank=True,
        help_text="Leave empty to offer the discount to every customer",
    )

    objects = DiscountQuerySet.as_manager()

    class Meta:
        app_label = 'django_pricing'
        ordering = ['name', 'id']

    def __str__(self):
        if self.use_percentage:
            return f"{self.name} ({self.percentage}%)"
        return f"{self.name} ({self.amount})"

    def discount_amount(self, price: Money) -> Money:
        """Reduction this discount grants on a price, capped at the price itself."""
        if self.use_percentage:
            reduction = price * (self.percentage / Decimal('100'))
        else:
            reduction = Money(self.amount, price.currency)
        if reduction > price:
            return price
        return reduction.floor_at_zero()
