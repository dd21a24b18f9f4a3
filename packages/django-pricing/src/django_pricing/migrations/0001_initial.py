# Generated manually for standalone django-pricing package

import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _base_fields():
    return [
        (
            "id",
            models.UUIDField(
                default=uuid.uuid4, editable=False, primary_key=True, serialize=False
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
        ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Currency",
            fields=_base_fields() + [
                (
                    "code",
                    models.CharField(
                        help_text="ISO 4217 code", max_length=3, unique=True, verbose_name="code"
                    ),
                ),
                (
                    "name",
                    models.CharField(blank=True, default="", max_length=100, verbose_name="name"),
                ),
                (
                    "rate",
                    models.DecimalField(
                        decimal_places=8,
                        default=Decimal("1"),
                        max_digits=18,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00000001"))],
                        verbose_name="rate",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
            ],
            options={
                "verbose_name_plural": "currencies",
                "ordering": ["code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("rate__gt", 0)),
                        name="pricing_currency_rate_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Product",
            fields=_base_fields() + [
                ("name", models.CharField(max_length=255, verbose_name="name")),
                (
                    "sku",
                    models.CharField(
                        blank=True, db_index=True, default="", max_length=100, verbose_name="SKU"
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=4,
                        max_digits=18,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="price",
                    ),
                ),
                ("currency", models.CharField(default="USD", max_length=3, verbose_name="currency")),
                (
                    "base_price_enabled",
                    models.BooleanField(default=False, verbose_name="base price enabled"),
                ),
                (
                    "base_price_amount",
                    models.DecimalField(
                        blank=True,
                        decimal_places=4,
                        help_text="Package content measured in base_price_unit",
                        max_digits=18,
                        null=True,
                        verbose_name="base price amount",
                    ),
                ),
                (
                    "base_price_base_amount",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Reference quantity the base price is expressed for",
                        verbose_name="base price reference amount",
                    ),
                ),
                (
                    "base_price_unit",
                    models.CharField(blank=True, default="", max_length=20, verbose_name="base price unit"),
                ),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="TierPrice",
            fields=_base_fields() + [
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="minimum quantity",
                    ),
                ),
                ("value", models.DecimalField(decimal_places=4, max_digits=18, verbose_name="value")),
                (
                    "calculation_method",
                    models.CharField(
                        choices=[
                            ("fixed", "Fixed price"),
                            ("percental", "Percent off list price"),
                            ("adjustment", "Amount off list price"),
                        ],
                        default="fixed",
                        max_length=20,
                        verbose_name="calculation method",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tier_prices",
                        to="django_pricing.product",
                    ),
                ),
            ],
            options={
                "ordering": ["quantity", "value"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="pricing_tierprice_quantity_min",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductAttributeValue",
            fields=_base_fields() + [
                ("attribute", models.CharField(max_length=100, verbose_name="attribute")),
                ("name", models.CharField(max_length=100, verbose_name="name")),
                (
                    "price_adjustment",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        max_digits=18,
                        verbose_name="price adjustment",
                    ),
                ),
                (
                    "display_order",
                    models.PositiveIntegerField(default=0, verbose_name="display order"),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attribute_values",
                        to="django_pricing.product",
                    ),
                ),
            ],
            options={
                "ordering": ["attribute", "display_order", "name"],
            },
        ),
        migrations.CreateModel(
            name="AttributeValueTierPrice",
            fields=_base_fields() + [
                (
                    "quantity",
                    models.PositiveIntegerField(
                        validators=[django.core.validators.MinValueValidator(1)],
                        verbose_name="minimum quantity",
                    ),
                ),
                (
                    "price_adjustment",
                    models.DecimalField(decimal_places=4, max_digits=18, verbose_name="price adjustment"),
                ),
                (
                    "attribute_value",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tier_prices",
                        to="django_pricing.productattributevalue",
                    ),
                ),
            ],
            options={
                "ordering": ["quantity", "price_adjustment"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="pricing_attrtierprice_quantity_min",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Discount",
            fields=_base_fields() + [
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("use_percentage", models.BooleanField(default=False, verbose_name="use percentage")),
                (
                    "percentage",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                        verbose_name="percentage",
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=4,
                        default=Decimal("0"),
                        help_text="Fixed amount off, in the product's currency",
                        max_digits=18,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                        verbose_name="amount",
                    ),
                ),
                (
                    "minimum_quantity",
                    models.PositiveIntegerField(default=1, verbose_name="minimum quantity"),
                ),
                ("starts_at", models.DateTimeField(blank=True, null=True, verbose_name="starts at")),
                ("ends_at", models.DateTimeField(blank=True, null=True, verbose_name="ends at")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                (
                    "products",
                    models.ManyToManyField(
                        blank=True, related_name="discounts", to="django_pricing.product"
                    ),
                ),
                (
                    "customers",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Leave empty to offer the discount to every customer",
                        related_name="pricing_discounts",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
    ]
