"""Django app configuration for django-pricing."""

from django.apps import AppConfig


class DjangoPricingConfig(AppConfig):
    """App configuration for django-pricing."""

    name = 'django_pricing'
    verbose_name = 'Pricing'
    default_auto_field = 'django.db.models.BigAutoField'
