"""Exceptions for django-pricing."""


class PricingError(Exception):
    """Base exception for pricing errors."""
    pass


class InvalidContext(PricingError):
    """Pricing context is malformed (quantity, shape or attribute selection)."""
    pass


class ConversionUnavailable(PricingError):
    """No exchange rate path exists between two currencies."""

    def __init__(self, source: str, target: str, message: str | None = None):
        self.source = source
        self.target = target
        super().__init__(message or f"No exchange rate from {source} to {target}")


class CollaboratorUnavailable(PricingError):
    """Catalog, discount or rate storage could not be reached."""
    pass


class CurrencyMismatchError(PricingError, ValueError):
    """Raised when attempting operations between different currencies."""
    pass
