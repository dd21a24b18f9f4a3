"""Money value object with currency-aware arithmetic and conversion."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

from django_pricing.exceptions import CurrencyMismatchError


# Display/settlement precision per currency
CURRENCY_DECIMALS = {
    'USD': 2, 'EUR': 2, 'GBP': 2, 'CHF': 2,
    'CAD': 2, 'AUD': 2, 'PLN': 2, 'SEK': 2,
    'JPY': 0, 'KRW': 0,
    'BTC': 8,
}

CURRENCY_SYMBOLS = {
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'CHF': 'CHF ',
}

Number = Union[Decimal, int, float, str]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Route floats through str so 19.99 stays 19.99
    return Decimal(str(value))


@dataclass(frozen=True)
class Money:
    """
    Immutable amount + currency pair.

    Arithmetic between two Money values requires the same currency; moving
    between currencies only happens through convert_to() with an explicit
    rate. No operation rounds implicitly, quantized() is the only place
    where precision is reduced.

    Usage:
        price = Money("10.00", "EUR")
        usd = price.convert_to("USD", Decimal("1.08"))  # Money(10.8000, USD)
        line = price * 3                                 # Money(30.00, EUR)
    """
    amount: Decimal
    currency: str

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', _to_decimal(self.amount))
        object.__setattr__(self, 'currency', self.currency.upper())

    @classmethod
    def zero(cls, currency: str) -> 'Money':
        return cls(Decimal('0'), currency)

    @property
    def decimals(self) -> int:
        return CURRENCY_DECIMALS.get(self.currency, 2)

    def quantized(self) -> 'Money':
        """Round to the currency's display precision (banker's rounding)."""
        quantized_amount = self.amount.quantize(
            Decimal(10) ** -self.decimals,
            rounding=ROUND_HALF_EVEN,
        )
        return Money(quantized_amount, self.currency)

    def convert_to(self, currency: str, rate: Number) -> 'Money':
        """
        Convert into another currency using an explicit rate.

        Converting into the money's own currency is the identity and ignores
        the rate, so no drift is introduced.

        Raises:
            ValueError: If rate is not positive.
        """
        currency = currency.upper()
        if currency == self.currency:
            return self
        rate = _to_decimal(rate)
        if rate <= 0:
            raise ValueError(f"Exchange rate must be positive, got {rate}")
        return Money(self.amount * rate, currency)

    def display(self, symbol: str | None = None) -> str:
        """Quantized, human-readable representation such as '$2.50'."""
        quantized = self.quantized()
        number = f"{abs(quantized.amount):,}"
        sign = '-' if quantized.amount < 0 else ''
        if symbol is None:
            symbol = CURRENCY_SYMBOLS.get(self.currency)
        if symbol:
            return f"{sign}{symbol}{number}"
        return f"{sign}{number} {self.currency}"

    def _check_currency(self, other: 'Money', verb: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot {verb} {self.currency} and {other.currency}"
            )

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'add')
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'subtract')
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: Number) -> 'Money':
        return Money(self.amount * _to_decimal(factor), self.currency)

    def __rmul__(self, factor: Number) -> 'Money':
        return self.__mul__(factor)

    def __truediv__(self, divisor: Number) -> 'Money':
        divisor = _to_decimal(divisor)
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide money by zero")
        return Money(self.amount / divisor, self.currency)

    def __neg__(self) -> 'Money':
        return Money(-self.amount, self.currency)

    def __lt__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        self._check_currency(other, 'compare')
        return self.amount >= other.amount

    def __str__(self):
        return f"{self.amount} {self.currency}"

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def floor_at_zero(self) -> 'Money':
        """Return self, or zero in the same currency when negative."""
        if self.amount < 0:
            return Money.zero(self.currency)
        return self
