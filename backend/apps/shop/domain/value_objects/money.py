from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[int, float, str, Decimal]

CENT = Decimal('0.01')

CURRENCY_SYMBOLS = {
    'INR': '₹',
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without float artifacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float, str)):
        return Decimal(str(value))
    raise ValueError(f"Invalid amount type: {type(value)}")


def round_money(value: Number) -> Decimal:
    """Round to two decimal places, half-up"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Money value object with currency.

    The amount keeps full precision; rounding happens only in
    `rounded()` and `__str__`, at the presentation boundary.
    """
    amount: Decimal
    currency: str = 'INR'

    def __post_init__(self):
        if self.currency not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unsupported currency: {self.currency}")

        amount = to_decimal(self.amount)
        if amount < 0:
            raise ValueError("Amount cannot be negative")
        object.__setattr__(self, 'amount', amount)

    def rounded(self) -> Decimal:
        return round_money(self.amount)

    def __str__(self):
        symbol = CURRENCY_SYMBOLS.get(self.currency, '')
        return f"{symbol}{self.rounded():,.2f}"

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only subtract Money from Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract different currencies: {self.currency} and {other.currency}")
        return Money(max(self.amount - other.amount, Decimal('0')), self.currency)

    def is_zero(self) -> bool:
        return self.amount == 0

    @classmethod
    def zero(cls, currency: str = 'INR') -> 'Money':
        """Create zero money"""
        return cls(0, currency)
