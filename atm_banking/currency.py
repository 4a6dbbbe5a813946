"""
Money Module

Fixed-point monetary amounts backed by Decimal, exact to two fraction digits.
NEVER uses float for monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
import re

from .exceptions import AmountFormatError

# Set global decimal context for financial precision
getcontext().prec = 28

CENT = Decimal('0.01')

# Largest amount or balance the terminal handles
MAX_AMOUNT = Decimal('999999999999.99')

_AMOUNT_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)$')


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation rounded to whole cents.
    All monetary values MUST use this class.
    """
    amount: Decimal

    def __post_init__(self):
        amount = self.amount
        if not isinstance(amount, Decimal):
            amount = Decimal(str(amount))

        # Round to cent precision
        try:
            rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError(f"Amount out of range: {amount}") from e
        object.__setattr__(self, 'amount', rounded)

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def __neg__(self) -> 'Money':
        return Money(-self.amount)

    def __abs__(self) -> 'Money':
        return Money(abs(self.amount))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other: 'Money') -> bool:
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self) -> str:
        """Format for display"""
        return f"{self.amount:.2f}"


def parse_amount(value: str) -> Money:
    """
    Parse user input into a positive Money amount

    Args:
        value: Raw text typed at the terminal

    Returns:
        Money rounded to two fraction digits

    Raises:
        AmountFormatError: If the text is not a positive decimal number
            no larger than MAX_AMOUNT
    """
    if value is None or not isinstance(value, str):
        raise AmountFormatError("Amount must be a non-empty string")

    clean_value = value.strip()
    if not _AMOUNT_PATTERN.match(clean_value):
        raise AmountFormatError(f"Cannot convert '{value}' to an amount")

    try:
        value_decimal = Decimal(clean_value)
    except InvalidOperation as e:
        raise AmountFormatError(f"Cannot convert '{value}' to an amount") from e

    if value_decimal > MAX_AMOUNT:
        raise AmountFormatError(f"Amount exceeds {MAX_AMOUNT}: '{value}'")

    money = Money(value_decimal)

    if not money.is_positive():
        raise AmountFormatError(f"Amount must be positive: '{value}'")

    return money
