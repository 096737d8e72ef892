"""Money and quantity values used by products and sales.

Both are frozen and compared by value. Building one with a bad amount
raises ValidationError, so prices, line totals and sale totals are
always whole cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from newsstand.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """A non-negative amount of reais, exact to the cent.

    Amounts are kept at two decimal places, the same scale the store
    uses, so what a caller is shown is what gets saved.
    """

    amount: Decimal
    currency: str = "BRL"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be a number, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        try:
            cents = self.amount.quantize(CENT)
        except InvalidOperation as exc:
            raise ValidationError(f"Money amount is too large: {self.amount}") from exc
        if cents != self.amount:
            raise ValidationError(
                f"Money amount cannot have fractions of a cent, got {self.amount}"
            )
        object.__setattr__(self, "amount", cents.copy_abs())

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return f"R$ {self.amount}"

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Parse user input such as ``"5.50"`` or ``3``.

        Floats go through ``str`` so ``5.5`` becomes ``Decimal("5.5")``
        rather than its binary expansion.
        """
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Used for sale lines and stock movements, which are never zero or
    negative. A product's stock level itself is a plain int because it
    may legitimately go below zero.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
