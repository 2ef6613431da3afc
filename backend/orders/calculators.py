"""
Order pricing.

Pure functions over Decimal; nothing here touches the database.

- line subtotal = round(unit_price * quantity, 2)
- order subtotal = exact sum of the line subtotals (not re-rounded)
- tax = round(subtotal * tax_rate, 2)
- total = subtotal + tax

Rounding is ROUND_HALF_UP, which is how amounts are shown to guests.

Usage:
    from orders.calculators import OrderCalculator
    calculator = OrderCalculator(tax_rate=Decimal("0.12"))
    totals = calculator.calculate_totals(line.subtotal for line in order.items.all())
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # via repr so 9.99 stays 9.99
        return Decimal(repr(value))
    return Decimal(value)


def quantize(value: Number) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    def as_dict(self):
        return {"subtotal": self.subtotal, "tax": self.tax, "total": self.total}


class OrderCalculator:
    """
    Calculator for line and order amounts at a given tax rate.

    The rate is passed in rather than read from settings so the same
    instance can be used for previews and for persisted orders.
    """

    def __init__(self, tax_rate: Number):
        tax_rate = to_decimal(tax_rate)
        if tax_rate < 0:
            raise ValueError(f"Tax rate cannot be negative: {tax_rate}")
        self.tax_rate = tax_rate

    @staticmethod
    def line_subtotal(unit_price: Number, quantity: int) -> Decimal:
        if quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {quantity}")
        return quantize(to_decimal(unit_price) * quantity)

    @staticmethod
    def calculate_subtotal(line_subtotals: Iterable[Number]) -> Decimal:
        return sum((to_decimal(amount) for amount in line_subtotals), ZERO)

    def calculate_tax(self, subtotal: Number) -> Decimal:
        return quantize(to_decimal(subtotal) * self.tax_rate)

    @staticmethod
    def calculate_total(subtotal: Number, tax: Number) -> Decimal:
        return to_decimal(subtotal) + to_decimal(tax)

    def calculate_totals(self, line_subtotals: Iterable[Number]) -> OrderTotals:
        """Subtotal, tax and total for a set of line subtotals, computed as one unit."""
        subtotal = self.calculate_subtotal(line_subtotals)
        tax = self.calculate_tax(subtotal)
        return OrderTotals(
            subtotal=subtotal,
            tax=tax,
            total=self.calculate_total(subtotal, tax),
        )
