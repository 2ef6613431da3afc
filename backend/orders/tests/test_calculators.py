"""
Order pricing tests.

OrderCalculator is pure Decimal arithmetic, so none of these touch the database.
"""
import pytest
from decimal import Decimal

from orders.calculators import OrderCalculator, OrderTotals, quantize, to_decimal


class TestRounding:
    """Half-up rounding to cents"""

    @pytest.mark.parametrize("value, expected", [
        ("2.9976", "3.00"),
        ("0.125", "0.13"),
        ("0.124", "0.12"),
        ("3.8376", "3.84"),
        ("10", "10.00"),
    ])
    def test_quantize_rounds_half_up(self, value, expected):
        assert quantize(value) == Decimal(expected)

    def test_float_input_keeps_its_printed_value(self):
        assert to_decimal(9.99) == Decimal("9.99")


class TestLineSubtotal:

    def test_unit_price_times_quantity(self):
        assert OrderCalculator.line_subtotal(Decimal("9.99"), 2) == Decimal("19.98")

    def test_sub_cent_prices_round_half_up(self):
        # 0.335 * 3 = 1.005
        assert OrderCalculator.line_subtotal(Decimal("0.335"), 3) == Decimal("1.01")

    def test_quantity_below_one_is_rejected(self):
        with pytest.raises(ValueError):
            OrderCalculator.line_subtotal(Decimal("5.00"), 0)


class TestOrderTotals:

    def test_two_line_order_at_twelve_percent(self):
        """
        2 x 9.99 + 1 x 5.00 = 24.98
        tax = round(24.98 * 0.12) = round(2.9976) = 3.00
        """
        calculator = OrderCalculator(tax_rate=Decimal("0.12"))
        totals = calculator.calculate_totals([Decimal("19.98"), Decimal("5.00")])

        assert totals == OrderTotals(
            subtotal=Decimal("24.98"),
            tax=Decimal("3.00"),
            total=Decimal("27.98"),
        )

    def test_adding_a_line_recomputes_everything(self):
        calculator = OrderCalculator(tax_rate=Decimal("0.12"))
        totals = calculator.calculate_totals([Decimal("19.98"), Decimal("5.00"), Decimal("7.00")])

        assert totals.subtotal == Decimal("31.98")
        assert totals.tax == Decimal("3.84")
        assert totals.total == Decimal("35.82")

    def test_subtotal_is_an_exact_sum(self):
        subtotal = OrderCalculator.calculate_subtotal([Decimal("0.10"), Decimal("0.20"), Decimal("0.30")])
        assert subtotal == Decimal("0.60")

    def test_total_is_subtotal_plus_tax(self):
        calculator = OrderCalculator(tax_rate=Decimal("0.16"))
        totals = calculator.calculate_totals([Decimal("12.34"), Decimal("0.99")])

        assert totals.tax == quantize(totals.subtotal * Decimal("0.16"))
        assert totals.total == totals.subtotal + totals.tax

    def test_empty_order_totals_are_zero(self):
        totals = OrderCalculator(tax_rate=Decimal("0.12")).calculate_totals([])
        assert totals.as_dict() == {
            "subtotal": Decimal("0.00"),
            "tax": Decimal("0.00"),
            "total": Decimal("0.00"),
        }

    def test_zero_tax_rate(self):
        totals = OrderCalculator(tax_rate=0).calculate_totals([Decimal("10.00")])
        assert totals.tax == Decimal("0.00")
        assert totals.total == Decimal("10.00")

    def test_negative_tax_rate_is_rejected(self):
        with pytest.raises(ValueError):
            OrderCalculator(tax_rate=Decimal("-0.01"))
