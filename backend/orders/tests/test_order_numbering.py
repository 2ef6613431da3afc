"""
Order number tests: ORD-YYYYMMDD-NNN, one sequence per calendar day.
"""
import re
import pytest
from datetime import date

from django.db import IntegrityError, transaction
from django.utils import timezone

from orders.models import Order, OrderNumberSequence
from orders.services import OrderNumberService, OrderService
from orders.services.numbering_service import format_order_number, parse_order_number

ORDER_NUMBER_PATTERN = re.compile(r"^ORD-\d{8}-\d{3}$")


class TestOrderNumberFormat:

    def test_format_pads_sequence_to_three_digits(self):
        assert format_order_number(date(2024, 1, 15), 1) == "ORD-20240115-001"

    def test_sequence_past_999_keeps_growing(self):
        assert format_order_number(date(2024, 1, 15), 1000) == "ORD-20240115-1000"

    def test_parse_returns_sequence(self):
        assert parse_order_number("ORD-20240115-042") == 42

    @pytest.mark.parametrize("value", ["", None, "ORD-2024-001", "INV-20240115-001"])
    def test_parse_rejects_other_formats(self, value):
        assert parse_order_number(value) is None


@pytest.mark.django_db
class TestOrderNumberSequence:

    def test_first_number_of_the_day_is_001(self):
        assert OrderNumberService.next_order_number(date(2024, 1, 15)) == "ORD-20240115-001"

    def test_consecutive_numbers_on_the_same_day(self):
        first = OrderNumberService.next_order_number(date(2024, 1, 15))
        second = OrderNumberService.next_order_number(date(2024, 1, 15))

        assert parse_order_number(second) == parse_order_number(first) + 1

    def test_each_day_has_its_own_sequence(self):
        OrderNumberService.next_order_number(date(2024, 1, 15))
        OrderNumberService.next_order_number(date(2024, 1, 15))

        assert OrderNumberService.next_order_number(date(2024, 1, 16)) == "ORD-20240116-001"

    def test_sequence_continues_after_existing_orders(self):
        """A day's counter starts from the highest number already stored for that day."""
        Order.objects.create(order_number="ORD-20240115-007")

        assert OrderNumberService.next_order_number(date(2024, 1, 15)) == "ORD-20240115-008"
        assert OrderNumberSequence.objects.get(day=date(2024, 1, 15)).last_value == 8

    def test_sequence_continues_past_999_after_reseed(self):
        Order.objects.create(order_number="ORD-20240115-999")
        Order.objects.create(order_number="ORD-20240115-1000")

        assert OrderNumberService.highest_existing_sequence(date(2024, 1, 15)) == 1000
        assert OrderNumberService.next_order_number(date(2024, 1, 15)) == "ORD-20240115-1001"

    def test_existing_counter_skips_the_order_scan(self, monkeypatch):
        OrderNumberSequence.objects.create(day=date(2024, 1, 15), last_value=4)

        def fail_scan(day):
            raise AssertionError("existing orders were scanned")

        monkeypatch.setattr(OrderNumberService, "highest_existing_sequence", staticmethod(fail_scan))

        assert OrderNumberService.next_order_number(date(2024, 1, 15)) == "ORD-20240115-005"

    def test_rolled_back_creation_does_not_consume_a_number(self):
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                OrderNumberService.next_order_number(date(2024, 1, 15))
                raise RuntimeError("boom")

        assert OrderNumberService.next_order_number(date(2024, 1, 15)) == "ORD-20240115-001"

    def test_created_orders_get_todays_numbers(self, order_lines):
        first = OrderService.create_order(items=order_lines)
        second = OrderService.create_order(items=order_lines)

        today = timezone.localdate().strftime("%Y%m%d")
        for order in (first, second):
            assert ORDER_NUMBER_PATTERN.match(order.order_number)
            assert order.order_number.startswith(f"ORD-{today}-")
        assert parse_order_number(second.order_number) == parse_order_number(first.order_number) + 1

    def test_order_number_is_unique_in_storage(self):
        Order.objects.create(order_number="ORD-20240115-001")

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Order.objects.create(order_number="ORD-20240115-001")
