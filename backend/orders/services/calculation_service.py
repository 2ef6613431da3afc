import logging

from django.db import transaction

from orders.calculators import OrderCalculator, OrderTotals
from orders.config import order_settings
from orders.models import Order

logger = logging.getLogger(__name__)


class OrderCalculationService:
    """Keeps an order's subtotal, tax and total in line with its current items."""

    @staticmethod
    def get_calculator() -> OrderCalculator:
        return OrderCalculator(tax_rate=order_settings.tax_rate)

    @staticmethod
    @transaction.atomic
    def recalculate_order_totals(order: Order) -> Order:
        """
        Recompute the three monetary fields from the order's items and save
        them together.

        Callers are expected to hold the order's row lock (see
        OrderService.get_order_for_update) for the whole read-modify-write.
        """
        line_subtotals = order.items.values_list("subtotal", flat=True)
        totals: OrderTotals = OrderCalculationService.get_calculator().calculate_totals(line_subtotals)

        order.subtotal = totals.subtotal
        order.tax = totals.tax
        order.total = totals.total
        order.save(update_fields=["subtotal", "tax", "total", "updated_at"])

        logger.debug(
            f"Recalculated {order.order_number}: subtotal={totals.subtotal} "
            f"tax={totals.tax} total={totals.total}"
        )
        return order
