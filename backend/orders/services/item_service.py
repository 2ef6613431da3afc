from typing import Optional
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from orders.calculators import OrderCalculator
from orders.exceptions import LineInProgress, LineNotFound, OrderClosed
from orders.models import Order, OrderItem

from .calculation_service import OrderCalculationService
from .order_service import OrderService

logger = logging.getLogger(__name__)


class OrderItemService:
    """Service for changing and removing individual order items."""

    @staticmethod
    def get_item(line_id, *, for_update: bool = False) -> OrderItem:
        queryset = OrderItem.objects.select_related("order", "product")
        if for_update:
            queryset = OrderItem.objects.select_for_update()
        try:
            return queryset.get(pk=line_id)
        except (OrderItem.DoesNotExist, ValidationError):
            raise LineNotFound(line_id)

    @staticmethod
    def list_items(order_id):
        return OrderService.get_order(order_id).items.all()

    @staticmethod
    def _ensure_order_open(order: Order, action: str):
        if order.is_closed:
            logger.warning(f"Rejected item {action} on closed order {order.order_number}")
            raise OrderClosed(order, f"Cannot {action} items in a closed order")

    @staticmethod
    def _ensure_removable(order: Order, line: OrderItem):
        if order.is_closed:
            logger.warning(f"Rejected item removal on closed order {order.order_number}")
            raise OrderClosed(order, "Cannot remove items from a closed order")
        if line.is_locked:
            logger.warning(f"Rejected removal of {line.status} item {line.pk} on {order.order_number}")
            raise LineInProgress(line)

    @staticmethod
    def update_item(
        line_id,
        *,
        quantity: Optional[int] = None,
        notes: Optional[str] = None,
        status: Optional[str] = None,
    ) -> OrderItem:
        """
        Change an item's quantity, notes or status.

        A quantity change recomputes the item subtotal and the order totals;
        notes and status are plain field writes.
        """
        line = OrderItemService.get_item(line_id)
        OrderItemService._ensure_order_open(line.order, "update")

        with transaction.atomic():
            order = OrderService.get_order_for_update(line.order_id)
            OrderItemService._ensure_order_open(order, "update")
            line = OrderItemService.get_item(line_id, for_update=True)

            update_fields = ["updated_at"]
            if quantity is not None:
                line.quantity = quantity
                line.subtotal = OrderCalculator.line_subtotal(line.unit_price, quantity)
                update_fields += ["quantity", "subtotal"]
            if notes is not None:
                line.notes = notes
                update_fields.append("notes")
            if status is not None:
                line.status = status
                update_fields.append("status")
            line.save(update_fields=update_fields)

            if quantity is not None:
                OrderCalculationService.recalculate_order_totals(order)

        logger.info(
            f"Updated item {line.pk} on {order.order_number}: "
            f"{', '.join(f for f in update_fields if f != 'updated_at')}"
        )
        return OrderItemService.get_item(line.pk)

    @staticmethod
    def remove_item(line_id) -> None:
        """
        Delete an item and recompute the order totals over what is left.

        Items that are being prepared or were served cannot be removed.
        """
        line = OrderItemService.get_item(line_id)
        OrderItemService._ensure_removable(line.order, line)

        with transaction.atomic():
            order = OrderService.get_order_for_update(line.order_id)
            line = OrderItemService.get_item(line_id, for_update=True)
            OrderItemService._ensure_removable(order, line)

            line.delete()
            OrderCalculationService.recalculate_order_totals(order)

        logger.info(f"Removed item {line_id} from {order.order_number}, total now {order.total}")
