from typing import Dict, Iterable, List, Optional
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from orders.calculators import OrderCalculator
from orders.config import order_settings
from orders.exceptions import (
    EmptyOrder,
    InvalidStatusTransition,
    OrderClosed,
    OrderNotFound,
)
from orders.models import Order, OrderItem
from products.models import Product
from products.services import ProductService, normalize_id
from tables.models import DiningTable
from tables.services import TableService
from users.models import User

from .calculation_service import OrderCalculationService
from .numbering_service import OrderNumberService

logger = logging.getLogger(__name__)


class OrderService:
    """
    Core service for the order lifecycle.

    Requested items are dicts with `product_id`, `quantity` and optional
    `notes`. Table and product checks run before any transaction opens; the
    writes for a single operation then happen atomically.
    """

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @staticmethod
    def get_order(order_id) -> Order:
        """Order with its items, products, table and user loaded."""
        try:
            return (
                Order.objects.select_related("table", "user")
                .prefetch_related("items__product")
                .get(pk=order_id)
            )
        except (Order.DoesNotExist, ValidationError):
            raise OrderNotFound(order_id)

    @staticmethod
    def get_order_for_update(order_id) -> Order:
        """
        Lock the order row until the surrounding transaction ends.

        Every path that recalculates totals goes through here first, so two
        concurrent item changes on one order are applied one after the other.
        """
        try:
            return Order.objects.select_for_update().get(pk=order_id)
        except (Order.DoesNotExist, ValidationError):
            raise OrderNotFound(order_id)

    @staticmethod
    def _get_plain(order_id) -> Order:
        try:
            return Order.objects.get(pk=order_id)
        except (Order.DoesNotExist, ValidationError):
            raise OrderNotFound(order_id)

    # ------------------------------------------------------------------
    # Line building
    # ------------------------------------------------------------------

    @staticmethod
    def build_order_items(
        order: Order,
        requested_items: Iterable[dict],
        products: Dict[str, Product],
        calculator: OrderCalculator,
    ) -> List[OrderItem]:
        """Unsaved OrderItems with the product's current price captured."""
        items = []
        for requested in requested_items:
            product = products[normalize_id(requested["product_id"])]
            quantity = requested["quantity"]
            items.append(
                OrderItem(
                    order=order,
                    product=product,
                    quantity=quantity,
                    unit_price=product.price,
                    subtotal=calculator.line_subtotal(product.price, quantity),
                    notes=requested.get("notes") or "",
                )
            )
        return items

    @staticmethod
    def _ensure_accepts_items(order: Order):
        if order.status in Order.CLOSED_STATUSES:
            logger.warning(f"Rejected new items for {order.order_number}: order is {order.status}")
            raise OrderClosed(order, "Cannot add items to a closed order")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @staticmethod
    def create_order(
        *,
        items: List[dict],
        user: Optional[User] = None,
        table_id=None,
        notes: str = "",
    ) -> Order:
        """
        Open a new order with at least one item.

        Raises:
            EmptyOrder: no items requested
            TableNotFound / TableUnavailable: the table can't take an order
            ProductsNotFound / ProductsUnavailable: a requested product can't be sold
        """
        if not items:
            raise EmptyOrder()

        table = TableService.check_available(table_id) if table_id else None
        products = ProductService.validate_and_fetch(item["product_id"] for item in items)

        order = OrderService._persist_new_order(items, products, user, table, notes)

        logger.info(
            f"Created order {order.order_number} with {len(items)} item(s), "
            f"total {order.total}"
            + (f", table {table.table_number}" if table else "")
        )
        return OrderService.get_order(order.pk)

    @staticmethod
    @transaction.atomic
    def _persist_new_order(
        items: List[dict],
        products: Dict[str, Product],
        user: Optional[User],
        table: Optional[DiningTable],
        notes: str,
    ) -> Order:
        calculator = OrderCalculationService.get_calculator()

        order = Order(
            order_number=OrderNumberService.next_order_number(),
            status=Order.OrderStatus.OPEN,
            table=table,
            user=user,
            notes=notes or "",
        )
        order_items = OrderService.build_order_items(order, items, products, calculator)

        totals = calculator.calculate_totals(item.subtotal for item in order_items)
        order.subtotal = totals.subtotal
        order.tax = totals.tax
        order.total = totals.total
        order.save()

        OrderItem.objects.bulk_create(order_items)

        if table is not None:
            TableService.occupy(table)

        return order

    @staticmethod
    def update_notes(order_id, notes: str) -> Order:
        order = OrderService._get_plain(order_id)
        order.notes = notes or ""
        order.save(update_fields=["notes", "updated_at"])
        logger.info(f"Updated notes on {order.order_number}")
        return OrderService.get_order(order.pk)

    @staticmethod
    @transaction.atomic
    def update_status(order_id, new_status: str) -> Order:
        """
        Move an order to a new status.

        The allowed moves come from order_settings.status_transitions.
        Entering paid or cancelled stamps closed_at; nothing ever clears it.
        """
        if new_status not in Order.OrderStatus.values:
            raise InvalidStatusTransition(
                None, new_status, f"'{new_status}' is not a valid order status"
            )

        order = OrderService.get_order_for_update(order_id)
        previous = order.status

        if not order_settings.can_transition(previous, new_status):
            logger.warning(
                f"Rejected status change on {order.order_number}: {previous} -> {new_status}"
            )
            raise InvalidStatusTransition(previous, new_status)

        order.status = new_status
        update_fields = ["status", "updated_at"]
        if new_status in Order.CLOSED_STATUSES:
            order.closed_at = timezone.now()
            update_fields.append("closed_at")
        order.save(update_fields=update_fields)

        logger.info(f"Order {order.order_number} status changed: {previous} -> {new_status}")
        return OrderService.get_order(order.pk)

    @staticmethod
    def add_items(order_id, items: List[dict]) -> Order:
        """
        Append items to an open order and recompute its totals over all items.

        Raises:
            OrderNotFound, OrderClosed, EmptyOrder,
            ProductsNotFound / ProductsUnavailable
        """
        if not items:
            raise EmptyOrder()

        OrderService._ensure_accepts_items(OrderService._get_plain(order_id))
        products = ProductService.validate_and_fetch(item["product_id"] for item in items)

        with transaction.atomic():
            order = OrderService.get_order_for_update(order_id)
            # Status may have changed since the unlocked check above.
            OrderService._ensure_accepts_items(order)

            calculator = OrderCalculationService.get_calculator()
            OrderItem.objects.bulk_create(
                OrderService.build_order_items(order, items, products, calculator)
            )
            OrderCalculationService.recalculate_order_totals(order)

        logger.info(
            f"Added {len(items)} item(s) to {order.order_number}, total now {order.total}"
        )
        return OrderService.get_order(order.pk)

    @staticmethod
    def remove_order(order_id) -> None:
        """Hard-delete an order and its items. The table's status is left as is."""
        order = OrderService._get_plain(order_id)
        order_number = order.order_number
        status = order.status
        order.delete()
        logger.info(f"Deleted order {order_number} (status was {status})")
