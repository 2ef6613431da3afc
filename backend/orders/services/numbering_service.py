import re
import logging
from datetime import date
from typing import Optional

from django.db import transaction
from django.utils import timezone

from orders.models import Order, OrderNumberSequence

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_RE = re.compile(r"^ORD-(\d{8})-(\d{3,})$")


def format_order_number(day: date, sequence: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}-{day:%Y%m%d}-{sequence:03d}"


def parse_order_number(order_number: str) -> Optional[int]:
    """Return the daily sequence of an order number, or None if it doesn't match the format."""
    match = ORDER_NUMBER_RE.match(order_number or "")
    if not match:
        return None
    return int(match.group(2))


class OrderNumberService:
    """
    Mints ORD-YYYYMMDD-NNN numbers from a per-day counter row.

    The counter is locked for the rest of the caller's transaction, so two
    orders created at the same moment get consecutive numbers instead of the
    same one. If the caller's transaction rolls back, so does the increment.
    """

    @staticmethod
    def highest_existing_sequence(day: date) -> int:
        prefix = f"{ORDER_NUMBER_PREFIX}-{day:%Y%m%d}-"
        numbers = Order.objects.filter(order_number__startswith=prefix).values_list(
            "order_number", flat=True
        )
        # Compared numerically; "-1000" sorts before "-999" as text.
        sequences = [parse_order_number(number) for number in numbers]
        return max((seq for seq in sequences if seq is not None), default=0)

    @staticmethod
    @transaction.atomic
    def next_order_number(day: Optional[date] = None) -> str:
        day = day or timezone.localdate()

        sequence, created = OrderNumberSequence.objects.select_for_update().get_or_create(
            day=day,
            defaults={"last_value": lambda: OrderNumberService.highest_existing_sequence(day)},
        )
        sequence.last_value += 1
        sequence.save(update_fields=["last_value"])

        order_number = format_order_number(day, sequence.last_value)
        if created:
            logger.debug(f"Started order sequence for {day:%Y-%m-%d}")
        logger.debug(f"Minted order number {order_number}")
        return order_number
