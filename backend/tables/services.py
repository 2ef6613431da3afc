import logging

from django.core.exceptions import ValidationError
from django.utils import timezone

from .exceptions import TableNotFound, TableUnavailable
from .models import DiningTable

logger = logging.getLogger(__name__)


class TableService:
    @staticmethod
    def get_table(table_id) -> DiningTable:
        try:
            return DiningTable.objects.get(pk=table_id)
        except (DiningTable.DoesNotExist, ValidationError):
            raise TableNotFound(table_id)

    @staticmethod
    def check_available(table_id) -> DiningTable:
        """Return the table if it can take a new order, else raise."""
        table = TableService.get_table(table_id)
        if table.status != DiningTable.Status.AVAILABLE:
            logger.warning(
                f"Rejected order for table {table.table_number}: status is {table.status}"
            )
            raise TableUnavailable(table)
        return table

    @staticmethod
    def occupy(table: DiningTable) -> DiningTable:
        """
        Flip an available table to occupied in a single conditional UPDATE.

        Must run inside the order-creation transaction. If another request
        changed the table's status after check_available, no row matches and
        TableUnavailable rolls the whole order back.
        """
        updated = DiningTable.objects.filter(
            pk=table.pk, status=DiningTable.Status.AVAILABLE
        ).update(status=DiningTable.Status.OCCUPIED, updated_at=timezone.now())
        if not updated:
            table.refresh_from_db(fields=["status"])
            logger.warning(
                f"Table {table.table_number} changed to {table.status} while an order was being created"
            )
            raise TableUnavailable(table)

        table.status = DiningTable.Status.OCCUPIED
        logger.info(f"Table {table.table_number} is now occupied")
        return table

    @staticmethod
    def set_status(table: DiningTable, status: str) -> DiningTable:
        previous = table.status
        table.status = status
        table.save(update_fields=["status", "updated_at"])
        logger.info(f"Table {table.table_number} status changed: {previous} -> {status}")
        return table
