"""
Order lifecycle errors. All of them are rendered by
core_backend.exceptions.api_exception_handler.
"""
from core_backend.exceptions import ServiceError, NotFoundError


class OrderNotFound(NotFoundError):
    default_code = "order_not_found"

    def __init__(self, order_id, message=None):
        self.order_id = order_id
        if message is None:
            message = f'Order with id "{order_id}" not found'
        super().__init__(message)


class LineNotFound(NotFoundError):
    default_code = "order_item_not_found"

    def __init__(self, line_id, message=None):
        self.line_id = line_id
        if message is None:
            message = f'Order item with id "{line_id}" not found'
        super().__init__(message)


class OrderClosed(ServiceError):
    """The order has been paid or cancelled; its lines are frozen."""

    default_code = "order_closed"
    default_message = "Cannot modify a closed order"

    def __init__(self, order, message=None):
        self.order = order
        super().__init__(message)

    def get_details(self):
        return {"order_status": self.order.status}


class LineInProgress(ServiceError):
    default_code = "order_item_in_progress"
    default_message = "Cannot remove items that are being prepared or already served"

    def __init__(self, line, message=None):
        self.line = line
        super().__init__(message)

    def get_details(self):
        return {"item_status": self.line.status}


class InvalidStatusTransition(ServiceError):
    default_code = "invalid_status_transition"

    def __init__(self, current, new, message=None):
        self.current = current
        self.new = new
        if message is None:
            message = f"Cannot transition order from {current} to {new}"
        super().__init__(message)


class EmptyOrder(ServiceError):
    default_code = "empty_order"
    default_message = "An order needs at least one item"
