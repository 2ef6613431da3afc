"""
Orders serializers package - modular serializer layer.
"""

# Order item serializers
from .order_item_serializers import (
    OrderItemSerializer,
    OrderItemInputSerializer,
    UpdateOrderItemSerializer,
)

# Order serializers
from .order_serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    AddItemsSerializer,
    UpdateOrderSerializer,
)

# Status serializers
from .status_serializers import UpdateOrderStatusSerializer

__all__ = [
    # Order items
    'OrderItemSerializer',
    'OrderItemInputSerializer',
    'UpdateOrderItemSerializer',
    # Orders
    'OrderSerializer',
    'OrderCreateSerializer',
    'AddItemsSerializer',
    'UpdateOrderSerializer',
    # Status
    'UpdateOrderStatusSerializer',
]
