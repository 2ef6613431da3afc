"""
Orders views package - modular view layer with mixins.
"""

from .order_viewset import OrderViewSet
from .item_viewset import OrderItemViewSet, OrderItemDetailViewSet

__all__ = [
    'OrderViewSet',
    'OrderItemViewSet',
    'OrderItemDetailViewSet',
]
