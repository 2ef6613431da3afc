from rest_framework import serializers
from orders.models import Order


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Validates the requested status value. Whether the move is allowed from
    the order's current status is decided by OrderService.update_status.
    """

    status = serializers.ChoiceField(choices=Order.OrderStatus.choices)
