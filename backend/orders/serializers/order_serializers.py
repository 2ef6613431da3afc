from rest_framework import serializers
from orders.models import Order
from tables.models import DiningTable
from users.models import User
from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from .order_item_serializers import OrderItemSerializer, OrderItemInputSerializer


class OrderTableSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiningTable
        fields = ["id", "table_number"]


class OrderUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "name"]


class OrderSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Read representation of an order.

    Supports multiple view modes via ?view= param:
    - list: header fields only, no items (default for list action)
    - detail: everything including items (default for retrieve)

    Usage:
        GET /api/orders/              → list mode
        GET /api/orders/?view=detail  → detail mode, items included
        GET /api/orders/<id>/         → detail mode
    """

    table = OrderTableSerializer(read_only=True)
    user = OrderUserSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "subtotal",
            "tax",
            "total",
            "notes",
            "closed_at",
            "table",
            "user",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["table", "user"]
        prefetch_related_fields = ["items__product"]
        fieldsets = {
            'list': [
                'id',
                'order_number',
                'status',
                'subtotal',
                'tax',
                'total',
                'notes',
                'closed_at',
                'table',
                'user',
                'created_at',
                'updated_at',
            ],
            'detail': '__all__',
        }


class OrderCreateSerializer(serializers.Serializer):
    table_id = serializers.UUIDField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class AddItemsSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class UpdateOrderSerializer(serializers.Serializer):
    """Only the notes of an order are edited directly; everything else has its own endpoint."""

    notes = serializers.CharField(allow_blank=True)
