from rest_framework import serializers
from orders.models import OrderItem
from products.models import Product
from core_backend.base import BaseModelSerializer


class OrderItemProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = ["id", "name", "image_url"]


class OrderItemSerializer(BaseModelSerializer):
    product = OrderItemProductSerializer(read_only=True)
    order_id = serializers.UUIDField(read_only=True)
    product_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "order_id",
            "product_id",
            "product",
            "quantity",
            "unit_price",
            "subtotal",
            "notes",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["product"]


class OrderItemInputSerializer(serializers.Serializer):
    """One requested line: which product, how many, and kitchen notes."""

    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class UpdateOrderItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1, required=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=OrderItem.ItemStatus.choices, required=False)

    def validate(self, data):
        if not data:
            raise serializers.ValidationError(
                "Provide at least one of: quantity, notes, status."
            )
        return data
