from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response

from orders.serializers import OrderSerializer, UpdateOrderStatusSerializer
from orders.services import OrderService


class StatusActionsMixin:
    """
    Mixin for order status transition actions

    This mixin provides action methods for OrderViewSet.
    """

    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request: Request, pk=None) -> Response:
        """
        PATCH /api/orders/<id>/status/ {"status": "paid"}

        Moving to paid or cancelled closes the order (closed_at is set) and
        freezes its items.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_status(pk, serializer.validated_data["status"])
        return Response(OrderSerializer(order, context=self.get_serializer_context()).data)
