from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import BaseViewSet
from orders.filters import OrderFilter
from orders.models import Order
from orders.serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    UpdateOrderSerializer,
)
from orders.services import OrderService
from users.permissions import IsManagerOrHigher
from .status_actions import StatusActionsMixin

UUID_REGEX = "[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"


class OrderViewSet(StatusActionsMixin, BaseViewSet):
    """
    Dine-in orders.

    Reads go through the queryset (filters, search, ordering, pagination);
    every write is delegated to OrderService.

    Endpoints:
        GET    /api/orders/                 list (?status=&table=&user=&search=&ordering=)
        POST   /api/orders/                 open an order with its first items
        GET    /api/orders/<id>/            order with items
        PATCH  /api/orders/<id>/            edit notes
        PATCH  /api/orders/<id>/status/     change status
        DELETE /api/orders/<id>/            delete (managers only)
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    search_fields = ["order_number", "notes"]
    ordering_fields = ["order_number", "status", "total", "created_at", "closed_at"]
    ordering = ["-created_at"]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    lookup_value_regex = UUID_REGEX

    def get_permissions(self):
        if self.action == "destroy":
            return [IsAuthenticated(), IsManagerOrHigher()]
        return super().get_permissions()

    def retrieve(self, request: Request, *args, **kwargs) -> Response:
        order = OrderService.get_order(kwargs["pk"])
        return Response(self.get_serializer(order).data)

    def create(self, request: Request, *args, **kwargs) -> Response:
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.create_order(user=request.user, **serializer.validated_data)
        return Response(self.get_serializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, *args, **kwargs) -> Response:
        serializer = UpdateOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.update_notes(kwargs["pk"], serializer.validated_data["notes"])
        return Response(self.get_serializer(order).data)

    def destroy(self, request: Request, *args, **kwargs) -> Response:
        OrderService.remove_order(kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)
