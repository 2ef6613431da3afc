from rest_framework import status, viewsets
from rest_framework.request import Request
from rest_framework.response import Response

from orders.models import OrderItem
from orders.serializers import (
    OrderSerializer,
    OrderItemSerializer,
    AddItemsSerializer,
    UpdateOrderItemSerializer,
)
from orders.services import OrderService, OrderItemService
from .order_viewset import UUID_REGEX


class OrderItemViewSet(viewsets.GenericViewSet):
    """
    Items of one order, nested under /api/orders/<order_pk>/items/.

    GET lists the order's items; POST appends items and returns the whole
    order with its recalculated totals.
    """

    queryset = OrderItem.objects.all()
    serializer_class = OrderItemSerializer

    def list(self, request: Request, order_pk=None) -> Response:
        items = OrderItemService.list_items(order_pk)
        return Response(OrderItemSerializer(items, many=True).data)

    def create(self, request: Request, order_pk=None) -> Response:
        serializer = AddItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = OrderService.add_items(order_pk, serializer.validated_data["items"])
        return Response(
            OrderSerializer(order, context={"view_mode": "detail"}).data,
            status=status.HTTP_201_CREATED,
        )


class OrderItemDetailViewSet(viewsets.GenericViewSet):
    """
    A single order item at /api/order-items/<id>/.

    PATCH accepts quantity, notes and status; DELETE refuses items that are
    being prepared or were served.
    """

    queryset = OrderItem.objects.all()
    serializer_class = OrderItemSerializer
    lookup_value_regex = UUID_REGEX

    def retrieve(self, request: Request, pk=None) -> Response:
        return Response(OrderItemSerializer(OrderItemService.get_item(pk)).data)

    def partial_update(self, request: Request, pk=None) -> Response:
        serializer = UpdateOrderItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        line = OrderItemService.update_item(pk, **serializer.validated_data)
        return Response(OrderItemSerializer(line).data)

    def destroy(self, request: Request, pk=None) -> Response:
        OrderItemService.remove_item(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
