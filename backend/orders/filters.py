from django_filters import rest_framework as filters
from core_backend.base import BaseFilterSet
from .models import Order


class OrderFilter(BaseFilterSet):
    """
    ?status=open&status=in_progress  any of several statuses
    ?table=<uuid> / ?user=<uuid>     orders for a table or staff member
    ?created_after= / ?created_before=  date or datetime bounds
    """

    status = filters.MultipleChoiceFilter(choices=Order.OrderStatus.choices)
    table = filters.UUIDFilter(field_name="table_id")
    user = filters.UUIDFilter(field_name="user_id")

    class Meta:
        model = Order
        fields = ["status", "table", "user", "created_after", "created_before"]
