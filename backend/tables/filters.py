from django_filters import rest_framework as filters
from .models import DiningTable


class DiningTableFilter(filters.FilterSet):
    status = filters.MultipleChoiceFilter(choices=DiningTable.Status.choices)
    min_capacity = filters.NumberFilter(field_name="capacity", lookup_expr="gte")
    max_capacity = filters.NumberFilter(field_name="capacity", lookup_expr="lte")

    class Meta:
        model = DiningTable
        fields = ["status", "is_active", "capacity", "min_capacity", "max_capacity"]
