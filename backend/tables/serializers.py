from rest_framework import serializers
from core_backend.base.serializers import BaseModelSerializer, FieldsetMixin
from .models import DiningTable


class DiningTableSerializer(FieldsetMixin, BaseModelSerializer):
    capacity = serializers.IntegerField(min_value=1)

    class Meta:
        model = DiningTable
        fields = [
            "id",
            "table_number",
            "capacity",
            "status",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        fieldsets = {
            'reference': ['id', 'table_number'],
            'list': ['id', 'table_number', 'capacity', 'status', 'is_active'],
            'detail': '__all__',
        }


class TableStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DiningTable.Status.choices)
