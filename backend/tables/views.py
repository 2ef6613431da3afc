from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core_backend.base import BaseViewSet, ReadOnlyOrManager
from .filters import DiningTableFilter
from .models import DiningTable
from .serializers import DiningTableSerializer, TableStatusSerializer
from .services import TableService


class DiningTableViewSet(BaseViewSet):
    """
    Floor plan management.

    Any staff member can read tables and change a table's status
    (e.g. mark it available again after clearing it); creating, editing
    and deleting tables is limited to managers.
    """

    queryset = DiningTable.objects.all()
    serializer_class = DiningTableSerializer
    permission_classes = [ReadOnlyOrManager]
    filterset_class = DiningTableFilter
    search_fields = ["table_number"]
    ordering_fields = ["table_number", "capacity", "status", "is_active", "created_at"]
    ordering = ["table_number"]

    @action(detail=True, methods=["patch"], url_path="status", permission_classes=[IsAuthenticated])
    def update_status(self, request, pk=None):
        table = self.get_object()
        serializer = TableStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        table = TableService.set_status(table, serializer.validated_data["status"])
        return Response(self.get_serializer(table).data)
