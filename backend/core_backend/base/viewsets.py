from rest_framework import viewsets, filters
from django_filters.rest_framework import DjangoFilterBackend
from .mixins import OptimizedQuerysetMixin, FieldsetQueryParamsMixin
from ..pagination import StandardPagination


class BaseViewSet(FieldsetQueryParamsMixin, OptimizedQuerysetMixin, viewsets.ModelViewSet):
    """
    Base ViewSet that provides standard configuration for all ModelViewSets.

    Features:
    - Automatic query optimization via OptimizedQuerysetMixin
    - ?view= / ?fields= handling via FieldsetQueryParamsMixin
    - Standard pagination, filtering, search and ordering

    Usage:
        class ProductViewSet(BaseViewSet):
            serializer_class = ProductSerializer
            # optimization is handled automatically via serializer Meta
    """

    pagination_class = StandardPagination

    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    # Default ordering (can be overridden)
    ordering = ['-created_at']
