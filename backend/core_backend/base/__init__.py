"""
Core backend base components.

This package provides foundational classes and utilities that should be used
throughout the Django application for consistency and maintainability.
"""

from .viewsets import BaseViewSet
from .serializers import BaseModelSerializer, FieldsetMixin
from .mixins import OptimizedQuerysetMixin, FieldsetQueryParamsMixin
from .filters import BaseFilterSet
from .permissions import ReadOnlyOrManager

__all__ = [
    # ViewSets
    'BaseViewSet',

    # Serializers
    'BaseModelSerializer',
    'FieldsetMixin',

    # Mixins
    'OptimizedQuerysetMixin',
    'FieldsetQueryParamsMixin',

    # Filters
    'BaseFilterSet',

    # Permissions
    'ReadOnlyOrManager',
]
