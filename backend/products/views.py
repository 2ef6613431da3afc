from rest_framework import status
from rest_framework.response import Response

from core_backend.base import BaseViewSet, ReadOnlyOrManager
from .filters import ProductFilter
from .models import Product, Category
from .serializers import ProductSerializer, CategorySerializer
from .services import CategoryService


class CategoryViewSet(BaseViewSet):
    """
    Menu categories, ordered by display_order.

    New categories go to the end of the menu unless display_order is given;
    deleting one moves every later category up a slot.
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [ReadOnlyOrManager]
    search_fields = ["name"]
    filterset_fields = ["is_active"]
    ordering_fields = ["name", "display_order", "created_at"]
    ordering = ["display_order"]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = CategoryService.create_category(**serializer.validated_data)
        return Response(
            self.get_serializer(category).data, status=status.HTTP_201_CREATED
        )

    def perform_destroy(self, instance):
        CategoryService.delete_category(instance)


class ProductViewSet(BaseViewSet):
    """
    Menu items.

    Supports:
    - ?search= on product and category name
    - ?category=<uuid>, ?is_available=, ?min_price=, ?max_price=
    - ?view=list|detail|reference, ?fields=id,name
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer
    permission_classes = [ReadOnlyOrManager]
    filterset_class = ProductFilter
    search_fields = ["name", "category__name"]
    ordering_fields = ["name", "price", "is_available", "created_at", "category__name"]
    ordering = ["-created_at"]
