from rest_framework import serializers
from .models import Category, Product

from core_backend.base.serializers import BaseModelSerializer, FieldsetMixin


class CategorySerializer(FieldsetMixin, BaseModelSerializer):
    display_order = serializers.IntegerField(min_value=1, required=False)

    class Meta:
        model = Category
        fields = [
            "id",
            "name",
            "description",
            "display_order",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        # display_order uniqueness is enforced by CategoryService and the DB
        validators = []
        fieldsets = {
            'reference': ['id', 'name'],
            'list': ['id', 'name', 'display_order', 'is_active'],
            'detail': '__all__',
        }


class CategoryReferenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name"]


class ProductSerializer(FieldsetMixin, BaseModelSerializer):
    """
    Menu item. Reads nest the category as {id, name}; writes take category_id.
    """

    category = CategoryReferenceSerializer(read_only=True)
    category_id = serializers.PrimaryKeyRelatedField(
        source="category",
        queryset=Category.objects.all(),
        write_only=True,
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "image_url",
            "price",
            "is_available",
            "category",
            "category_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        select_related_fields = ["category"]
        fieldsets = {
            'reference': ['id', 'name', 'price'],
            'list': ['id', 'name', 'description', 'price', 'image_url', 'is_available', 'category', 'created_at'],
            'detail': '__all__',
        }
