import logging
import uuid
from typing import Dict, Iterable

from django.db import transaction
from django.db.models import F, Max

from .exceptions import ProductsNotFound, ProductsUnavailable
from .models import Category, Product

logger = logging.getLogger(__name__)


def is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def normalize_id(value) -> str:
    """Canonical string form of a product id; non-UUID input is returned as-is."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return str(value)


class CategoryService:
    @staticmethod
    def next_display_order() -> int:
        current = Category.objects.aggregate(max_order=Max("display_order"))["max_order"]
        return (current or 0) + 1

    @staticmethod
    @transaction.atomic
    def create_category(**data) -> Category:
        if data.get("display_order") is None:
            data["display_order"] = CategoryService.next_display_order()
        category = Category.objects.create(**data)
        logger.info(f"Created category '{category.name}' at position {category.display_order}")
        return category

    @staticmethod
    @transaction.atomic
    def delete_category(category: Category) -> None:
        """
        Delete a category and close the gap it leaves in the menu order.

        Products still pointing at the category block the delete
        (ProtectedError), in which case nothing is reordered.
        """
        deleted_order = category.display_order
        name = category.name
        category.delete()
        shifted = Category.objects.filter(display_order__gt=deleted_order).update(
            display_order=F("display_order") - 1
        )
        logger.info(f"Deleted category '{name}', shifted {shifted} categories up")


class ProductService:
    @staticmethod
    def validate_and_fetch(product_ids: Iterable) -> Dict:
        """
        Resolve a batch of product ids for ordering.

        Returns a dict keyed by the string form of each product id. Duplicate ids are collapsed before
        the lookup. Raises ProductsNotFound naming every id that does not
        exist, then ProductsUnavailable naming every product that exists but
        is switched off.
        """
        requested = list(dict.fromkeys(normalize_id(pk) for pk in product_ids))
        lookup = [pk for pk in requested if is_uuid(pk)]
        products = {str(p.pk): p for p in Product.objects.filter(pk__in=lookup)}

        missing = [pk for pk in requested if pk not in products]
        if missing:
            logger.warning(f"Order references unknown products: {missing}")
            raise ProductsNotFound(missing)

        unavailable = [p.name for p in products.values() if not p.is_available]
        if unavailable:
            logger.warning(f"Order references unavailable products: {unavailable}")
            raise ProductsUnavailable(unavailable)

        return products
