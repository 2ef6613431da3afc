"""
Catalog errors raised while resolving products for an order.
"""
from core_backend.exceptions import ServiceError


class ProductsNotFound(ServiceError):
    """One or more requested product ids do not exist."""

    default_code = "products_not_found"

    def __init__(self, missing_ids, message=None):
        self.missing_ids = [str(pk) for pk in missing_ids]
        if message is None:
            message = f"Products not found: {', '.join(self.missing_ids)}"
        super().__init__(message)

    def get_details(self):
        return {"missing_ids": self.missing_ids}


class ProductsUnavailable(ServiceError):
    """One or more requested products exist but are switched off."""

    default_code = "products_unavailable"

    def __init__(self, names, message=None):
        self.names = list(names)
        if message is None:
            message = f"Products not available: {', '.join(self.names)}"
        super().__init__(message)

    def get_details(self):
        return {"products": self.names}
