"""
Orders services package - the only code allowed to mutate orders and their lines.

- OrderService: order lifecycle (create, notes, status, add items, delete)
- OrderItemService: line edits and removals
- OrderCalculationService: totals recalculation under a row lock
- OrderNumberService: ORD-YYYYMMDD-NNN numbering
"""

# Core order operations
from .order_service import OrderService

# Item management
from .item_service import OrderItemService

# Calculation operations
from .calculation_service import OrderCalculationService

# Numbering
from .numbering_service import OrderNumberService

__all__ = [
    'OrderService',
    'OrderItemService',
    'OrderCalculationService',
    'OrderNumberService',
]
