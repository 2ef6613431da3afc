"""
Order engine configuration.

Reads ORDER_TAX_RATE and ORDER_STATUS_TRANSITIONS from Django settings once,
validates them, and exposes them through the `order_settings` singleton so
business logic never reaches into django.conf directly.

ORDER_STATUS_TRANSITIONS is either the name of a built-in table
("permissive" or "strict") or a dict mapping each status to the statuses
allowed to follow it.
"""

from decimal import Decimal, InvalidOperation
from typing import Dict, FrozenSet, Optional
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = Decimal("0.12")

ORDER_STATUSES = ("open", "in_progress", "ready", "delivered", "paid", "cancelled")

# Any status may follow any status.
PERMISSIVE_TRANSITIONS = {status: ORDER_STATUSES for status in ORDER_STATUSES}

# Kitchen flow with cancellation from any non-terminal state.
STRICT_TRANSITIONS = {
    "open": ("in_progress", "cancelled"),
    "in_progress": ("ready", "cancelled"),
    "ready": ("delivered", "cancelled"),
    "delivered": ("paid", "cancelled"),
    "paid": (),
    "cancelled": (),
}

TRANSITION_TABLES = {
    "permissive": PERMISSIVE_TRANSITIONS,
    "strict": STRICT_TRANSITIONS,
}


def parse_tax_rate(value) -> Decimal:
    if value is None or value == "":
        return DEFAULT_TAX_RATE
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        raise ImproperlyConfigured(f"ORDER_TAX_RATE must be a decimal, got {value!r}")
    if rate < 0 or rate >= 1:
        raise ImproperlyConfigured(f"ORDER_TAX_RATE must be in [0, 1), got {rate}")
    return rate


def build_transition_table(value) -> Dict[str, FrozenSet[str]]:
    """Resolve and validate a transition table (name or mapping)."""
    if value is None or value == "":
        value = "permissive"

    if isinstance(value, str):
        try:
            table = TRANSITION_TABLES[value.strip().lower()]
        except KeyError:
            raise ImproperlyConfigured(
                f"Unknown ORDER_STATUS_TRANSITIONS '{value}'. "
                f"Expected one of: {', '.join(TRANSITION_TABLES)} or a mapping."
            )
    elif isinstance(value, dict):
        table = value
    else:
        raise ImproperlyConfigured("ORDER_STATUS_TRANSITIONS must be a name or a dict")

    known = set(ORDER_STATUSES)
    unknown = set(table) - known
    for targets in table.values():
        unknown |= set(targets) - known
    if unknown:
        raise ImproperlyConfigured(
            f"ORDER_STATUS_TRANSITIONS references unknown statuses: {', '.join(sorted(unknown))}"
        )

    # Statuses missing from a custom mapping are terminal.
    return {status: frozenset(table.get(status, ())) for status in ORDER_STATUSES}


class OrderSettings:
    """
    A LAZY singleton holding the validated order configuration.

    Nothing is read until the first attribute access, so importing the
    orders app never requires configured settings. Call reload() after
    changing settings (tests use it with override_settings).
    """

    _instance: Optional["OrderSettings"] = None

    def __new__(cls) -> "OrderSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._loaded = False
        return cls._instance

    def _load(self):
        self.tax_rate = parse_tax_rate(getattr(settings, "ORDER_TAX_RATE", None))
        raw_transitions = getattr(settings, "ORDER_STATUS_TRANSITIONS", None)
        self.status_transitions = build_transition_table(raw_transitions)
        self.transitions_name = raw_transitions if isinstance(raw_transitions, str) else "custom"
        self._loaded = True
        logger.info(
            f"Order settings loaded: tax rate {self.tax_rate}, "
            f"'{self.transitions_name}' status transitions"
        )

    def __getattr__(self, name):
        # Only called for attributes not yet set, i.e. before the first load.
        if name.startswith("_") or self.__dict__.get("_loaded"):
            raise AttributeError(name)
        self._load()
        return self.__dict__[name]

    def reload(self):
        self._load()

    def can_transition(self, current: str, new: str) -> bool:
        return new in self.status_transitions.get(current, frozenset())


order_settings = OrderSettings()
