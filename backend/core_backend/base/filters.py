import django_filters
from django.utils import timezone
from django.utils.dateparse import parse_datetime, parse_date
from datetime import datetime, time


def normalize_datetime_value(value, *, is_end=False):
    """
    Normalize a date or datetime to a timezone-aware datetime.

    Date-only values expand to the start of the day, or to the end of the
    day when is_end is True, so "?created_before=2025-11-11" includes the
    whole of the 11th.
    """
    if not value:
        return value

    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value

    if isinstance(value, str):
        dt = parse_datetime(value)
        if dt:
            return timezone.make_aware(dt) if timezone.is_naive(dt) else dt
        value = parse_date(value)
        if value is None:
            return None

    dt = datetime.combine(value, time.max if is_end else time.min)
    return timezone.make_aware(dt)


class BaseFilterSet(django_filters.FilterSet):
    """
    Base FilterSet with created_at range filters.

    Accepts either dates ("2025-11-11") or full ISO datetimes.
    """

    created_after = django_filters.DateTimeFilter(method="filter_created_after")
    created_before = django_filters.DateTimeFilter(method="filter_created_before")

    def filter_created_after(self, queryset, name, value):
        return queryset.filter(created_at__gte=normalize_datetime_value(value))

    def filter_created_before(self, queryset, name, value):
        return queryset.filter(created_at__lte=normalize_datetime_value(value, is_end=True))
