from rest_framework.pagination import LimitOffsetPagination


class StandardPagination(LimitOffsetPagination):
    """
    Offset pagination shared by every list endpoint.

    ?limit= defaults to 20 and is capped at 50; ?offset= skips records.
    """

    default_limit = 20
    max_limit = 50
