from core_backend.exceptions import ServiceError


class TableNotFound(ServiceError):
    """The table an order refers to does not exist."""

    default_code = "table_not_found"

    def __init__(self, table_id, message=None):
        self.table_id = table_id
        if message is None:
            message = f'Table with id "{table_id}" not found'
        super().__init__(message)


class TableUnavailable(ServiceError):
    default_code = "table_unavailable"

    def __init__(self, table, message=None):
        self.table = table
        if message is None:
            message = "Table is not available, please check table status"
        super().__init__(message)

    def get_details(self):
        return {"table_number": self.table.table_number, "table_status": self.table.status}
