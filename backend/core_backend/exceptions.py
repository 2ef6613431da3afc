"""
Project-wide error types and the DRF exception handler.

Business rules raise subclasses of ServiceError from the service layer; the
views never catch them. `api_exception_handler` renders them, and translates
storage errors that escape a transaction into client-facing messages.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, DataError
from django.db.models import ProtectedError, RestrictedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for business-rule failures raised by the service layer."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "bad_request"
    default_message = "The request could not be completed"

    def __init__(self, message=None, code=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        super().__init__(self.message)

    def get_details(self):
        """Extra, error-specific payload merged into the response body."""
        return {}


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_message = "Resource not found"


# SQLSTATE -> client message
SQLSTATE_MESSAGES = {
    "23505": "A record with this information already exists",
    "23503": "Invalid reference to related entity",
    "23502": "Required field is missing",
    "23514": "Input value violates a field constraint",
    "22001": "Input value exceeds maximum length",
    "22P02": "Invalid input format",
    "42703": "Query references a non-existent column",
}

# SQLite reports constraint failures only through the message text.
SQLITE_MESSAGE_CODES = (
    ("UNIQUE constraint failed", "23505"),
    ("FOREIGN KEY constraint failed", "23503"),
    ("NOT NULL constraint failed", "23502"),
    ("CHECK constraint failed", "23514"),
)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error, check server logs"


def get_sqlstate(exc):
    """
    Extract the SQLSTATE code from a Django database error.

    Django wraps the driver exception, so the code lives on `__cause__`
    (`pgcode` for psycopg2, `sqlstate` for psycopg 3).
    """
    cause = exc.__cause__
    code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if code:
        return code

    text = str(exc)
    for fragment, sqlstate in SQLITE_MESSAGE_CODES:
        if fragment in text:
            return sqlstate
    return None


def translate_database_error(exc):
    """Map a storage error to (http_status, message)."""
    if isinstance(exc, (ProtectedError, RestrictedError)):
        return status.HTTP_400_BAD_REQUEST, SQLSTATE_MESSAGES["23503"]

    sqlstate = get_sqlstate(exc)
    if sqlstate in SQLSTATE_MESSAGES:
        return status.HTTP_400_BAD_REQUEST, SQLSTATE_MESSAGES[sqlstate]

    if isinstance(exc, DataError):
        return status.HTTP_400_BAD_REQUEST, SQLSTATE_MESSAGES["22P02"]

    return status.HTTP_500_INTERNAL_SERVER_ERROR, UNEXPECTED_ERROR_MESSAGE


def api_exception_handler(exc, context):
    """
    DRF exception handler for the whole API.

    - ServiceError subclasses -> {"error": code, "message": msg, ...details}
    - integrity / data / protected-delete errors -> 400 with a generic message
    - any other DatabaseError -> 500, logged with traceback
    - everything else falls through to DRF's default handler
    """
    request = context.get("request")
    path = request.path if request is not None else ""

    if isinstance(exc, ServiceError):
        data = {"error": exc.code, "message": exc.message}
        data.update(exc.get_details())
        return Response(data, status=exc.status_code)

    if isinstance(exc, (DatabaseError, ProtectedError, RestrictedError)):
        status_code, message = translate_database_error(exc)
        if status_code >= 500:
            logger.exception(f"Unhandled database error on {path}: {exc}")
        else:
            logger.error(f"Database constraint error on {path}: {exc}")
        return Response(
            {"error": "database_error", "message": message},
            status=status_code,
        )

    if isinstance(exc, DjangoValidationError):
        return Response(
            {"error": "invalid_input", "message": SQLSTATE_MESSAGES["22P02"], "details": exc.messages},
            status=status.HTTP_400_BAD_REQUEST,
        )

    return exception_handler(exc, context)
