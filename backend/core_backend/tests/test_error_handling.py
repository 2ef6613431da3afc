"""
Global Error Handling Tests

api_exception_handler renders service errors and translates storage errors
that escape a transaction into client-facing messages.

Run with: pytest backend/core_backend/tests/test_error_handling.py -v
"""
import pytest
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, DataError, IntegrityError, OperationalError, transaction
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import NotFound

from core_backend.exceptions import (
    NotFoundError,
    ServiceError,
    SQLSTATE_MESSAGES,
    api_exception_handler,
    get_sqlstate,
    translate_database_error,
)
from tables.models import DiningTable


class DriverError(Exception):
    """Stands in for a psycopg error carrying a SQLSTATE."""

    def __init__(self, sqlstate):
        super().__init__(f"driver error {sqlstate}")
        self.sqlstate = sqlstate


def wrapped(exc_class, sqlstate):
    """A Django DB error wrapping a driver error, as Django raises them."""
    exc = exc_class("wrapped")
    exc.__cause__ = DriverError(sqlstate)
    return exc


class TestSqlstateTranslation:

    @pytest.mark.parametrize("sqlstate, message", [
        ("23505", "A record with this information already exists"),
        ("23503", "Invalid reference to related entity"),
        ("23502", "Required field is missing"),
        ("22001", "Input value exceeds maximum length"),
        ("22P02", "Invalid input format"),
        ("42703", "Query references a non-existent column"),
    ])
    def test_known_codes_are_bad_requests(self, sqlstate, message):
        assert translate_database_error(wrapped(IntegrityError, sqlstate)) == (
            status.HTTP_400_BAD_REQUEST,
            message,
        )

    def test_psycopg2_pgcode_is_read_too(self):
        exc = IntegrityError("wrapped")
        cause = Exception("driver")
        cause.pgcode = "23505"
        exc.__cause__ = cause

        assert get_sqlstate(exc) == "23505"

    def test_sqlite_messages_are_recognised(self):
        assert get_sqlstate(IntegrityError("UNIQUE constraint failed: tables_diningtable.table_number")) == "23505"
        assert get_sqlstate(IntegrityError("CHECK constraint failed: table_capacity_at_least_one")) == "23514"

    def test_protected_delete(self):
        exc = ProtectedError("protected", set())
        assert translate_database_error(exc) == (status.HTTP_400_BAD_REQUEST, SQLSTATE_MESSAGES["23503"])

    def test_unmapped_data_error_is_a_bad_request(self):
        assert translate_database_error(DataError("numeric field overflow"))[0] == status.HTTP_400_BAD_REQUEST

    def test_unknown_database_error_is_a_server_error(self):
        code, message = translate_database_error(wrapped(OperationalError, "57P01"))

        assert code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert message == "Unexpected error, check server logs"


class TestExceptionHandler:

    def test_service_error_payload(self):
        class TooSpicy(ServiceError):
            default_code = "too_spicy"

            def get_details(self):
                return {"scoville": 1000000}

        response = api_exception_handler(TooSpicy("Kitchen refuses"), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"error": "too_spicy", "message": "Kitchen refuses", "scoville": 1000000}

    def test_not_found_error(self):
        response = api_exception_handler(NotFoundError(), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"error": "not_found", "message": "Resource not found"}

    def test_database_error_is_logged_and_hidden(self, caplog):
        response = api_exception_handler(DatabaseError("connection reset"), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "connection reset" not in str(response.data)
        assert "connection reset" in caplog.text

    def test_django_validation_error(self):
        response = api_exception_handler(DjangoValidationError("bad uuid"), {})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["message"] == "Invalid input format"

    def test_drf_exceptions_fall_through(self):
        response = api_exception_handler(NotFound(), {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "detail" in response.data


@pytest.mark.django_db
class TestStorageConstraints:

    def test_duplicate_table_number_surfaces_as_sqlstate_23505(self, table):
        with pytest.raises(IntegrityError) as exc_info:
            with transaction.atomic():
                DiningTable.objects.create(table_number="T1", capacity=2)

        assert translate_database_error(exc_info.value) == (
            status.HTTP_400_BAD_REQUEST,
            "A record with this information already exists",
        )


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_check_is_public(self, api_client):
        response = api_client.get('/api/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "ok"
