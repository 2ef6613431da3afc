from rest_framework import status

from core_backend.exceptions import ServiceError


class InvalidCredentials(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "invalid_credentials"
    default_message = "Invalid credentials"
