import logging

from django.contrib.auth import authenticate
from rest_framework_simplejwt.tokens import RefreshToken

from .authentication import TOKEN_VERSION_CLAIM
from .exceptions import InvalidCredentials
from .models import User

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def generate_tokens_for_user(user: User) -> dict:
        refresh = RefreshToken.for_user(user)
        refresh[TOKEN_VERSION_CLAIM] = user.token_version
        refresh["role"] = user.role
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
        }

    @staticmethod
    def register(*, email: str, password: str, name: str) -> User:
        user = User.objects.create_user(email=email, password=password, name=name)
        logger.info(f"Registered user {user.email} ({user.role})")
        return user

    @staticmethod
    def login(email: str, password: str) -> User:
        """
        Resolve credentials to an active user.

        Unknown emails, wrong passwords and deactivated accounts all fail with
        the same error so the response does not reveal which accounts exist.
        """
        user = authenticate(email=(email or "").strip().lower(), password=password)
        if user is None:
            logger.warning(f"Failed login attempt for {email}")
            raise InvalidCredentials()
        return user

    @staticmethod
    def logout(user: User) -> None:
        user.revoke_tokens()
        logger.info(f"Revoked all tokens for {user.email} (version now {user.token_version})")

    @staticmethod
    def deactivate(user: User) -> User:
        user.is_active = False
        user.save(update_fields=["is_active", "updated_at"])
        logger.info(f"Deactivated user {user.email}")
        return user
