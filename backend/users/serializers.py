import re

from rest_framework import serializers
from core_backend.base import BaseModelSerializer
from core_backend.base.serializers import FieldsetMixin
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.settings import api_settings as jwt_settings
from .authentication import TOKEN_VERSION_CLAIM
from .models import User


class UserSerializer(FieldsetMixin, BaseModelSerializer):
    """
    User representation with fieldset support.

    Supports ?view=list|detail|reference and ?fields=id,email.
    """

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        fieldsets = {
            'reference': ['id', 'name', 'email'],
            'list': ['id', 'email', 'name', 'role', 'is_active'],
            'detail': '__all__',
        }


class UserUpdateSerializer(BaseModelSerializer):
    """Fields a manager may change on another account."""

    class Meta:
        model = User
        fields = ["name", "email", "role", "is_active"]

    def validate_email(self, value):
        return value.strip().lower()


PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}$")


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(write_only=True, max_length=128)

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError("A user with this email already exists")
        return email

    def validate_password(self, value):
        if not PASSWORD_PATTERN.match(value):
            raise serializers.ValidationError(
                "Password must have at least 8 characters, one uppercase letter, "
                "one lowercase letter and one number"
            )
        return value


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class VersionedTokenRefreshSerializer(TokenRefreshSerializer):
    """Rejects refresh tokens issued before the user's last logout."""

    def validate(self, attrs):
        refresh = self.token_class(attrs["refresh"])
        user = User.objects.filter(
            pk=refresh.get(jwt_settings.USER_ID_CLAIM), is_active=True
        ).first()
        if user is None or refresh.get(TOKEN_VERSION_CLAIM) != user.token_version:
            raise InvalidToken("Token has been revoked")
        return super().validate(attrs)
