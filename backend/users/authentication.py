from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken
from django.conf import settings
from django.contrib.auth import get_user_model

User = get_user_model()

TOKEN_VERSION_CLAIM = "token_version"


class VersionedJWTAuthentication(JWTAuthentication):
    """
    Bearer-token authentication that also rejects revoked tokens.

    Every token carries the user's `token_version` at issue time; logging out
    bumps the stored version, so older tokens stop authenticating.
    """

    def get_user(self, validated_token):
        try:
            user_id = validated_token[settings.SIMPLE_JWT.get('USER_ID_CLAIM', 'user_id')]
        except KeyError:
            raise InvalidToken('Token contained no recognizable user identification')

        try:
            user = User.objects.get(**{settings.SIMPLE_JWT.get('USER_ID_FIELD', 'id'): user_id})
        except User.DoesNotExist:
            raise AuthenticationFailed('User not found', code='user_not_found')

        if not user.is_active:
            raise AuthenticationFailed('User is inactive', code='user_inactive')

        if validated_token.get(TOKEN_VERSION_CLAIM) != user.token_version:
            raise AuthenticationFailed('Token has been revoked', code='token_revoked')

        return user
