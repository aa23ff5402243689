"""Auth API views.

Implements token-based registration, login and logout, plus the email
verification and password reset side flows. Verification codes and reset
tokens live in the cache and are single use.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from common.exceptions import InvalidInput
from profiles.models import Profile
from user_auth_app import emails, tokens
from .permissions import AllowAnyRegistration, AllowedAnyLogin, IsAnonymous
from .serializers import (
    LoginSerializer,
    PasswordForgotSerializer,
    PasswordResetSerializer,
    RegistrationSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def _token_payload(user, token):
    return {
        "token": token.key,
        "username": user.username,
        "email": user.email,
        "user_id": user.id,
        "is_staff": user.is_staff,
    }


class AuthThrottleMixin:
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"


class RegistrationView(AuthThrottleMixin, APIView):
    """POST /api/registration/ -> create user + profile, email a code, return auth token."""

    permission_classes = [AllowAnyRegistration, IsAnonymous]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            user = serializer.save()
            Profile.objects.get_or_create(
                user=user,
                defaults={"phone_number": serializer.validated_data.get("phone_number", "")},
            )
            token, _ = Token.objects.get_or_create(user=user)

        code = tokens.issue_verification_code(user.id)
        emails.send_verification_email(user, code)
        return Response(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(AuthThrottleMixin, APIView):
    """POST /api/login/ -> validate credentials and return auth token."""

    permission_classes = [AllowedAnyLogin]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        return Response(_token_payload(user, token), status=status.HTTP_200_OK)


class LogoutView(APIView):
    """POST /api/logout/ -> invalidate the caller's auth token."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        Token.objects.filter(user=request.user).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class VerifyEmailView(AuthThrottleMixin, APIView):
    """POST /api/email/verify/{code}/ -> mark the owner's email as verified."""

    permission_classes = [AllowedAnyLogin]

    def post(self, request, code, *args, **kwargs):
        user_id = tokens.consume_verification_code(code)
        if user_id is None:
            raise InvalidInput("Invalid or expired code.")
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise InvalidInput("Invalid or expired code.")
        profile, _ = Profile.objects.get_or_create(user=user)
        if not profile.email_verified:
            profile.email_verified = True
            profile.save(update_fields=["email_verified"])
        return Response({"detail": "Account verified."}, status=status.HTTP_200_OK)


class PasswordForgotView(AuthThrottleMixin, APIView):
    """POST /api/password/forgot/ -> email a reset token; never reveals whether the email exists."""

    permission_classes = [AllowedAnyLogin]

    def post(self, request, *args, **kwargs):
        serializer = PasswordForgotSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects.filter(email__iexact=serializer.validated_data["email"]).first()
        if user is not None:
            token = tokens.issue_reset_token(user)
            emails.send_password_reset_email(user, token)
        return Response(
            {"detail": "If the address is registered, a reset email was sent."},
            status=status.HTTP_200_OK,
        )


class PasswordResetView(AuthThrottleMixin, APIView):
    """POST /api/password/reset/ -> set a new password using a reset token."""

    permission_classes = [AllowedAnyLogin]

    def post(self, request, *args, **kwargs):
        serializer = PasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token = serializer.validated_data["token"]

        payload = tokens.claim_reset_token(token)
        if not isinstance(payload, dict):
            raise InvalidInput("Invalid or expired token.")

        user = User.objects.filter(pk=payload.get("id")).first()
        if user is None or user.email != payload.get("email"):
            raise InvalidInput("Invalid token context.")

        user.set_password(serializer.validated_data["new_password"])
        user.save(update_fields=["password"])
        Token.objects.filter(user=user).delete()
        logger.info("Password reset for user %s", user.id)
        return Response({"detail": "Password reset successful."}, status=status.HTTP_200_OK)
