"""Outgoing account emails.

Sending is best effort: a failing mail server must not fail registration or
the password reset request, so errors are logged and dropped.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _send(subject: str, body: str, to: str):
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [to])
    except Exception:
        logger.exception("Could not send '%s' email to %s", subject, to)


def send_verification_email(user, code: str):
    verify_url = f"{settings.FRONTEND_BASE_URL}/email/verify/{code}"
    body = (
        f"Hello {user.first_name or user.username},\n\n"
        f"your verification code is {code}.\n"
        f"You can also open {verify_url}\n"
    )
    _send("Email Verification", body, user.email)


def send_password_reset_email(user, token: str):
    reset_url = f"{settings.FRONTEND_BASE_URL}/password/reset/{token}"
    minutes = settings.AUTH_TOKEN_TTL // 60
    body = (
        f"Hello {user.first_name or user.username},\n\n"
        f"your password reset token is {token}.\n"
        f"Or open {reset_url}\n"
        f"This token expires in {minutes} minutes. If you did not request it you can ignore this email.\n"
    )
    _send("Password Reset", body, user.email)
