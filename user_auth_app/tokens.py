"""Short-lived single-use tokens kept in the cache (Redis in production).

Keys follow `VERIFY/<code>` for email verification and `FORGET/<token>` for
password reset. A token is consumed (deleted) on first successful use.
"""

import secrets

from django.conf import settings
from django.core.cache import cache

VERIFY_PREFIX = "VERIFY"
RESET_PREFIX = "FORGET"


def _key(prefix: str, token: str) -> str:
    return f"{prefix}/{token}"


def generate_numeric_code(length: int = 6) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


def issue_verification_code(user_id: int) -> str:
    """Store a fresh 6-digit code for `user_id`; retries on collision."""
    while True:
        code = generate_numeric_code()
        if cache.add(_key(VERIFY_PREFIX, code), user_id, timeout=settings.AUTH_TOKEN_TTL):
            return code


def _claim(key: str):
    """Read `key` and delete it; only the caller whose delete succeeds gets the value."""
    value = cache.get(key)
    if value is None or not cache.delete(key):
        return None
    return value


def consume_verification_code(code: str):
    """Return the user id for `code` and delete it, or None if unknown/expired/already used."""
    return _claim(_key(VERIFY_PREFIX, code))


def issue_reset_token(user) -> str:
    token = secrets.token_hex(16)
    cache.set(
        _key(RESET_PREFIX, token),
        {"id": user.id, "email": user.email},
        timeout=settings.AUTH_TOKEN_TTL,
    )
    return token


def peek_reset_token(token: str):
    return cache.get(_key(RESET_PREFIX, token))


def claim_reset_token(token: str):
    """Return the reset payload and consume the token, or None if it was already used."""
    return _claim(_key(RESET_PREFIX, token))
