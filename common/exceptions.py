"""Error taxonomy shared by all apps.

Every failure raised by the service layer carries an HTTP status, a
machine-checkable `code` and a human-readable `detail`. The project-wide
exception handler adds the code to the response body.
"""

import logging

from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound  # noqa: F401  (re-exported)
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidInput(APIException):
    """Input is well-formed but not acceptable (e.g. empty cart at checkout)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid_input"


class Conflict(APIException):
    """The resource is not in a state that allows the requested operation."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict with the current state of the resource."
    default_code = "conflict"


class InvalidTransition(Conflict):
    """A status change that the transition table does not allow."""

    default_detail = "Status transition not allowed."
    default_code = "invalid_transition"


def api_exception_handler(exc, context):
    """DRF exception handler adding `code` and mapping store conflicts to 409."""
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity error in %s: %s", context.get("view"), exc)
        return Response(
            {"detail": "Resource conflicts with an existing one.", "code": Conflict.default_code},
            status=status.HTTP_409_CONFLICT,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(response.data, dict) and "detail" in response.data:
        codes = exc.get_codes() if isinstance(exc, APIException) else None
        if isinstance(codes, dict):
            codes = codes.get("detail")
        if isinstance(codes, str):
            response.data["code"] = codes
    return response
