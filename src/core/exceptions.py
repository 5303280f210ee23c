"""Custom exception handling to enforce the API error envelope."""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.repository import DuplicateRecord, RecordNotFound, RepositoryUnavailable

logger = logging.getLogger(__name__)


def _normalize_errors(payload: Any) -> list[Any]:
    """Convert DRF's response.data into a list for the envelope."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and "detail" in payload:
        # Common DRF pattern: {"detail": "..."}
        return [payload["detail"]]
    return [payload]


def error_response(message: Any, status_code: int) -> Response:
    """Return ``message`` in the `{ "data": null, "errors": [...] }` shape."""

    return Response({"data": None, "errors": _normalize_errors(message)}, status=status_code)


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    """Map every exception raised by a view onto an enveloped response.

    - Repository lookups that miss become 404, uniqueness clashes 409.
    - Store failures and anything DRF does not recognise become a logged 500;
      nothing escapes to Django's HTML error page.
    - DRF's own exceptions (validation, parse errors, 405...) keep their codes.
    """

    if isinstance(exc, RecordNotFound):
        return error_response(str(exc), status.HTTP_404_NOT_FOUND)

    if isinstance(exc, DuplicateRecord):
        return error_response(str(exc), status.HTTP_409_CONFLICT)

    if isinstance(exc, RepositoryUnavailable):
        logger.error("Content store unavailable during %s: %s", _view_name(context), exc)
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", _view_name(context), exc_info=exc)
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    if response.status_code >= 400:
        response.data = {"data": None, "errors": _normalize_errors(response.data)}

    return response


def _view_name(context: dict[str, Any]) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown view"


__all__ = ["custom_exception_handler", "error_response"]
