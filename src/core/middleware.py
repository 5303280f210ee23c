"""Middleware tagging each request with an id that log records carry."""

import logging
import threading
import uuid

from django.utils.deprecation import MiddlewareMixin

_request_context = threading.local()


def get_request_id() -> str | None:
    """Return the id of the request being handled on this thread, if any."""
    return getattr(_request_context, "request_id", None)


class RequestIDMiddleware(MiddlewareMixin):
    """Accept or mint an X-Request-ID and echo it on the response."""

    REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):  # type: ignore[override]
        """Store a valid incoming request id, or a fresh uuid4."""
        request_id = request.META.get(self.REQUEST_ID_HEADER)
        try:
            request_id = str(uuid.UUID(request_id)) if request_id else None
        except (ValueError, TypeError):
            request_id = None

        request.request_id = request_id or str(uuid.uuid4())
        _request_context.request_id = request.request_id
        return None

    def process_response(self, request, response):  # type: ignore[override]
        """Copy the request id onto the response and clear thread state."""
        request_id = getattr(request, "request_id", None)
        if request_id:
            response[self.RESPONSE_HEADER] = request_id
        _request_context.request_id = None
        return response


class RequestIDFilter(logging.Filter):
    """Add ``request_id`` to every record so formatters can reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


__all__ = ["RequestIDMiddleware", "RequestIDFilter", "get_request_id"]
