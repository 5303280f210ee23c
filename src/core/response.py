"""The `{ "data": ..., "errors": [...] }` envelope used by every API response."""

from typing import Any

from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ViewSet

from core.repository import Page


def api_response(data: Any, status: int = 200) -> Response:
    """Wrap a successful payload in the envelope."""

    return Response({"data": data, "errors": []}, status=status)


def page_response(key: str, items: Any, page: Page) -> Response:
    """Envelope one page of a listing: ``{key: items, "pagination": {...}}``."""

    return api_response({key: items, "pagination": page.pagination()})


def deleted_response(label: str) -> Response:
    return api_response({"message": f"{label} deleted successfully"})


def is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and {"data", "errors"} <= payload.keys()


class EnvelopeMixin:
    """Wrap bare successful payloads so handlers may return plain data.

    Error responses are already enveloped by ``custom_exception_handler``.
    """

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        ok = hasattr(response, "data") and response.status_code is not None and response.status_code < 400
        if ok and response.status_code != 204 and not is_enveloped(response.data):
            response.data = {"data": response.data, "errors": []}
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView whose successful responses use the envelope."""


class BaseViewSet(EnvelopeMixin, ViewSet):
    """Repository-backed ViewSet; ``record_label`` names the record in messages."""

    record_label = "Record"


__all__ = ["BaseAPIView", "BaseViewSet", "api_response", "deleted_response", "page_response"]
