"""Operational endpoints that do not belong to a content collection."""

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from core.response import BaseAPIView
from .health import connection_report


class TestConnectionView(BaseAPIView):
    """Report whether the content store answers, with per-collection counts."""

    # noinspection PyMethodMayBeStatic
    @extend_schema(responses={200: OpenApiTypes.OBJECT, 500: OpenApiTypes.OBJECT})
    def get(self, request):
        report = connection_report()
        if report["success"]:
            return Response({"data": report, "errors": []})
        return Response(
            {"data": report, "errors": [report["error"]]},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


__all__ = ["TestConnectionView"]
