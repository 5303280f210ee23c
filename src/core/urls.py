"""Root URL configuration for FlexPress.

API routes answer with or without a trailing slash, so clients never get an
APPEND_SLASH redirect that would drop a request body.
"""
from django.urls import include, path, re_path
from drf_spectacular.views import SpectacularAPIView

from .views import TestConnectionView

urlpatterns = [
    path("api/", include("articles.urls")),
    path("api/", include("authors.urls")),
    re_path(r"^api/test-connection/?$", TestConnectionView.as_view(), name="test-connection"),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("", include("portal.urls")),
]
