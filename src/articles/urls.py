"""Routing for the Article viewset."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import ArticleViewSet

router = SimpleRouter()
# Match "/api/articles" as well as "/api/articles/".
router.trailing_slash = "/?"
router.register(r"articles", ArticleViewSet, basename="article")

urlpatterns = [
    path("", include(router.urls)),
]
