"""Routing for the Author viewset."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AuthorViewSet

router = SimpleRouter()
# Match "/api/authors" as well as "/api/authors/".
router.trailing_slash = "/?"
router.register(r"authors", AuthorViewSet, basename="author")

urlpatterns = [
    path("", include(router.urls)),
]
