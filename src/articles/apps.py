"""App configuration for the articles API."""

from django.apps import AppConfig


class ArticlesConfig(AppConfig):
    """Articles app holds the article records, serializers and endpoints."""

    name = "articles"
