"""App configuration for the authors API."""

from django.apps import AppConfig


class AuthorsConfig(AppConfig):
    """Authors app holds author records and their CRUD endpoints."""

    name = "authors"
