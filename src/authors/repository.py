"""Collection settings and repository lookup for authors."""

from pymongo import ASCENDING

from core.repository import CollectionConfig, Repository, get_repository
from .models import Author

AUTHORS = CollectionConfig(
    name="authors",
    label="Author",
    from_document=Author.from_document,
    unique_field="email",
    search_fields=("name", "email"),
    indexes=(
        ([("email", ASCENDING)], {"unique": True}),
    ),
)


def get_author_repository() -> Repository:
    return get_repository(AUTHORS)


__all__ = ["AUTHORS", "get_author_repository"]
