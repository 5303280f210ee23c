"""Collection settings and repository lookup for articles."""

from pymongo import ASCENDING, DESCENDING, TEXT

from core.repository import CollectionConfig, Repository, get_repository
from .models import Article

ARTICLES = CollectionConfig(
    name="articles",
    label="Article",
    from_document=Article.from_document,
    unique_field="slug",
    search_fields=("title", "summary", "tags"),
    indexes=(
        ([("slug", ASCENDING)], {"unique": True}),
        ([("title", TEXT), ("summary", TEXT), ("tags", TEXT)], {"name": "article_text"}),
        ([("category", ASCENDING)], {}),
        ([("status", ASCENDING)], {}),
        ([("created_at", DESCENDING)], {}),
    ),
)


def get_article_repository() -> Repository:
    return get_repository(ARTICLES)


__all__ = ["ARTICLES", "get_article_repository"]
