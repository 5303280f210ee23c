"""Article use cases shared by the REST endpoints and the portal pages.

Each write validates first (400), then lets the repository check uniqueness
(409) and existence (404), then persists.
"""

from typing import Any

from core.repository import Page, RecordNotFound
from .models import STATUS_DRAFT, STATUS_PUBLISHED, Article
from .repository import get_article_repository
from .serializers import ArticleSerializer


def _document_fields(validated: dict[str, Any]) -> dict[str, Any]:
    """Turn serializer output (OrderedDicts and all) into plain document fields."""
    fields = dict(validated)
    if "tags" in fields:
        fields["tags"] = list(fields["tags"])
    if "content_blocks" in fields:
        fields["content_blocks"] = [
            {"type": block["type"], "data": dict(block["data"]) if isinstance(block["data"], dict) else block["data"]}
            for block in fields["content_blocks"]
        ]
    return fields


def validate_article(data: Any, partial: bool = False) -> dict[str, Any]:
    """Run ArticleSerializer over ``data``; raises ValidationError on bad input."""
    serializer = ArticleSerializer(data=data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return _document_fields(serializer.validated_data)


def list_articles(
    category: str | None = None,
    status: str | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int | None = 10,
) -> Page:
    return get_article_repository().list(
        filters={"category": category, "status": status},
        search=search,
        page=page,
        limit=limit,
    )


def get_article(article_id: str) -> Article:
    return get_article_repository().get_by_id(article_id)


def get_published_article(article_id: str | None = None, slug: str | None = None) -> Article | None:
    """Look up an article for public display; drafts and archived ones count as missing."""
    repository = get_article_repository()
    if slug is not None:
        article = repository.get_by_field("slug", slug)
    else:
        try:
            article = repository.get_by_id(article_id)
        except RecordNotFound:
            article = None
    if article is None or not article.is_published:
        return None
    return article


def create_article(data: Any) -> Article:
    fields = validate_article(data)
    return get_article_repository().create(fields)


def update_article(article_id: str, data: Any) -> Article:
    fields = validate_article(data, partial=True)
    return get_article_repository().update(article_id, fields)


def delete_article(article_id: str) -> None:
    get_article_repository().delete(article_id)


def article_counts() -> dict[str, int]:
    """Totals shown on the admin dashboard."""
    repository = get_article_repository()
    return {
        "total": repository.count(),
        "published": repository.count({"status": STATUS_PUBLISHED}),
        "draft": repository.count({"status": STATUS_DRAFT}),
    }


__all__ = [
    "article_counts",
    "create_article",
    "delete_article",
    "get_article",
    "get_published_article",
    "list_articles",
    "update_article",
    "validate_article",
]
