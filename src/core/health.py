"""Store health probe shared by the API endpoint and the portal page."""

import logging
from datetime import datetime, timezone

from django.conf import settings

from articles.repository import get_article_repository
from authors.repository import get_author_repository

logger = logging.getLogger(__name__)


def connection_report() -> dict:
    """Count both collections; on failure report the error with zero counts."""

    report = {
        "success": True,
        "message": "Database connection successful",
        "database": settings.MONGODB_DB,
        "backend": settings.CONTENT_BACKEND,
        "authors": {"count": 0},
        "articles": {"count": 0},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        authors = get_author_repository().count()
        articles = get_article_repository().count()
    except Exception as exc:
        logger.exception("Database connection test failed")
        report.update(success=False, message="Database connection failed", error=str(exc) or type(exc).__name__)
        return report

    report["authors"]["count"] = authors
    report["articles"]["count"] = articles
    return report


__all__ = ["connection_report"]
