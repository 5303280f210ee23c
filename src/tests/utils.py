"""Shared helpers for tests (in-memory store, seed data, fake tag suggester)."""

from __future__ import annotations

from typing import Dict, List, Optional

from django.test import SimpleTestCase, override_settings

from core.repository import reset_repositories
from scripts.management.commands.seed_content import create_seed_articles, create_seed_authors


@override_settings(CONTENT_BACKEND="memory")
class ContentTestCase(SimpleTestCase):
    """Test case backed by fresh in-memory repositories."""

    def setUp(self):
        super().setUp()
        reset_repositories()
        self.addCleanup(reset_repositories)


class FakeTagSuggester:
    """Suggester stub that records every call it receives."""

    def __init__(self, tags: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.tags = tags or []
        self.error = error
        self.calls: List[str] = []

    def suggest(self, content: str) -> List[str]:
        """Return the configured tags, or raise the configured error."""
        self.calls.append(content)
        if self.error is not None:
            raise self.error
        return list(self.tags)


def seed_content() -> Dict[str, dict]:
    """Create demo authors and articles.

    Delegates to the same helpers used by the ``seed_content`` management
    command to keep the demo data in a single place.
    """

    authors = create_seed_authors()
    articles = create_seed_articles(authors)
    return {"authors": authors, "articles": articles}


def article_payload(**overrides) -> dict:
    """Return a valid article create payload."""

    payload = {
        "title": "Local Elections Explained",
        "summary": "What is on the ballot this autumn.",
        "category": "Politics",
        "author_id": "665f1c2e9b1e8a0012345678",
        "tags": ["Elections", "Policy"],
        "cover_image": "https://example.com/cover.png",
        "content_blocks": [
            {"type": "text", "data": "Voters head to the polls next month."},
            {"type": "image", "data": {"url": "https://example.com/ballot.png", "caption": "A ballot"}},
        ],
        "status": "published",
    }
    payload.update(overrides)
    return payload


def author_payload(**overrides) -> dict:
    """Return a valid author create payload."""

    payload = {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "bio": "Covers science and computing.",
    }
    payload.update(overrides)
    return payload
