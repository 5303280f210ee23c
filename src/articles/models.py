"""Article record types stored in the ``articles`` collection."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
STATUS_ARCHIVED = "archived"
ARTICLE_STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED, STATUS_ARCHIVED)

BLOCK_TEXT = "text"
BLOCK_IMAGE = "image"
BLOCK_VIDEO = "video"
CONTENT_BLOCK_TYPES = (BLOCK_TEXT, BLOCK_IMAGE, BLOCK_VIDEO)


@dataclass
class ContentBlock:
    """One segment of an article body: a string or a ``{url, caption}`` payload."""

    type: str
    data: str | dict[str, str]

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "ContentBlock":
        data = document.get("data", "")
        return cls(type=document.get("type", BLOCK_TEXT), data=dict(data) if isinstance(data, dict) else data)

    @property
    def url(self) -> str:
        if isinstance(self.data, dict):
            return self.data.get("url", "")
        return self.data if self.type != BLOCK_TEXT else ""

    @property
    def caption(self) -> str:
        return self.data.get("caption", "") if isinstance(self.data, dict) else ""

    @property
    def text(self) -> str:
        return self.data if self.type == BLOCK_TEXT and isinstance(self.data, str) else ""

    @property
    def is_editable_text(self) -> bool:
        """A text block the authoring form edits as a paragraph."""
        return bool(self.text.strip())


@dataclass
class Article:
    """Canonical article record."""

    id: str
    title: str
    slug: str
    summary: str
    category: str
    author_id: str
    tags: list[str] = field(default_factory=list)
    cover_image: str = ""
    content_blocks: list[ContentBlock] = field(default_factory=list)
    status: str = STATUS_DRAFT
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Article":
        """Build an Article from a stored document.

        Older clients wrote the cover image as ``coverImage``; both keys map
        onto ``cover_image``.
        """
        return cls(
            id=str(document["id"]),
            title=document.get("title", ""),
            slug=document.get("slug", ""),
            summary=document.get("summary", ""),
            category=document.get("category", ""),
            author_id=str(document.get("author_id", "")),
            tags=list(document.get("tags") or []),
            cover_image=document.get("cover_image", document.get("coverImage", "")) or "",
            content_blocks=[ContentBlock.from_document(b) for b in document.get("content_blocks") or []],
            status=document.get("status", STATUS_DRAFT),
            created_at=document.get("created_at"),
            updated_at=document.get("updated_at"),
        )

    @property
    def is_published(self) -> bool:
        return self.status == STATUS_PUBLISHED

    @property
    def body(self) -> str:
        """Text blocks joined by blank lines, as the public pages render them."""
        return "\n\n".join(block.text.strip() for block in self.content_blocks if block.is_editable_text)


__all__ = [
    "ARTICLE_STATUSES",
    "Article",
    "CONTENT_BLOCK_TYPES",
    "ContentBlock",
    "STATUS_ARCHIVED",
    "STATUS_DRAFT",
    "STATUS_PUBLISHED",
]
