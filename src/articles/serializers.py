"""Serializers for Article CRUD with standard envelope support."""

from django.utils.text import slugify
from rest_framework import serializers

from .models import ARTICLE_STATUSES, CONTENT_BLOCK_TYPES, STATUS_DRAFT

SLUG_MAX_LENGTH = 255


def slug_from_title(title: str) -> str:
    """Derive a URL-safe slug from an article title."""
    return slugify(title)[:SLUG_MAX_LENGTH].strip("-") or "article"


class BlockDataField(serializers.Field):
    """Block payload: either a string or a ``{url, caption}`` object."""

    default_error_messages = {
        "invalid": "Expected a string or an object with a url and optional caption.",
        "missing_url": "Media payloads need a non-empty url.",
    }

    def to_representation(self, value):
        return value

    def to_internal_value(self, data):
        if isinstance(data, str):
            return data
        if not isinstance(data, dict):
            self.fail("invalid")

        url = data.get("url")
        caption = data.get("caption", "")
        if not isinstance(url, str) or not url.strip():
            self.fail("missing_url")
        if not isinstance(caption, str):
            self.fail("invalid")

        payload = {"url": url.strip()}
        if caption:
            payload["caption"] = caption
        return payload


class ContentBlockSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=CONTENT_BLOCK_TYPES)
    data = BlockDataField()


class ArticleSerializer(serializers.Serializer):
    """Validate article payloads and render Article records.

    Title, summary, category and author_id are required on create. The slug
    is derived from the title when left blank. With ``partial=True`` only
    supplied fields are validated, and blank values for required fields are
    rejected rather than ignored.
    """

    id = serializers.CharField(read_only=True)
    title = serializers.CharField(max_length=500)
    slug = serializers.SlugField(max_length=SLUG_MAX_LENGTH, required=False, allow_blank=True)
    summary = serializers.CharField()
    category = serializers.CharField(max_length=100)
    tags = serializers.ListField(
        child=serializers.CharField(max_length=100, allow_blank=True),
        required=False,
        default=list,
    )
    cover_image = serializers.URLField(required=False, allow_blank=True, default="")
    author_id = serializers.CharField(max_length=64)
    content_blocks = ContentBlockSerializer(many=True, required=False, default=list)
    status = serializers.ChoiceField(choices=ARTICLE_STATUSES, default=STATUS_DRAFT)
    created_at = serializers.DateTimeField(read_only=True)
    updated_at = serializers.DateTimeField(read_only=True)

    @staticmethod
    def validate_tags(value):
        """Drop blank tags; order is kept."""
        return [tag.strip() for tag in value if tag.strip()]

    def validate(self, attrs):
        if "slug" in attrs and not attrs["slug"]:
            if self.partial:
                raise serializers.ValidationError({"slug": ["This field may not be blank."]})
            del attrs["slug"]
        if not self.partial and "slug" not in attrs:
            attrs["slug"] = slug_from_title(attrs["title"])
        return attrs


class ArticleListQuerySerializer(serializers.Serializer):
    """Query parameters accepted by the article listing."""

    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)
    category = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=ARTICLE_STATUSES, required=False, allow_blank=True)
    search = serializers.CharField(required=False, allow_blank=True)


class ArticleListSerializer(serializers.Serializer):
    """Response shape for the article listing (used for the OpenAPI schema)."""

    articles = ArticleSerializer(many=True)
    pagination = serializers.DictField(child=serializers.IntegerField(allow_null=True))


__all__ = [
    "ArticleListQuerySerializer",
    "ArticleListSerializer",
    "ArticleSerializer",
    "ContentBlockSerializer",
    "slug_from_title",
]
