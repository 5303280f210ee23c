"""Authoring form and its translation into article API payloads."""

import re
from typing import Any, Iterable, Sequence

from django import forms

from articles.models import ARTICLE_STATUSES, BLOCK_TEXT, STATUS_DRAFT, Article, ContentBlock

PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


class ArticleForm(forms.Form):
    title = forms.CharField(max_length=500)
    slug = forms.SlugField(
        max_length=255,
        required=False,
        help_text="Leave blank to derive it from the title.",
    )
    summary = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}))
    category = forms.CharField(max_length=100)
    author_id = forms.ChoiceField(label="Author")
    status = forms.ChoiceField(choices=[(s, s.title()) for s in ARTICLE_STATUSES], initial=STATUS_DRAFT)
    cover_image = forms.URLField(label="Cover image URL", required=False)
    tags = forms.CharField(required=False, help_text="Comma-separated.")
    content = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={"rows": 15, "placeholder": "Write your article here..."}),
        help_text="Separate paragraphs with a blank line.",
    )

    def __init__(self, *args, authors: Iterable = (), current_author_id: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        choices = [("", "Select an author")] + [(author.id, author.name) for author in authors]
        known = {value for value, _ in choices}
        if current_author_id and current_author_id not in known:
            # The referenced author may have been deleted; keep the article editable.
            choices.append((current_author_id, f"Unknown author ({current_author_id})"))
        self.fields["author_id"].choices = choices


def split_tags(value: str) -> list[str]:
    """Comma-separated input to an ordered tag list without blanks or repeats."""
    tags: list[str] = []
    for tag in (value or "").split(","):
        tag = tag.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def join_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags)


def text_blocks(content: str) -> list[dict[str, str]]:
    """One text block per paragraph; paragraphs are separated by blank lines."""
    paragraphs = (p.strip() for p in PARAGRAPH_BREAK.split((content or "").strip()))
    return [{"type": BLOCK_TEXT, "data": p} for p in paragraphs if p]


def _block_dict(block: ContentBlock) -> dict[str, Any]:
    return {"type": block.type, "data": dict(block.data) if isinstance(block.data, dict) else block.data}


def merge_content_blocks(content: str, existing: Sequence[ContentBlock] = ()) -> list[dict[str, Any]]:
    """Fit the edited paragraphs back into the article's block sequence.

    The form edits only plain-text blocks. Every other block (media, text
    blocks with an object payload, blank text) keeps its position. Paragraphs
    fill the existing text slots in order; leftover slots are dropped and
    extra paragraphs go after the last text slot. Unchanged text leaves the
    blocks exactly as stored.
    """
    paragraphs = text_blocks(content)
    current = [{"type": BLOCK_TEXT, "data": b.text.strip()} for b in existing if b.is_editable_text]
    if paragraphs == current:
        return [_block_dict(block) for block in existing]

    pending = iter(paragraphs)
    merged: list[dict[str, Any]] = []
    insert_at = None
    for block in existing:
        if not block.is_editable_text:
            merged.append(_block_dict(block))
            continue
        paragraph = next(pending, None)
        if paragraph is not None:
            merged.append(paragraph)
        insert_at = len(merged)

    rest = list(pending)
    if insert_at is None:
        insert_at = len(merged)
    merged[insert_at:insert_at] = rest
    return merged


def build_article_payload(cleaned_data: dict[str, Any], existing_blocks: Sequence[ContentBlock] = ()) -> dict[str, Any]:
    """Map validated form fields onto the article create/update payload.

    ``existing_blocks`` are the stored blocks of the article being edited;
    see ``merge_content_blocks``.
    """
    payload = {
        "title": cleaned_data["title"],
        "summary": cleaned_data["summary"],
        "category": cleaned_data["category"],
        "author_id": cleaned_data["author_id"],
        "status": cleaned_data["status"],
        "cover_image": cleaned_data.get("cover_image") or "",
        "tags": split_tags(cleaned_data.get("tags", "")),
        "content_blocks": merge_content_blocks(cleaned_data.get("content", ""), existing_blocks),
    }
    if cleaned_data.get("slug"):
        payload["slug"] = cleaned_data["slug"]
    return payload


def article_initial(article: Article) -> dict[str, Any]:
    """Form values for editing an existing article."""
    return {
        "title": article.title,
        "slug": article.slug,
        "summary": article.summary,
        "category": article.category,
        "author_id": article.author_id,
        "status": article.status,
        "cover_image": article.cover_image,
        "tags": join_tags(article.tags),
        "content": article.body,
    }


def form_values(data) -> dict[str, Any]:
    """Current raw values of a submitted form, for re-rendering it unbound."""
    return {name: data.get(name, "") for name in ArticleForm.base_fields}


__all__ = [
    "ArticleForm",
    "article_initial",
    "build_article_payload",
    "form_values",
    "join_tags",
    "merge_content_blocks",
    "split_tags",
    "text_blocks",
]
