"""AI-assisted tag suggestions for the authoring form.

``suggest_tags`` is a server-side call, not an HTTP route. It returns either
``{"tags": [...]}`` or ``{"error": "..."}``, so the form can render the outcome
without handling exceptions.
"""

import logging
from typing import Optional, Protocol

from core.llm import ClaudeClient, LLMError, parse_llm_json

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 50

TOO_SHORT_ERROR = "Please provide more content to suggest tags."
FAILED_ERROR = "Failed to suggest tags. Please try again."

SYSTEM_PROMPT = "You are an expert in content categorization and tagging."

TAG_PROMPT = """Given the content of an article, suggest relevant tags that can be used to categorize the article and improve its discoverability.
The tags should be specific and relevant to the content.
Respond with JSON only, in the form {{"tags": ["tag", ...]}}.

Article Content: {content}"""


class TagSuggestionError(LLMError):
    """Raised when the model reply does not contain a list of string tags."""


class Suggester(Protocol):
    def suggest(self, content: str) -> list[str]: ...


class TagSuggester:
    """Ask the model for tags and parse its structured reply."""

    def __init__(self, client: Optional[ClaudeClient] = None):
        self.client = client or ClaudeClient()

    def suggest(self, content: str) -> list[str]:
        raw = self.client.complete(TAG_PROMPT.format(content=content), system=SYSTEM_PROMPT)
        parsed = parse_llm_json(raw)
        tags = parsed.get("tags") if isinstance(parsed, dict) else parsed
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise TagSuggestionError(f"Unexpected tag reply: {raw[:200]!r}")
        return tags


def get_tag_suggester() -> Suggester:
    return TagSuggester()


def suggest_tags(content: str, suggester: Optional[Suggester] = None) -> dict:
    """Suggest tags for ``content``.

    Text shorter than MIN_CONTENT_LENGTH is rejected without calling the
    model. Otherwise the model is called once; tags come back in the order
    the model gave them, and any failure becomes a generic retry message.
    """
    if not content or len(content.strip()) < MIN_CONTENT_LENGTH:
        return {"error": TOO_SHORT_ERROR}

    suggester = suggester or get_tag_suggester()
    try:
        tags = suggester.suggest(content)
    except Exception:
        logger.exception("Tag suggestion failed")
        return {"error": FAILED_ERROR}

    logger.info("Suggested %d tags", len(tags))
    return {"tags": tags}


__all__ = [
    "MIN_CONTENT_LENGTH",
    "TagSuggester",
    "TagSuggestionError",
    "get_tag_suggester",
    "suggest_tags",
]
