"""
Minimal Claude (Anthropic) client used for editorial assists.

One blocking HTTP round trip per call, bounded by LLM_TIMEOUT. Callers decide
what a failure means; this module never retries.
"""

import json
import logging
import re
from typing import Any, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when the model cannot be reached or returns an unusable reply."""


def parse_llm_json(raw_text: str) -> Any:
    """
    Parse JSON from an LLM response that may include markdown code fences.

    Returns None when the text is empty or not valid JSON.
    """
    if not raw_text or not raw_text.strip():
        return None

    text = raw_text.strip()
    fence_pattern = r"^```(?:json)?\s*\n?(.*?)\n?```$"
    match = re.match(fence_pattern, text, re.DOTALL | re.IGNORECASE)
    if match:
        text = match.group(1).strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


class ClaudeClient:
    """
    Thin wrapper over the Anthropic Messages API.

    Settings fallbacks: ANTHROPIC_API_KEY, LLM_MODEL, LLM_MAX_TOKENS,
    LLM_TIMEOUT.
    """

    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.ANTHROPIC_API_KEY
        self.model = model or settings.LLM_MODEL
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.timeout = timeout or settings.LLM_TIMEOUT

    @property
    def available(self) -> bool:
        """Return True when an API key is configured."""
        return bool(self.api_key)

    def complete(self, prompt: str, system: Optional[str] = None, max_tokens: Optional[int] = None) -> str:
        """
        Send ``prompt`` as a single user message and return the reply text.

        Raises:
            LLMError: no key configured, a non-200 status, or an empty reply.
            requests.RequestException: the HTTP call itself failed.
        """
        if not self.available:
            raise LLMError("ANTHROPIC_API_KEY is not configured")

        payload = {
            "model": self.model,
            "max_tokens": max_tokens or self.max_tokens,
            "messages": [{"role": "user", "content": [{"type": "text", "text": prompt}]}],
        }
        if system:
            payload["system"] = system

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
            "content-type": "application/json",
        }

        resp = requests.post(self.API_URL, headers=headers, json=payload, timeout=self.timeout)
        if resp.status_code != 200:
            logger.warning("Claude HTTP call failed: %s - %s", resp.status_code, (resp.text or "")[:400])
            raise LLMError(f"Claude returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise LLMError("Claude returned a non-JSON body") from exc

        content = data.get("content") or []
        block = content[0] if content else {}
        text = block.get("text") if isinstance(block, dict) else None
        if not text:
            raise LLMError("Claude returned empty content")
        return text


__all__ = ["ClaudeClient", "LLMError", "parse_llm_json"]
