"""Shared helpers for chat completion calls.

- JSON response parsing with markdown fence stripping
- Message text extraction from chat completion payloads
- Client construction for the OpenAI-compatible completion service
"""

import json
import logging
from typing import Any
from typing import Optional

from openai import AsyncOpenAI

from .config import require_env
from .models import COMPLETION_BASE_URL

logger = logging.getLogger(__name__)


def build_completion_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    """Create the async client for the completion service (Groq by default)."""
    return AsyncOpenAI(api_key=api_key or require_env("GROQ_API_KEY"), base_url=COMPLETION_BASE_URL)


def strip_json_fences(value: str) -> str:
    """Remove Markdown code fences if present.

    Handles both ```json and plain ``` fences.
    """
    value = value.strip()
    if value.startswith("```"):
        first_newline = value.find("\n")
        if first_newline != -1:
            value = value[first_newline + 1 :]
        else:
            value = value[3:].removeprefix("json")
        if value.rstrip().endswith("```"):
            value = value.rstrip()[:-3]
    return value.strip()


def parse_json_response(raw: str, context: str = "response") -> Optional[dict[str, Any]]:
    """Safely parse a JSON object from model output.

    Returns None when the text is not JSON or not a JSON object.
    """
    try:
        parsed = json.loads(strip_json_fences(raw))
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse %s JSON: %s", context, exc)
        return None
    if not isinstance(parsed, dict):
        logger.warning("Expected a JSON object for %s, got %s", context, type(parsed).__name__)
        return None
    return parsed


def extract_message_text(completion: Any) -> str:
    """Return the first choice's message content, or an empty string."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    return (getattr(message, "content", None) or "").strip()
