"""Detect and repair low-quality tool descriptions.

Two remediation paths share the same detector:
- DescriptionRewriter.rewrite(): asks the completion model for a fresh, short product blurb
- clean_description(): API-free regex cleanup with a generic fallback sentence
"""

import asyncio
import logging
import re
from typing import Any
from typing import Dict
from typing import List

from bs4 import BeautifulSoup
from openai import APIError

from .completion_utils import extract_message_text
from .logging_config import IndentLogger
from .models import DESCRIPTION_MODEL

logger = IndentLogger(logging.getLogger(__name__))

MIN_DESCRIPTION_CHARS = 20
MAX_DESCRIPTION_CHARS = 150
TARGET_DESCRIPTION_CHARS = 120

BAD_DESCRIPTION_PATTERNS = [
    re.compile(r"^we performed", re.IGNORECASE),
    re.compile(r"^i tested", re.IGNORECASE),
    re.compile(r"^this article", re.IGNORECASE),
    re.compile(r"^in this", re.IGNORECASE),
    re.compile(r"series of.*sprints", re.IGNORECASE),
    re.compile(r"(?:\.{3}|…)$"),
    re.compile(r".{%d,}" % MAX_DESCRIPTION_CHARS, re.DOTALL),
]

REWRITE_SYSTEM_PROMPT = "You write concise, clear product descriptions. Return only the description text."

REWRITE_PROMPT = """Given this AI tool, write a clear, concise product description (max {limit} characters).

Tool: {name}
URL: {url}
Category: {category}
Current Description: {description}
Features: {features}

Write a professional product description that:
- Is 1-2 sentences maximum
- Under {limit} characters
- Describes what the tool DOES
- Is not an article excerpt
- Doesn't end with "..."

Return ONLY the new description text, nothing else."""

_LEAD_IN = re.compile(r"^We performed.*?(?:winner|evaluation)\.\s*", re.IGNORECASE)
_TRUNCATED_TAIL = re.compile(r"(?:\.{3}|…)\s*[A-Z].*$")
_TRAILING_ELLIPSIS = re.compile(r"\s*(?:\.{3}|…)\s*$")
_ARTICLE_OPENER = re.compile(r"^(?:Explore|Discover|The Best|These AI|Create|Free)", re.IGNORECASE)
_WRAPPING_QUOTES = re.compile(r"^[\"']|[\"']$")


def needs_fixing(description: str) -> bool:
    """True for missing, very short, truncated, overlong or article-style descriptions."""
    if not description or len(description) < MIN_DESCRIPTION_CHARS:
        return True
    return any(pattern.search(description) for pattern in BAD_DESCRIPTION_PATTERNS)


def _strip_html(text: str) -> str:
    if "<" not in text:
        return text
    return BeautifulSoup(text, "html.parser").get_text(" ", strip=True)


def fallback_description(name: str) -> str:
    subject = re.sub(r"[^a-z\s]", "", (name or "").lower()).strip()
    subject = re.sub(r"\s+", " ", subject)
    return f"AI-powered tool for {subject}" if subject else "AI-powered tool"


def clean_description(description: str, name: str) -> str:
    """Regex cleanup for descriptions scraped from search snippets."""
    if not description:
        return ""

    cleaned = _strip_html(description)
    cleaned = _LEAD_IN.sub("", cleaned)
    cleaned = _TRUNCATED_TAIL.sub(".", cleaned)
    cleaned = _TRAILING_ELLIPSIS.sub("", cleaned)

    # Article-style openers: keep the next sentence instead
    if _ARTICLE_OPENER.match(cleaned):
        sentences = re.split(r"[.!?]+", cleaned)
        if len(sentences) > 1 and sentences[1].strip():
            cleaned = sentences[1].strip()

    if len(cleaned) > MAX_DESCRIPTION_CHARS:
        cleaned = cleaned[: MAX_DESCRIPTION_CHARS - 3].rstrip() + "..."

    if len(cleaned) < MIN_DESCRIPTION_CHARS:
        cleaned = fallback_description(name)

    return cleaned.strip()


def quick_fix_descriptions(tools: List[Dict[str, Any]]) -> int:
    """Apply clean_description to every record in place. Returns how many changed."""
    fixed = 0
    for tool in tools:
        original = tool.get("description", "")
        cleaned = clean_description(original, tool.get("name", ""))
        if cleaned != original:
            tool["description"] = cleaned
            fixed += 1
            logger.info(f"Fixed: {tool.get('name', '')}")
    return fixed


class DescriptionRewriter:
    """Rewrites a description with the completion model, keeping the original on any failure."""

    def __init__(self, client: Any, *, model: str = DESCRIPTION_MODEL, temperature: float = 0.3, max_tokens: int = 100):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def rewrite(self, tool: Dict[str, Any]) -> str:
        prompt = REWRITE_PROMPT.format(
            limit=TARGET_DESCRIPTION_CHARS,
            name=tool.get("name", ""),
            url=tool.get("url", ""),
            category=tool.get("category", ""),
            description=tool.get("description", ""),
            features=", ".join(tool.get("features") or []),
        )
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": REWRITE_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except APIError as e:
            logger.error(f"Error fixing {tool.get('name', '')}: {e}")
            return tool.get("description", "")

        text = _WRAPPING_QUOTES.sub("", extract_message_text(completion)).strip()
        if not text:
            logger.warning(f"Empty rewrite for {tool.get('name', '')}, keeping original")
            return tool.get("description", "")
        return text[:MAX_DESCRIPTION_CHARS]


async def cleanup_descriptions(
    tools: List[Dict[str, Any]], rewriter: DescriptionRewriter, *, delay: float = 1.0
) -> int:
    """Rewrite every description that needs fixing. Records are updated in place."""
    pending = [tool for tool in tools if needs_fixing(tool.get("description", ""))]
    logger.info(f"Found {len(pending)} tools with poor descriptions")

    fixed = 0
    for i, tool in enumerate(pending, 1):
        new_description = await rewriter.rewrite(tool)
        if new_description != tool.get("description", ""):
            tool["description"] = new_description
            fixed += 1
        with logger.nested():
            logger.progress(i, len(pending), tool.get("name", ""))

        if i < len(pending) and delay:
            await asyncio.sleep(delay)

    return fixed
