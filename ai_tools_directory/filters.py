"""Heuristics that separate product pages from articles, lists and directories."""

import logging
import re
from typing import Any
from typing import Dict
from typing import List
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

# Social, reference and publishing hosts never carry a tool's own page
BLOCKED_DOMAINS = [
    "wikipedia.org",
    "youtube.com",
    "reddit.com",
    "linkedin.com",
    "twitter.com",
    "x.com",
    "facebook.com",
    "instagram.com",
    "tiktok.com",
    "medium.com",
    "quora.com",
    "forbes.com",
    "techcrunch.com",
    "zapier.com",
    "g2.com",
    "capterra.com",
    "futurepedia.io",
    "theresanaiforthat.com",
]

BAD_TITLE_PATTERNS = [
    re.compile(r"^\s*(?:the\s+)?(?:top|best)\s+\d+", re.IGNORECASE),
    re.compile(r"^\s*\d+\+?\s+(?:best|top|free|great|amazing)\b", re.IGNORECASE),
    re.compile(r"\bbest\s+(?:free\s+)?ai\b", re.IGNORECASE),
    re.compile(r"\bhow\s+to\b", re.IGNORECASE),
    re.compile(r"\btutorials?\b", re.IGNORECASE),
    re.compile(r"\s(?:vs\.?|versus)\s", re.IGNORECASE),
    re.compile(r"\balternatives?\b", re.IGNORECASE),
    re.compile(r"\breviews?\b", re.IGNORECASE),
    re.compile(r"\blist\s+of\b", re.IGNORECASE),
    re.compile(r"\b(?:complete|ultimate|beginner'?s?)\s+guide\b", re.IGNORECASE),
    re.compile(r"\bai\s+tools\b", re.IGNORECASE),
    re.compile(r"\bdirectory\b", re.IGNORECASE),
]

BAD_URL_PATTERNS = [
    re.compile(r"/blog/"),
    re.compile(r"/reviews?(?:/|-|$)"),
    re.compile(r"/alternatives?"),
    re.compile(r"/best-"),
    re.compile(r"/top-"),
    re.compile(r"/lists?/"),
    re.compile(r"/news/"),
    re.compile(r"/articles?/"),
    re.compile(r"/compare"),
    re.compile(r"/guides?/"),
]

_TITLE_SUFFIX = re.compile(r"\s+[|\-–—:]\s+.*$")
_NON_NAME_CHARS = re.compile(r"[^\w\s-]")


def is_blocked_domain(url: str) -> bool:
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return True
    return any(host == domain or host.endswith("." + domain) for domain in BLOCKED_DOMAINS)


def is_bad_title(title: str) -> bool:
    return any(pattern.search(title or "") for pattern in BAD_TITLE_PATTERNS)


def is_bad_url(url: str) -> bool:
    try:
        path = urlparse(url).path.lower()
    except ValueError:
        return True
    return any(pattern.search(path) for pattern in BAD_URL_PATTERNS)


def is_bad_candidate(title: str, url: str) -> bool:
    """True when the title or URL path looks like an article, list or directory."""
    return is_bad_title(title) or is_bad_url(url)


def clean_candidate_name(title: str) -> str:
    """Reduce a page title to a product name: drop the site suffix and punctuation."""
    name = _TITLE_SUFFIX.sub("", (title or "").strip())
    return _NON_NAME_CHARS.sub("", name).strip()


def extract_candidates(results: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Turn raw search results into tool candidates, dropping blocked hosts.

    Title and URL heuristics are applied per candidate by the pipeline, after the
    duplicate check.
    """
    candidates = []
    for result in results:
        url = result.get("url") or ""
        title = result.get("title") or ""
        if not url or is_blocked_domain(url):
            continue
        name = clean_candidate_name(title)
        if not name:
            continue
        candidates.append(
            {
                "name": name,
                "title": title,
                "url": url,
                "description": result.get("description") or "",
                "logo": result.get("thumbnail") or "",
            }
        )
    return candidates
