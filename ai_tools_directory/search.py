"""Web search client used for tool discovery and popularity lookups."""

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

import httpx
from diskcache import Cache

from .config import DEV_CACHE_DIR
from .config import DEV_MODE
from .models import BRAVE_SEARCH_URL

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60 * 60 * 24

# Search phrases for finding AI tools
SEARCH_QUERIES = [
    # Specific AI categories
    "new AI chatbot 2025",
    "AI image generator tool",
    "AI video creation platform",
    "AI coding assistant",
    "AI writing tool",
    "AI voice generator",
    "AI music generator",
    "AI productivity tool",
    "AI design tool",
    "AI research assistant",
    # Emerging categories
    "AI avatar generator",
    "AI presentation maker",
    "AI data analysis tool",
    "AI meeting assistant",
    "AI note taking app",
    "AI email assistant",
    "AI social media tool",
    "AI marketing automation",
    "AI customer support",
    "AI translation tool",
    # Trending searches
    "best free AI tools 2025",
    "AI tools for developers",
    "AI tools for content creators",
    "AI automation platform",
    "generative AI application",
]

QUICK_SEARCH_QUERIES = [
    "AI chatbot 2025",
    "AI image generator",
    "AI code assistant",
]


@dataclass
class SearchResponse:
    results: List[Dict[str, str]] = field(default_factory=list)
    total_count: int = 0


def _parse_results(payload: Any) -> SearchResponse:
    if not isinstance(payload, dict):
        return SearchResponse()
    web = payload.get("web")
    if not isinstance(web, dict):
        return SearchResponse()
    items = web.get("results")
    results = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict):
            continue
        thumbnail = item.get("thumbnail") or {}
        results.append(
            {
                "title": item.get("title") or "",
                "url": item.get("url") or "",
                "description": item.get("description") or "",
                "thumbnail": (thumbnail.get("src") or "") if isinstance(thumbnail, dict) else "",
            }
        )
    try:
        total_count = int(web.get("totalCount") or 0)
    except (TypeError, ValueError):
        total_count = 0
    return SearchResponse(results=results, total_count=total_count)


class BraveSearchClient:
    """Thin wrapper over the Brave web search API.

    Every failure is logged and reported as an empty response; callers never see
    transport errors.
    """

    def __init__(
        self,
        api_key: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = BRAVE_SEARCH_URL,
        cache: Optional[Cache] = None,
    ) -> None:
        self.base_url = base_url
        self.headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip",
            "X-Subscription-Token": api_key,
        }
        self.http_client = http_client or httpx.AsyncClient(timeout=15.0)
        if cache is None and DEV_MODE:
            cache = Cache(str(DEV_CACHE_DIR), size_limit=int(1e9))
        self.cache = cache

    async def search(self, query: str, count: int = 20) -> SearchResponse:
        cache_key = f"brave:{count}:{query}"
        if self.cache is not None and cache_key in self.cache:
            return self.cache[cache_key]

        try:
            response = await self.http_client.get(
                self.base_url, params={"q": query, "count": count}, headers=self.headers
            )
            response.raise_for_status()
            parsed = _parse_results(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"Search API error for {query!r}: {e.response.status_code} {e.response.reason_phrase}")
            return SearchResponse()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Search failed for {query!r}: {e}")
            return SearchResponse()

        if self.cache is not None:
            self.cache.set(cache_key, parsed, expire=CACHE_TTL_SECONDS)
        return parsed

    async def aclose(self) -> None:
        await self.http_client.aclose()
        if self.cache is not None:
            self.cache.close()
