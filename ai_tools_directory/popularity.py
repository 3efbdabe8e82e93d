"""Popularity scores derived from web search result volume."""

import asyncio
import logging
import math
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from .logging_config import IndentLogger
from .search import BraveSearchClient

logger = IndentLogger(logging.getLogger(__name__))

DEFAULT_POPULARITY = 50
MAX_POPULARITY = 100


def calculate_popularity(search_count: Optional[int]) -> int:
    """Map a result count onto 50-100: 50 + 10 per order of magnitude, capped at 100."""
    if not search_count or search_count <= 0:
        return DEFAULT_POPULARITY
    score = min(DEFAULT_POPULARITY + math.log10(search_count) * 10, MAX_POPULARITY)
    # Half-up rounding
    return math.floor(score + 0.5)


def needs_popularity(tool: Dict[str, Any]) -> bool:
    # 50 is also the "no data" score, so those get another try
    popularity = tool.get("popularity")
    return not popularity or popularity == DEFAULT_POPULARITY


async def lookup_popularity(search_client: BraveSearchClient, name: str) -> tuple[int, int]:
    """Return (score, result_count) for a tool name; a failed search counts as zero results."""
    response = await search_client.search(f"{name} AI tool", count=5)
    return calculate_popularity(response.total_count), response.total_count


async def backfill_popularity(
    tools: List[Dict[str, Any]],
    search_client: BraveSearchClient,
    *,
    max_tools: Optional[int] = None,
    delay: float = 2.0,
) -> int:
    """Score every record that lacks a popularity value. Records are updated in place."""
    pending = [tool for tool in tools if needs_popularity(tool)]
    if max_tools and max_tools > 0:
        logger.info(f"Limiting to first {max_tools} tools")
        pending = pending[:max_tools]

    logger.info(f"{len(pending)} tools need popularity scores")
    updated = 0
    for i, tool in enumerate(pending, 1):
        score, count = await lookup_popularity(search_client, tool["name"])
        tool["popularity"] = score
        updated += 1
        with logger.nested():
            logger.progress(i, len(pending), f"{tool['name']}: {score} ({count:,} results)")

        if i < len(pending) and delay:
            await asyncio.sleep(delay)

    return updated


def top_tools(tools: List[Dict[str, Any]], n: int = 10) -> List[Dict[str, Any]]:
    return sorted(tools, key=lambda tool: tool.get("popularity") or 0, reverse=True)[:n]
