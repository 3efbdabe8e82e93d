"""Discover new AI tools from web search and merge them into the tools file.

Each candidate passes through a fixed chain and the first rejecting stage is final:

    duplicate check -> title/URL filter -> classifier -> filter on cleaned result -> logo -> accept

Everything runs sequentially with fixed pauses between outbound calls to stay inside
the search and completion services' rate limits.
"""

import asyncio
import logging
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence

from .classifier import ToolClassifier
from .config import CALL_DELAY_SECONDS
from .config import QUERY_DELAY_SECONDS
from .config import TOOLS_FILE
from .data_manager import load_tools
from .data_manager import save_tools
from .dedupe import KnownTools
from .filters import extract_candidates
from .filters import is_bad_candidate
from .logging_config import IndentLogger
from .logos import LogoResolver
from .maintenance import now_iso
from .popularity import lookup_popularity
from .search import SEARCH_QUERIES
from .search import BraveSearchClient
from .tool_schema import sort_tools

logger = IndentLogger(logging.getLogger(__name__))

DEFAULT_MAX_PER_QUERY = 3


@dataclass
class DiscoveryStats:
    queries: int = 0
    candidates: int = 0
    duplicates: int = 0
    filtered: int = 0
    classified: int = 0
    rejected: int = 0
    added: int = 0


@dataclass
class DiscoveryResult:
    new_tools: List[Dict[str, Any]] = field(default_factory=list)
    stats: DiscoveryStats = field(default_factory=DiscoveryStats)


async def evaluate_candidate(
    candidate: Dict[str, str],
    *,
    known: KnownTools,
    classifier: ToolClassifier,
    logo_resolver: LogoResolver,
    stats: DiscoveryStats,
) -> Optional[Dict[str, Any]]:
    """Run one candidate through the filter chain. Returns the accepted record or None."""
    if known.contains(candidate["url"], candidate["name"]):
        stats.duplicates += 1
        logger.info(f"Skipping duplicate: {candidate['name']}")
        return None

    if is_bad_candidate(candidate.get("title") or candidate["name"], candidate["url"]):
        stats.filtered += 1
        logger.info(f"Skipping non-tool page: {candidate['name']}")
        return None

    logger.info(f"Normalizing: {candidate['name']}")
    stats.classified += 1
    tool = await classifier.normalize(candidate)
    if tool is None:
        stats.rejected += 1
        return None

    # The cleaned name can reveal a list/article or an existing entry the raw title hid
    if is_bad_candidate(tool["name"], tool["url"]):
        stats.filtered += 1
        logger.info(f"Rejected after classification: {tool['name']}")
        return None
    if known.contains(tool["url"], tool["name"]):
        stats.duplicates += 1
        logger.info(f"Skipping duplicate after classification: {tool['name']}")
        return None

    tool["logo"] = await logo_resolver.resolve(tool["name"], tool["url"], fallback=candidate.get("logo", ""))
    tool["dateAdded"] = now_iso()
    return tool


async def discover_new_tools(
    *,
    search_client: BraveSearchClient,
    classifier: ToolClassifier,
    logo_resolver: LogoResolver,
    known: KnownTools,
    queries: Sequence[str] = SEARCH_QUERIES,
    max_per_query: int = DEFAULT_MAX_PER_QUERY,
    query_delay: float = QUERY_DELAY_SECONDS,
    call_delay: float = CALL_DELAY_SECONDS,
) -> DiscoveryResult:
    """Search each query and collect up to max_per_query accepted tools per query.

    Accepted tools are added to `known` as they are found, so later queries dedupe
    against them too.
    """
    result = DiscoveryResult()
    stats = result.stats

    for i, query in enumerate(queries, 1):
        logger.indent(0)
        logger.progress(i, len(queries), f"Searching: {query!r}")
        logger.indent(1)
        stats.queries += 1

        response = await search_client.search(query)
        candidates = extract_candidates(response.results)
        stats.candidates += len(candidates)
        logger.info(f"Found {len(response.results)} results, {len(candidates)} candidates")

        added_from_query = 0
        for candidate in candidates:
            if added_from_query >= max_per_query:
                logger.info(f"Reached max {max_per_query} tools per query")
                break

            classified_before = stats.classified
            tool = await evaluate_candidate(
                candidate, known=known, classifier=classifier, logo_resolver=logo_resolver, stats=stats
            )
            if tool is not None:
                known.add(tool)
                result.new_tools.append(tool)
                added_from_query += 1
                stats.added += 1
                logger.info(f"✓ Added: {tool['name']} [{tool['category']}]")

            # Pause only after a completion call
            if stats.classified > classified_before and call_delay:
                await asyncio.sleep(call_delay)

        if i < len(queries) and query_delay:
            await asyncio.sleep(query_delay)

    logger.indent(0)
    return result


async def score_new_tools(
    tools: List[Dict[str, Any]], search_client: BraveSearchClient, *, delay: float = QUERY_DELAY_SECONDS
) -> None:
    """Attach a popularity score to freshly discovered tools."""
    for i, tool in enumerate(tools, 1):
        tool["popularity"], _ = await lookup_popularity(search_client, tool["name"])
        if i < len(tools) and delay:
            await asyncio.sleep(delay)


async def run_discovery(
    *,
    search_client: BraveSearchClient,
    classifier: ToolClassifier,
    logo_resolver: LogoResolver,
    tools_file: Path = TOOLS_FILE,
    queries: Sequence[str] = SEARCH_QUERIES,
    max_per_query: int = DEFAULT_MAX_PER_QUERY,
    score_popularity: bool = True,
    query_delay: float = QUERY_DELAY_SECONDS,
    call_delay: float = CALL_DELAY_SECONDS,
) -> DiscoveryResult:
    """Load the tools file, discover new tools, and write the merged, sorted list once."""
    logger.info("Starting AI tool discovery")
    existing = load_tools(tools_file)
    logger.info(f"Loaded {len(existing)} existing tools")

    result = await discover_new_tools(
        search_client=search_client,
        classifier=classifier,
        logo_resolver=logo_resolver,
        known=KnownTools(existing),
        queries=queries,
        max_per_query=max_per_query,
        query_delay=query_delay,
        call_delay=call_delay,
    )
    logger.info(f"Discovery summary: {asdict(result.stats)}")

    if not result.new_tools:
        logger.info("No new tools discovered in this run")
        return result

    if score_popularity:
        await score_new_tools(result.new_tools, search_client, delay=query_delay)

    for idx, tool in enumerate(result.new_tools, 1):
        logger.info(f"{idx}. {tool['name']} ({tool['category']}) - {tool['pricing']}")

    merged = sort_tools(existing + result.new_tools)
    if save_tools(merged, tools_file):
        logger.info(f"Total tools in database: {len(merged)}")
    return result
