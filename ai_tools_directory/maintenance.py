"""Date bookkeeping for directory entries."""

import logging
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

logger = logging.getLogger(__name__)

BACKFILL_DAYS_AGO = 30
RECENT_WINDOW_DAYS = 7


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def backfill_dates(
    tools: List[Dict[str, Any]], *, now: Optional[datetime] = None, days_ago: int = BACKFILL_DAYS_AGO
) -> int:
    """Give undated records a dateAdded in the past so they don't all show up as new."""
    now = now or datetime.now(timezone.utc)
    stamp = (now - timedelta(days=days_ago)).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    updated = 0
    for tool in tools:
        if not tool.get("dateAdded"):
            tool["dateAdded"] = stamp
            updated += 1

    logger.info(f"Backfilled dateAdded={stamp} on {updated} tools, skipped {len(tools) - updated}")
    return updated


def is_recently_added(tool: Dict[str, Any], *, now: Optional[datetime] = None, days: int = RECENT_WINDOW_DAYS) -> bool:
    added = parse_iso_timestamp(tool.get("dateAdded"))
    if added is None:
        return False
    now = now or datetime.now(timezone.utc)
    return timedelta(0) <= now - added <= timedelta(days=days)
