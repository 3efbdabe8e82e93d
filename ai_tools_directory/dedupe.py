"""Duplicate detection by registrable domain and case-insensitive name."""

import logging
from typing import Any
from typing import Dict
from typing import Iterable
from typing import Optional
from typing import Set
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> Optional[str]:
    """Return the host without a leading "www.", or None if the URL has no host."""
    if not url:
        return None
    try:
        host = urlparse(url.strip()).hostname
    except ValueError:
        return None
    if not host:
        return None
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host or None


def _name_key(name: str) -> str:
    return (name or "").strip().lower()


def is_duplicate(url: str, name: str, known: Iterable[Dict[str, Any]]) -> bool:
    """Check a candidate against a list of tool records.

    An unparseable candidate URL counts as a duplicate so ambiguous input is never added.
    """
    domain = extract_domain(url)
    if not domain:
        return True

    name_key = _name_key(name)
    for tool in known:
        if extract_domain(tool.get("url", "")) == domain:
            return True
        if _name_key(tool.get("name", "")) == name_key:
            return True
    return False


class KnownTools:
    """Domains and names of existing tools plus those accepted during the current run."""

    def __init__(self, tools: Iterable[Dict[str, Any]] = ()):
        self._domains: Set[str] = set()
        self._names: Set[str] = set()
        for tool in tools:
            self.add(tool)

    def add(self, tool: Dict[str, Any]) -> None:
        domain = extract_domain(tool.get("url", ""))
        if domain:
            self._domains.add(domain)
        name_key = _name_key(tool.get("name", ""))
        if name_key:
            self._names.add(name_key)

    def contains(self, url: str, name: str) -> bool:
        domain = extract_domain(url)
        if not domain:
            logger.debug(f"Unparseable URL treated as duplicate: {url!r}")
            return True
        return domain in self._domains or _name_key(name) in self._names
