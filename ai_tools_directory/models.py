"""Centralized completion model and service endpoint configuration."""

import os
from typing import Final

from dotenv import load_dotenv

load_dotenv()

# Groq exposes an OpenAI-compatible chat completions API
COMPLETION_BASE_URL: Final[str] = os.getenv("COMPLETION_BASE_URL", "https://api.groq.com/openai/v1")
COMPLETION_MODEL: Final[str] = os.getenv("COMPLETION_MODEL", "llama-3.3-70b-versatile")

# Description rewrites default to the discovery model if not specified
DESCRIPTION_MODEL: Final[str] = os.getenv("DESCRIPTION_MODEL", COMPLETION_MODEL)

BRAVE_SEARCH_URL: Final[str] = os.getenv("BRAVE_SEARCH_URL", "https://api.search.brave.com/res/v1/web/search")
LOGO_SERVICE_TEMPLATE: Final[str] = os.getenv("LOGO_SERVICE_TEMPLATE", "https://icons.duckduckgo.com/ip3/{domain}.ico")


__all__ = [
    "COMPLETION_BASE_URL",
    "COMPLETION_MODEL",
    "DESCRIPTION_MODEL",
    "BRAVE_SEARCH_URL",
    "LOGO_SERVICE_TEMPLATE",
]
