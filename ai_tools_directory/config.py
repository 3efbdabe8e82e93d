"""Project configuration, paths and credentials."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Project structure
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
TOOLS_FILE = Path(os.getenv("TOOLS_FILE", str(DATA_DIR / "ai-tools.json")))

# Rate limiting between outbound calls
QUERY_DELAY_SECONDS = float(os.getenv("QUERY_DELAY_SECONDS", "2"))
CALL_DELAY_SECONDS = float(os.getenv("CALL_DELAY_SECONDS", "1"))

# Development mode flag - caches search responses on disk
DEV_MODE = os.getenv("DEV_MODE", "false").lower() == "true"
DEV_CACHE_DIR = Path(os.getenv("DEV_CACHE_DIR", "dev_cache"))


class MissingCredentialsError(RuntimeError):
    """Raised when an API key required by a job is not configured."""


def require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise MissingCredentialsError(f"Environment variable {name} must be set; no fallback is available.")
    return value
