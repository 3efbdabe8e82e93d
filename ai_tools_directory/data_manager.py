"""Data management for the tools file."""

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from .config import TOOLS_FILE

logger = logging.getLogger(__name__)


def load_tools(path: Path = TOOLS_FILE) -> List[Dict[str, Any]]:
    """Load the tool records; any read problem yields an empty list."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.info(f"No tools file at {path}, starting with an empty list")
        return []
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read tools from {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.error(f"Expected a JSON array in {path}, got {type(data).__name__}")
        return []

    logger.info(f"Loaded {len(data):,} tools from {path}")
    return data


def save_tools(tools: List[Dict[str, Any]], path: Path = TOOLS_FILE) -> bool:
    """Overwrite the tools file with the full list in a single replace."""
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as handle:
            tmp_name = handle.name
            json.dump(tools, handle, indent=4, ensure_ascii=False)
            handle.write("\n")
        os.replace(tmp_name, path)
    except OSError as e:
        logger.error(f"Failed to save tools to {path}: {e}")
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        return False

    logger.info(f"Saved {len(tools)} tools to {path}")
    return True


def backup_tools(path: Path = TOOLS_FILE) -> Optional[Path]:
    """Copy the tools file next to itself as <name>.backup."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Nothing to back up, {path} does not exist")
        return None
    backup_path = path.with_name(path.name + ".backup")
    shutil.copyfile(path, backup_path)
    logger.info(f"Created backup: {backup_path}")
    return backup_path
