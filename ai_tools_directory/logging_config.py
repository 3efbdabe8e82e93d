"""Logging setup shared by the maintenance jobs."""

import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from typing import Optional

LOG_FILE = Path(os.getenv("LOG_FILE", "logs/ai_tools_directory.log"))
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party clients that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai")


class IndentLogger:
    """Prefixes messages by nesting depth so per-item progress reads as a tree.

    Depth 0 lines get a "▶" marker, nested lines a "•" indented two spaces per level.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger
        self._depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    def indent(self, level: Optional[int] = None) -> None:
        self._depth = max(0, level) if level is not None else self._depth + 1

    def dedent(self) -> None:
        self._depth = max(0, self._depth - 1)

    @contextmanager
    def nested(self) -> Iterator["IndentLogger"]:
        """Log one level deeper inside the block."""
        self.indent()
        try:
            yield self
        finally:
            self.dedent()

    def progress(self, index: int, total: int, msg: str) -> None:
        self.info(f"[{index}/{total}] {msg}")

    def _log(self, level: int, msg: str, *args, **kwargs) -> None:
        marker = "  " * self._depth + ("•" if self._depth else "▶")
        self._logger.log(level, f"{marker} {msg}", *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._log(logging.ERROR, msg, *args, **kwargs)


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_ai_tools_directory", False)


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Send every record to the log file and INFO and above to stdout.

    Safe to call more than once: handlers installed by an earlier call are replaced.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    log_file = Path(log_file or LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in [h for h in root_logger.handlers if _owned(h)]:
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setLevel(max(level, logging.INFO))

    for handler in (file_handler, stream_handler):
        handler._ai_tools_directory = True
        root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
