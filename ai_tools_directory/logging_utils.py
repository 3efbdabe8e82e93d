"""Helpers for structured job summary logging."""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Dict
from typing import Iterator
from typing import Optional

SUMMARY_PREFIX = "RUN_SUMMARY"


@dataclass
class RunSummary:
    job: str
    logger: logging.Logger
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    start_monotonic: float = field(default_factory=time.perf_counter)
    status: str = "success"
    metrics: Dict[str, int] = field(default_factory=dict)
    error_type: Optional[str] = None

    def add_metric(self, name: str, value: Optional[int]) -> None:
        """Record a count; None is ignored."""
        if value is None:
            return
        self.metrics[name] = int(value)

    def mark_failed(self, error_type: str) -> None:
        self.status = "error"
        self.error_type = error_type

    def payload(self) -> Dict[str, Any]:
        duration = max(0.0, time.perf_counter() - self.start_monotonic)
        payload: Dict[str, Any] = {
            "job": self.job,
            "status": self.status,
            "started_at": self.started_at.isoformat(),
            "duration_seconds": round(duration, 3),
        }
        if self.metrics:
            payload["metrics"] = self.metrics
        if self.error_type:
            payload["error_type"] = self.error_type
        return payload

    def finalize(self) -> None:
        self.logger.info(f"{SUMMARY_PREFIX} {json.dumps(self.payload(), sort_keys=True)}")


@contextmanager
def run_summary(job: str, *, logger_name: Optional[str] = None) -> Iterator[RunSummary]:
    """Context manager that logs a structured summary line for a maintenance job."""

    logger = logging.getLogger(logger_name or f"run_summary.{job}")
    summary = RunSummary(job=job, logger=logger)
    try:
        yield summary
    except Exception as exc:  # noqa: BLE001
        summary.mark_failed(exc.__class__.__name__)
        summary.finalize()
        raise
    else:
        summary.finalize()
