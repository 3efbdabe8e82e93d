import json
import logging

import pytest

from ai_tools_directory.logging_config import IndentLogger
from ai_tools_directory.logging_config import setup_logging
from ai_tools_directory.logging_utils import SUMMARY_PREFIX
from ai_tools_directory.logging_utils import run_summary


def _summary_payload(caplog):
    lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith(SUMMARY_PREFIX)]
    assert len(lines) == 1
    return json.loads(lines[0][len(SUMMARY_PREFIX) + 1 :])


def test_run_summary_logs_metrics_on_success(caplog):
    caplog.set_level(logging.INFO)
    with run_summary("discovery") as summary:
        summary.add_metric("added", 3)
        summary.add_metric("skipped", None)

    payload = _summary_payload(caplog)
    assert payload["job"] == "discovery"
    assert payload["status"] == "success"
    assert payload["metrics"] == {"added": 3}
    assert "error_type" not in payload


def test_run_summary_marks_failure_and_reraises(caplog):
    caplog.set_level(logging.INFO)
    with pytest.raises(KeyError):
        with run_summary("backfill_popularity"):
            raise KeyError("name")

    payload = _summary_payload(caplog)
    assert payload["status"] == "error"
    assert payload["error_type"] == "KeyError"


def test_indent_logger_prefixes(caplog):
    caplog.set_level(logging.INFO)
    logger = IndentLogger(logging.getLogger("indent-test"))

    logger.info("top")
    logger.indent(1)
    logger.info("nested")
    logger.dedent()
    logger.dedent()
    logger.info("back")

    assert [r.getMessage() for r in caplog.records] == ["▶ top", "  • nested", "▶ back"]


def test_indent_logger_nested_progress(caplog):
    caplog.set_level(logging.INFO)
    logger = IndentLogger(logging.getLogger("indent-test"))

    with logger.nested():
        logger.progress(2, 5, "Gamma")
    logger.info("done")

    assert [r.getMessage() for r in caplog.records] == ["  • [2/5] Gamma", "▶ done"]
    assert logger.depth == 0


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_replaces_its_own_handlers(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "jobs.log"
    before = len(restore_root_logger.handlers)

    setup_logging("debug", log_file=log_file)
    setup_logging("info", log_file=log_file)
    logging.getLogger("jobs").info("written to file")

    assert len(restore_root_logger.handlers) == before + 2
    assert restore_root_logger.level == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_setup_logging_rejects_unknown_level(tmp_path, restore_root_logger):
    with pytest.raises(ValueError, match="LOUD"):
        setup_logging("LOUD", log_file=tmp_path / "jobs.log")
