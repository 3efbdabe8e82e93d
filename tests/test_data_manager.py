import json

from ai_tools_directory.data_manager import backup_tools
from ai_tools_directory.data_manager import load_tools
from ai_tools_directory.data_manager import save_tools


def test_round_trip_preserves_records(tmp_path, sample_tools):
    path = tmp_path / "ai-tools.json"

    assert save_tools(sample_tools, path)

    assert load_tools(path) == sample_tools


def test_save_writes_indented_utf8_array(tmp_path, sample_tools):
    path = tmp_path / "ai-tools.json"
    save_tools(sample_tools, path)

    text = path.read_text(encoding="utf-8")
    assert text.startswith("[\n    {")
    assert "✍️" in text
    assert not list(tmp_path.glob(".ai-tools.json.*"))


def test_load_missing_file_returns_empty_list(tmp_path):
    assert load_tools(tmp_path / "missing.json") == []


def test_load_invalid_json_returns_empty_list(tmp_path):
    path = tmp_path / "ai-tools.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_tools(path) == []


def test_load_non_array_returns_empty_list(tmp_path):
    path = tmp_path / "ai-tools.json"
    path.write_text(json.dumps({"tools": []}), encoding="utf-8")
    assert load_tools(path) == []


def test_save_failure_reports_false_and_leaves_data_untouched(tmp_path, sample_tools):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    before = [dict(tool) for tool in sample_tools]

    assert save_tools(sample_tools, blocker / "ai-tools.json") is False
    assert sample_tools == before


def test_backup_tools_copies_file(tmp_path, sample_tools):
    path = tmp_path / "ai-tools.json"
    save_tools(sample_tools, path)

    backup = backup_tools(path)

    assert backup == tmp_path / "ai-tools.json.backup"
    assert backup.read_text() == path.read_text()


def test_backup_tools_missing_file(tmp_path):
    assert backup_tools(tmp_path / "nope.json") is None
