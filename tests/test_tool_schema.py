import pytest
from pydantic import ValidationError

from ai_tools_directory.tool_schema import Tool
from ai_tools_directory.tool_schema import sort_tools


def test_sort_tools_orders_by_category_then_name():
    tools = [
        {"name": "B", "category": "writing"},
        {"name": "B", "category": "chat"},
        {"name": "A", "category": "writing"},
        {"name": "A", "category": "chat"},
    ]

    ordered = [(t["category"], t["name"]) for t in sort_tools(tools)]

    assert ordered == [("chat", "A"), ("chat", "B"), ("writing", "A"), ("writing", "B")]


def test_sort_tools_ignores_case():
    tools = [{"name": "beta", "category": "code"}, {"name": "Alpha", "category": "code"}]
    assert [t["name"] for t in sort_tools(tools)] == ["Alpha", "beta"]


def test_tool_record_uses_camel_case_date_and_omits_unset_fields():
    tool = Tool(name="Gamma", category="productivity", url="https://gamma.app", dateAdded="2025-05-01T00:00:00.000Z")

    record = tool.to_record()

    assert record["dateAdded"] == "2025-05-01T00:00:00.000Z"
    assert "popularity" not in record
    assert "date_added" not in record


def test_tool_rejects_out_of_range_popularity():
    with pytest.raises(ValidationError):
        Tool(name="X", category="chat", url="https://x.ai", popularity=101)
