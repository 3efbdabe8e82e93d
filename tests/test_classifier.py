import asyncio

import httpx
from openai import APIConnectionError

from ai_tools_directory.classifier import MAX_FEATURES
from ai_tools_directory.classifier import ToolClassifier
from fakes import FakeCompletionClient

CANDIDATE = {
    "name": "Gamma",
    "url": "https://gamma.app",
    "description": "Create presentations with AI",
    "logo": "https://img/gamma.png",
}

VALID_ANSWER = {
    "name": "Gamma",
    "description": "AI presentation builder that turns prompts into slide decks.",
    "pricing": "Freemium",
    "features": ["Decks", "Docs", "Webpages", "Themes", "Export", "Analytics"],
    "isValidAITool": True,
    "suggestedCategory": "productivity",
}


def _normalize(*responses):
    client = FakeCompletionClient(*responses)
    result = asyncio.run(ToolClassifier(client, model="test-model").normalize(CANDIDATE))
    return result, client


def test_normalize_builds_record_from_valid_answer():
    tool, client = _normalize(VALID_ANSWER)

    assert tool == {
        "name": "Gamma",
        "category": "productivity",
        "description": "AI presentation builder that turns prompts into slide decks.",
        "pricing": "freemium",
        "features": ["Decks", "Docs", "Webpages", "Themes", "Export"],
        "url": "https://gamma.app",
        "logo": "https://img/gamma.png",
        "icon": "⚡",
    }
    assert len(tool["features"]) == MAX_FEATURES

    call = client.calls[0]
    assert call["model"] == "test-model"
    assert call["temperature"] == 0.3
    assert call["max_tokens"] == 500
    assert "https://gamma.app" in call["messages"][1]["content"]


def test_normalize_strips_markdown_fences():
    fenced = '```json\n{"name": "Gamma", "description": "Slides", "pricing": "paid", "features": [], ' \
        '"isValidAITool": true, "suggestedCategory": "design"}\n```'
    tool, _ = _normalize(fenced)
    assert tool["category"] == "design"
    assert tool["pricing"] == "paid"


def test_normalize_scores_category_when_suggestion_missing_or_unknown():
    answer = dict(VALID_ANSWER, suggestedCategory="slides", description="Presentation tool for video clips")
    tool, _ = _normalize(answer)
    assert tool["category"] == "video"

    answer = {k: v for k, v in VALID_ANSWER.items() if k != "suggestedCategory"}
    answer["description"] = "Compose music and sound effects"
    tool, _ = _normalize(answer)
    assert tool["category"] == "audio"
    assert tool["icon"] == "🎵"


def test_normalize_rejects_invalid_tool_flag():
    tool, _ = _normalize(dict(VALID_ANSWER, isValidAITool=False))
    assert tool is None


def test_normalize_rejects_non_json():
    tool, _ = _normalize("I think this is a great tool!")
    assert tool is None


def test_normalize_rejects_payload_missing_required_fields():
    tool, _ = _normalize({"name": "Gamma", "isValidAITool": True})
    assert tool is None


def test_normalize_rejects_unknown_pricing():
    tool, _ = _normalize(dict(VALID_ANSWER, pricing="enterprise"))
    assert tool is None


def test_normalize_returns_none_on_api_error():
    error = APIConnectionError(request=httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions"))
    tool, client = _normalize(error)
    assert tool is None
    assert len(client.calls) == 1


def test_normalize_rejects_blank_name():
    tool, _ = _normalize(dict(VALID_ANSWER, name="   "))
    assert tool is None
