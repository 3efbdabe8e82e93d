import pytest


@pytest.fixture
def sample_tools():
    return [
        {
            "name": "Writesonic",
            "category": "writing",
            "description": "AI writer for blogs, ads and landing pages.",
            "pricing": "freemium",
            "features": ["Blog posts", "Ad copy"],
            "url": "https://writesonic.com",
            "logo": "",
            "icon": "✍️",
            "popularity": 72,
            "dateAdded": "2025-01-01T00:00:00.000Z",
        },
        {
            "name": "ChatGPT",
            "category": "chat",
            "description": "Conversational assistant from OpenAI.",
            "pricing": "freemium",
            "features": ["Chat", "Code"],
            "url": "https://www.chatgpt.com/",
            "logo": "",
            "icon": "💬",
        },
    ]
