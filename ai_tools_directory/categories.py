"""Keyword-based category scoring and category icons."""

from typing import Dict
from typing import List
from typing import Optional

from .tool_schema import CATEGORIES

DEFAULT_CATEGORY = "productivity"
DEFAULT_ICON = "🤖"

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "chat": ["chatbot", "conversation", "assistant", "chat", "ai chat"],
    "image": ["image", "photo", "picture", "art", "visual", "illustration", "graphics"],
    "video": ["video", "film", "movie", "animation", "clips"],
    "audio": ["audio", "voice", "music", "sound", "speech", "podcast"],
    "code": ["code", "coding", "programming", "developer", "github"],
    "writing": ["writing", "content", "blog", "article", "copywriting", "text"],
    "productivity": ["productivity", "task", "organize", "workflow", "efficiency"],
    "research": ["research", "analysis", "data", "insights", "study"],
    "design": ["design", "ui", "ux", "prototype", "mockup", "creative"],
    "dating": ["dating", "relationship", "match", "romance"],
    "health": ["health", "fitness", "medical", "wellness", "healthcare"],
    "education": ["education", "learning", "teaching", "training", "course"],
    "gaming": ["gaming", "game", "esports", "entertainment"],
    "finance": ["finance", "trading", "investment", "accounting", "money"],
    "travel": ["travel", "trip", "booking", "tourism", "hotel"],
    "customer-service": ["customer service", "support", "help desk", "crm"],
    "directory": ["directory", "catalog", "marketplace", "platform"],
    "enterprise": ["enterprise", "business", "corporate", "b2b", "saas"],
}

CATEGORY_ICONS: Dict[str, str] = {
    "chat": "💬",
    "image": "🎨",
    "video": "🎬",
    "audio": "🎵",
    "code": "💻",
    "writing": "✍️",
    "productivity": "⚡",
    "research": "🔬",
    "design": "🎨",
    "dating": "❤️",
    "health": "🏥",
    "education": "📚",
    "gaming": "🎮",
    "finance": "💰",
    "travel": "✈️",
    "customer-service": "📞",
    "directory": "📂",
    "enterprise": "🏢",
}


def determine_category(name: str, description: str) -> str:
    """Pick the category whose keywords appear most often in the name and description.

    Substring matching, so "ui" also hits "build". Ties keep the earlier category
    in CATEGORIES; no hits at all falls back to DEFAULT_CATEGORY.
    """
    text = f"{name or ''} {description or ''}".lower()
    best_match = DEFAULT_CATEGORY
    highest_score = 0

    for category in CATEGORIES:
        score = sum(1 for keyword in CATEGORY_KEYWORDS[category] if keyword in text)
        if score > highest_score:
            highest_score = score
            best_match = category

    return best_match


def is_known_category(category: Optional[str]) -> bool:
    return category in CATEGORY_KEYWORDS


def resolve_category(suggested: Optional[str], name: str, description: str) -> str:
    """Use the suggested category when recognized, otherwise score keywords."""
    if suggested:
        normalized = suggested.strip().lower()
        if is_known_category(normalized):
            return normalized
    return determine_category(name, description)


def icon_for_category(category: Optional[str]) -> str:
    return CATEGORY_ICONS.get(category or "", DEFAULT_ICON)
