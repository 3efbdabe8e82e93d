"""Normalize and verify tool candidates with a chat completion model.

The model receives the candidate's name, URL and search snippet and must answer with
a single JSON object. Anything that is not valid JSON, does not match
ToolNormalization, or is flagged as not a genuine AI tool is rejected. There are no
retries: a rejected candidate is simply skipped for this run.
"""

import logging
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from openai import APIError
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import ValidationInfo
from pydantic import field_validator

from .categories import icon_for_category
from .categories import resolve_category
from .completion_utils import extract_message_text
from .completion_utils import parse_json_response
from .models import COMPLETION_MODEL
from .tool_schema import CATEGORIES
from .tool_schema import PricingType
from .tool_schema import Tool

logger = logging.getLogger(__name__)

MAX_FEATURES = 5

SYSTEM_PROMPT = "You are a JSON generator. Return ONLY valid JSON, no markdown formatting, no explanation."

NORMALIZE_PROMPT = """You are an AI tool curator. Analyze this potential AI tool and return ONLY a valid JSON object \
(no markdown, no explanation, just JSON).

Tool to analyze:
- Name: {name}
- URL: {url}
- Description: {description}

Return a JSON object with these exact fields:
{{
    "name": "Official product name (clean, no extra text)",
    "description": "Clear 1-2 sentence description (max 150 chars)",
    "pricing": "free" or "freemium" or "paid",
    "features": ["feature1", "feature2", "feature3", "feature4", "feature5"],
    "isValidAITool": true or false,
    "suggestedCategory": "one of: {categories}"
}}

Make sure the tool is actually a specific AI product. Return isValidAITool: false if it is an article, \
a blog post, a "best of" or "top N" list, a review, a comparison, a directory of tools, or if the description \
is too generic to identify a single product."""


class ToolNormalization(BaseModel):
    """Expected shape of the classifier's JSON answer."""

    name: str = Field(min_length=1)
    description: str
    pricing: PricingType
    features: List[str] = Field(default_factory=list)
    is_valid_ai_tool: bool = Field(alias="isValidAITool")
    suggested_category: Optional[str] = Field(None, alias="suggestedCategory")

    @field_validator("name", "description")
    @classmethod
    def _strip(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if info.field_name == "name" and not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("pricing", mode="before")
    @classmethod
    def _lower_pricing(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("features")
    @classmethod
    def _cap_features(cls, value: List[str]) -> List[str]:
        return [feature.strip() for feature in value if feature.strip()][:MAX_FEATURES]


def build_prompt(candidate: Dict[str, str]) -> str:
    return NORMALIZE_PROMPT.format(
        name=candidate.get("name", ""),
        url=candidate.get("url", ""),
        description=candidate.get("description", ""),
        categories=", ".join(CATEGORIES),
    )


class ToolClassifier:
    """Sends candidates to the completion service and builds tool records from the answers."""

    def __init__(self, client: Any, *, model: str = COMPLETION_MODEL, temperature: float = 0.3, max_tokens: int = 500):
        self.client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def _complete(self, prompt: str) -> str:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return extract_message_text(completion)

    async def normalize(self, candidate: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """Return a tool record for a genuine AI tool, or None if the candidate is rejected."""
        name = candidate.get("name", "")
        try:
            raw = await self._complete(build_prompt(candidate))
        except APIError as e:
            logger.error(f"Completion API error for {name!r}: {e}")
            return None

        if not raw:
            logger.warning(f"Empty completion for {name!r}")
            return None

        payload = parse_json_response(raw, context=f"classification of {name!r}")
        if payload is None:
            return None

        try:
            normalized = ToolNormalization.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rejected malformed classification for {name!r}: {e.error_count()} schema errors")
            return None

        if not normalized.is_valid_ai_tool:
            logger.info(f"Skipping {name!r} - not a valid AI tool")
            return None

        category = resolve_category(normalized.suggested_category, normalized.name, normalized.description)
        tool = Tool(
            name=normalized.name,
            category=category,
            description=normalized.description,
            pricing=normalized.pricing,
            features=normalized.features,
            url=candidate["url"],
            logo=candidate.get("logo", ""),
            icon=icon_for_category(category),
        )
        return tool.to_record()
