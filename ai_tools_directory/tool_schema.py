"""Directory entry schema shared by the maintenance jobs."""

from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Literal
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# Order matters: keyword ties resolve to the earliest category
CATEGORIES: List[str] = [
    "chat",
    "image",
    "video",
    "audio",
    "code",
    "writing",
    "productivity",
    "research",
    "design",
    "dating",
    "health",
    "education",
    "gaming",
    "finance",
    "travel",
    "customer-service",
    "directory",
    "enterprise",
]

PRICING_TIERS: List[str] = ["free", "freemium", "paid"]

PricingType = Literal["free", "freemium", "paid"]


class Tool(BaseModel):
    """A single directory entry as persisted in the tools file."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    category: str
    description: str = ""
    pricing: PricingType = "freemium"
    features: List[str] = Field(default_factory=list)
    url: str
    logo: str = ""
    icon: str = ""
    popularity: Optional[int] = Field(None, ge=0, le=100)
    date_added: Optional[str] = Field(None, alias="dateAdded")

    def to_record(self) -> Dict[str, Any]:
        """Dump to the on-disk dict shape, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _sort_key(tool: Dict[str, Any]) -> tuple:
    return (str(tool.get("category", "")).casefold(), str(tool.get("name", "")).casefold())


def sort_tools(tools: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order records by category, then by name."""
    return sorted(tools, key=_sort_key)
