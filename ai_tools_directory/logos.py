"""Logo lookup for newly discovered tools."""

import logging
from typing import Dict
from typing import Optional

import httpx

from .dedupe import extract_domain
from .models import LOGO_SERVICE_TEMPLATE

logger = logging.getLogger(__name__)

# Hand-picked logos for tools the logo service renders poorly
KNOWN_LOGOS: Dict[str, str] = {
    "chatgpt": "https://upload.wikimedia.org/wikipedia/commons/0/04/ChatGPT_logo.svg",
    "openai.com": "https://upload.wikimedia.org/wikipedia/commons/4/4d/OpenAI_Logo.svg",
    "claude": "https://upload.wikimedia.org/wikipedia/commons/8/8a/Claude_AI_logo.svg",
    "claude.ai": "https://upload.wikimedia.org/wikipedia/commons/8/8a/Claude_AI_logo.svg",
    "gemini": "https://upload.wikimedia.org/wikipedia/commons/8/8a/Google_Gemini_logo.svg",
    "gemini.google.com": "https://upload.wikimedia.org/wikipedia/commons/8/8a/Google_Gemini_logo.svg",
    "midjourney": "https://upload.wikimedia.org/wikipedia/commons/e/e6/Midjourney_Emblem.png",
    "midjourney.com": "https://upload.wikimedia.org/wikipedia/commons/e/e6/Midjourney_Emblem.png",
    "github copilot": "https://github.githubassets.com/images/modules/logos_page/GitHub-Mark.png",
    "perplexity": "https://upload.wikimedia.org/wikipedia/commons/1/1d/Perplexity_AI_logo.svg",
    "perplexity.ai": "https://upload.wikimedia.org/wikipedia/commons/1/1d/Perplexity_AI_logo.svg",
}

# Well-known product domains; the logo service is trusted for these without probing
TRUSTED_LOGO_DOMAINS = {
    "openai.com",
    "anthropic.com",
    "google.com",
    "microsoft.com",
    "github.com",
    "notion.so",
    "canva.com",
    "adobe.com",
    "figma.com",
    "grammarly.com",
    "jasper.ai",
    "copy.ai",
    "runwayml.com",
    "elevenlabs.io",
    "synthesia.io",
    "descript.com",
    "otter.ai",
    "huggingface.co",
    "replicate.com",
    "stability.ai",
}


def _is_trusted(domain: str) -> bool:
    return any(domain == trusted or domain.endswith("." + trusted) for trusted in TRUSTED_LOGO_DOMAINS)


class LogoResolver:
    """Resolve a logo URL: static table, trusted domains, then a HEAD probe of the logo service."""

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, *, service_template: str = LOGO_SERVICE_TEMPLATE):
        self.http_client = http_client or httpx.AsyncClient(timeout=5.0, follow_redirects=True)
        self.service_template = service_template

    def service_url(self, domain: str) -> str:
        return self.service_template.format(domain=domain)

    async def probe(self, logo_url: str) -> bool:
        try:
            response = await self.http_client.head(logo_url)
        except httpx.HTTPError as e:
            logger.warning(f"Logo probe failed for {logo_url}: {e}")
            return False
        return response.status_code == 200

    async def resolve(self, name: str, url: str, fallback: str = "") -> str:
        known = KNOWN_LOGOS.get((name or "").strip().lower())
        if known:
            return known

        domain = extract_domain(url)
        if not domain:
            return fallback or ""
        if domain in KNOWN_LOGOS:
            return KNOWN_LOGOS[domain]

        logo_url = self.service_url(domain)
        if _is_trusted(domain):
            return logo_url
        if await self.probe(logo_url):
            return logo_url

        logger.debug(f"No logo found for {domain}")
        return fallback or ""

    async def aclose(self) -> None:
        await self.http_client.aclose()
