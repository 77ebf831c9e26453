"""
Card generation from a natural-language prompt.

A text model turns the prompt into card fields; the artwork is a
Pollinations URL built from the card and the prompt. Model output is
sanitized once here, so every Card leaving this module is well-formed.

If the model cannot be reached or its reply cannot be parsed, a fixed
fallback card is returned instead of an error.
"""

import json
import logging
import math
import random
import uuid
from typing import Any, Protocol
from urllib.parse import quote

import anthropic
import httpx
from anthropic.types import TextBlock

from cardbattler.config import settings
from cardbattler.models.card import Card, CardStats, Element, Keyword

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Generate a trading card as JSON. Cost is 1-10. "
    "Elements: Fire/Water/Nature/Light/Dark. "
    "Keywords: Rush/Guard/Combo/Revenge/Pierce. "
    "Reply with only the JSON object, in this shape: "
    '{"name":"","stats":{"attack":0,"health":0},"element":"Fire",'
    '"keywords":[],"cost":5,"explanation":""}'
)

DEFAULT_NAME = "Nameless Card"
DEFAULT_EXPLANATION = "A mysterious card."
DEFAULT_ATTACK = 0
DEFAULT_HEALTH = 1
DEFAULT_COST = 5
MIN_COST = 1
MAX_COST = 10
MAX_STAT = 99

FALLBACK_PAYLOAD: dict[str, Any] = {
    "name": "Stand-in Warrior",
    "stats": {"attack": 2, "health": 2},
    "element": "Nature",
    "keywords": [],
    "cost": 2,
    "explanation": (
        "The local blacksmith seems to be closed today. Make do with a wooden stick."
    ),
}


class CardGenerationError(Exception):
    """Raised when a text provider returns nothing usable."""

    pass


class CardTextProvider(Protocol):
    """A text model that answers a card prompt with raw JSON text."""

    async def complete(self, prompt: str) -> str: ...


class AnthropicCardProvider:
    """Card text via the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = model or settings.anthropic_model
        self.timeout = timeout or settings.generation_timeout

    async def complete(self, prompt: str) -> str:
        if not self.api_key:
            raise CardGenerationError("Anthropic API key not configured")

        client = anthropic.AsyncAnthropic(api_key=self.api_key, timeout=self.timeout)
        response = await client.messages.create(
            model=self.model,
            max_tokens=400,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )

        text_content = ""
        for block in response.content:
            if isinstance(block, TextBlock):
                text_content += block.text

        if not text_content:
            raise CardGenerationError("No content received from Anthropic")
        return text_content


class OllamaCardProvider:
    """Card text via a local Ollama server in JSON mode."""

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self.model = model or settings.ollama_model
        self.timeout = timeout or settings.generation_timeout

    async def complete(self, prompt: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/api/chat",
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "format": "json",
                    "stream": False,
                    "options": {
                        "num_predict": 200,
                        "temperature": 0.7,
                        "top_p": 0.9,
                        "repeat_penalty": 1.1,
                    },
                },
            )
            response.raise_for_status()

            data = response.json()
            message = data.get("message") if isinstance(data, dict) else None
            content = message.get("content") if isinstance(message, dict) else None
            if not content:
                raise CardGenerationError("No content received from Ollama")
            return str(content)


def extract_json_object(text: str) -> dict[str, Any]:
    """
    Parse the first JSON object in a model reply.

    Models sometimes wrap JSON in prose or code fences, so parsing starts
    at the first opening brace.

    Raises:
        ValueError: If no JSON object can be decoded
    """
    start = text.find("{")
    if start == -1:
        raise ValueError("No JSON object in model reply")

    obj, _ = json.JSONDecoder().raw_decode(text[start:])
    if not isinstance(obj, dict):
        raise ValueError("Model reply is not a JSON object")
    return obj


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, float):
        # JSON allows Infinity and NaN; "1e999" parses to inf
        if not math.isfinite(value):
            return default
        return int(value)
    return default


def _as_text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def sanitize_card_payload(payload: Any) -> dict[str, Any]:
    """
    Fill in or repair every card field of a raw model payload.

    Missing or mistyped fields get defaults rather than failing: unknown
    elements become Fire, unknown keywords are dropped, numbers are
    clamped into range.
    """
    if not isinstance(payload, dict):
        payload = {}

    stats = payload.get("stats")
    if not isinstance(stats, dict):
        stats = {}

    keywords: list[Keyword] = []
    raw_keywords = payload.get("keywords")
    if isinstance(raw_keywords, list):
        for raw in raw_keywords:
            keyword = Keyword.parse(raw)
            if keyword is not None and keyword not in keywords:
                keywords.append(keyword)

    cost = _as_int(payload.get("cost"), DEFAULT_COST)

    return {
        "name": _as_text(payload.get("name"), DEFAULT_NAME),
        "stats": CardStats(
            attack=min(MAX_STAT, max(0, _as_int(stats.get("attack"), DEFAULT_ATTACK))),
            health=min(MAX_STAT, max(1, _as_int(stats.get("health"), DEFAULT_HEALTH))),
        ),
        "element": Element.parse(payload.get("element")),
        "keywords": tuple(keywords),
        "cost": min(MAX_COST, max(MIN_COST, cost)),
        "explanation": _as_text(payload.get("explanation"), DEFAULT_EXPLANATION),
    }


def build_image_url(
    element: Element,
    name: str,
    prompt: str,
    seed: int,
    base_url: str | None = None,
) -> str:
    """Build the Pollinations artwork URL for a card."""
    base = (base_url or settings.image_base_url).rstrip("/")
    image_prompt = quote(
        f"Fantasy card art, {element.value} element, {name}: {prompt}. "
        "High quality, digital art, magical atmosphere.",
        safe="",
    )
    return f"{base}/{image_prompt}?width=1024&height=1024&seed={seed}&nologo=true&model=flux"


class CardGenerator:
    """
    Turns prompts into cards using a text provider.

    Args:
        provider: Text provider. Defaults to the one named in settings.
        rng: Random source for image seeds
    """

    def __init__(
        self,
        provider: CardTextProvider | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.provider = provider or _default_provider()
        self.rng = rng or random.Random()

    async def generate(self, prompt: str) -> Card:
        """
        Generate a card for a prompt.

        Never raises for provider failures; returns the fallback card.
        """
        try:
            text = await self.provider.complete(prompt)
            fields = sanitize_card_payload(extract_json_object(text))
            logger.info("card_generated", extra={"card_name": fields["name"]})
        except (httpx.HTTPError, anthropic.APIError, CardGenerationError, ValueError):
            logger.warning("Card generation failed, using fallback card", exc_info=True)
            fields = sanitize_card_payload(FALLBACK_PAYLOAD)

        seed = self.rng.randrange(1_000_000)
        return Card(
            id=str(uuid.uuid4()),
            image_url=build_image_url(fields["element"], fields["name"], prompt, seed),
            **fields,
        )


def _default_provider() -> CardTextProvider:
    if settings.card_text_provider == "ollama":
        return OllamaCardProvider()
    return AnthropicCardProvider()


# Default generator instance
_generator: CardGenerator | None = None


def get_card_generator() -> CardGenerator:
    """
    Get the default card generator instance.

    Returns:
        Singleton CardGenerator built from settings
    """
    global _generator
    if _generator is None:
        _generator = CardGenerator()
    return _generator


def reset_card_generator() -> None:
    """Drop the default instance so the next call rebuilds it from settings."""
    global _generator
    _generator = None
