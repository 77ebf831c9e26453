from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Element(str, Enum):
    """Card affinity used for elemental advantage."""

    FIRE = "Fire"
    WATER = "Water"
    NATURE = "Nature"
    LIGHT = "Light"
    DARK = "Dark"

    @classmethod
    def parse(cls, value: Any) -> "Element":
        """Parse an element name, falling back to Fire for anything unknown."""
        if isinstance(value, str):
            for element in cls:
                if element.value.lower() == value.strip().lower():
                    return element
        return FALLBACK_ELEMENT


FALLBACK_ELEMENT = Element.FIRE


class Keyword(str, Enum):
    """
    Keyword tags a card may carry.

    Keywords are stored and displayed but have no combat effect.
    """

    RUSH = "Rush"
    GUARD = "Guard"
    COMBO = "Combo"
    REVENGE = "Revenge"
    PIERCE = "Pierce"

    @classmethod
    def parse(cls, value: Any) -> "Keyword | None":
        """Parse a keyword name. Returns None if it is not a known keyword."""
        if isinstance(value, str):
            for keyword in cls:
                if keyword.value.lower() == value.strip().lower():
                    return keyword
        return None


@dataclass(frozen=True, slots=True)
class CardStats:
    """Attack and health values of a card."""

    attack: int
    health: int


@dataclass(frozen=True, slots=True)
class Card:
    """
    An immutable card template.

    Attributes:
        id: Unique identifier (uuid for generated cards, short code for enemies)
        name: Display name
        stats: Base attack and health
        element: Elemental affinity
        keywords: Keyword tags (data only)
        cost: Summoning cost
        explanation: Flavor text
        image_url: Generated artwork URL
    """

    id: str
    name: str
    stats: CardStats
    element: Element
    keywords: tuple[Keyword, ...] = field(default_factory=tuple)
    cost: int = 1
    explanation: str = ""
    image_url: str = ""
