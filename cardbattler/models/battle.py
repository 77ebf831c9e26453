"""
Battle-scoped runtime models.

BattleCard wraps an immutable Card with the mutable state that combat
changes. These objects live only as long as one battle.
"""

from dataclasses import dataclass
from enum import Enum

from cardbattler.models.card import Card, CardStats, Element, Keyword


class LogType(str, Enum):
    """Category of a battle log entry."""

    INFO = "info"
    ATTACK = "attack"
    DEFEAT = "defeat"
    VICTORY = "victory"


class Phase(str, Enum):
    """Turn controller state."""

    NOT_STARTED = "not_started"
    PLAYER = "player"
    ENEMY = "enemy"
    FINISHED = "finished"


class Outcome(str, Enum):
    """Result of a finished battle."""

    PLAYER = "player"
    ENEMY = "enemy"
    DRAW = "draw"


@dataclass(frozen=True, slots=True)
class BattleLogEntry:
    """One line of the battle log. Turn 0 means not yet stamped."""

    turn: int
    message: str
    type: LogType


@dataclass(slots=True)
class Stats:
    """Mutable attack/health pair tracked during a battle."""

    attack: int
    health: int


@dataclass(slots=True)
class BattleCard:
    """
    A card's combat instance.

    Invariants:
        0 <= stats.health <= original_stats.health
        is_dead is True iff stats.health == 0
        stats.attack never changes during combat
    """

    id: str
    name: str
    element: Element
    keywords: tuple[Keyword, ...]
    cost: int
    explanation: str
    image_url: str
    stats: Stats
    original_stats: CardStats
    can_attack: bool = True
    is_dead: bool = False

    @property
    def is_alive(self) -> bool:
        return not self.is_dead

    @property
    def health_ratio(self) -> float:
        """Current health as a fraction of starting health."""
        if self.original_stats.health <= 0:
            return 0.0
        return self.stats.health / self.original_stats.health

    def take_damage(self, amount: int) -> None:
        """Reduce health, flooring at zero and marking death."""
        self.stats.health = max(0, self.stats.health - amount)
        if self.stats.health == 0:
            self.is_dead = True

    @classmethod
    def from_card(cls, card: Card) -> "BattleCard":
        """Create a fresh combat instance that shares no state with `card`."""
        return cls(
            id=card.id,
            name=card.name,
            element=card.element,
            keywords=tuple(card.keywords),
            cost=card.cost,
            explanation=card.explanation,
            image_url=card.image_url,
            stats=Stats(attack=card.stats.attack, health=card.stats.health),
            original_stats=CardStats(attack=card.stats.attack, health=card.stats.health),
        )
