"""Response models shared by the API routers."""

from pydantic import BaseModel, Field

from cardbattler.models.battle import BattleCard, BattleLogEntry
from cardbattler.models.card import Card


class StatsResponse(BaseModel):
    attack: int
    health: int


class CardResponse(BaseModel):
    """A card as returned by the API."""

    id: str
    name: str
    stats: StatsResponse
    element: str
    keywords: list[str] = Field(default_factory=list)
    cost: int
    explanation: str
    image_url: str

    @classmethod
    def from_card(cls, card: Card) -> "CardResponse":
        return cls(
            id=card.id,
            name=card.name,
            stats=StatsResponse(attack=card.stats.attack, health=card.stats.health),
            element=card.element.value,
            keywords=[k.value for k in card.keywords],
            cost=card.cost,
            explanation=card.explanation,
            image_url=card.image_url,
        )


class BattleCardResponse(CardResponse):
    """A card's combat state within a battle."""

    original_stats: StatsResponse
    can_attack: bool
    is_dead: bool

    @classmethod
    def from_battle_card(cls, card: BattleCard) -> "BattleCardResponse":
        return cls(
            id=card.id,
            name=card.name,
            stats=StatsResponse(attack=card.stats.attack, health=card.stats.health),
            element=card.element.value,
            keywords=[k.value for k in card.keywords],
            cost=card.cost,
            explanation=card.explanation,
            image_url=card.image_url,
            original_stats=StatsResponse(
                attack=card.original_stats.attack, health=card.original_stats.health
            ),
            can_attack=card.can_attack,
            is_dead=card.is_dead,
        )


class LogEntryResponse(BaseModel):
    turn: int
    message: str
    type: str

    @classmethod
    def from_entry(cls, entry: BattleLogEntry) -> "LogEntryResponse":
        return cls(turn=entry.turn, message=entry.message, type=entry.type.value)
