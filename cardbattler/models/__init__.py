from cardbattler.models.battle import (
    BattleCard,
    BattleLogEntry,
    LogType,
    Outcome,
    Phase,
    Stats,
)
from cardbattler.models.card import FALLBACK_ELEMENT, Card, CardStats, Element, Keyword
from cardbattler.models.deck import Deck, DeckValidationError, build_deck
from cardbattler.models.dungeon import DungeonArea, DungeonLevel
from cardbattler.models.failure import (
    ApiResponse,
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)

__all__ = [
    "ApiResponse",
    "BattleCard",
    "BattleLogEntry",
    "Card",
    "CardNotFoundError",
    "CardStats",
    "Deck",
    "DeckValidationError",
    "DungeonArea",
    "DungeonLevel",
    "Element",
    "FALLBACK_ELEMENT",
    "FailureDetail",
    "FailureKind",
    "Keyword",
    "KnownError",
    "LogType",
    "Outcome",
    "OutcomeType",
    "Phase",
    "Stats",
    "build_deck",
]
