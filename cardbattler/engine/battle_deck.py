from collections.abc import Iterable

from cardbattler.models.battle import BattleCard
from cardbattler.models.card import Card


def initialize_battle_deck(cards: Iterable[Card]) -> list[BattleCard]:
    """
    Create battle cards for a list of cards, preserving order.

    Each battle card owns fresh copies of the stats, so combat never touches
    the source cards. Empty input yields an empty list.
    """
    return [BattleCard.from_card(card) for card in cards]


def living(cards: Iterable[BattleCard]) -> list[BattleCard]:
    """Battle cards that are still alive."""
    return [c for c in cards if not c.is_dead]


def find_card(cards: Iterable[BattleCard], card_id: str) -> BattleCard | None:
    """Find a battle card by id."""
    for card in cards:
        if card.id == card_id:
            return card
    return None
