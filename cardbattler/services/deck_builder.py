"""
Deck assembly from a player's collection.

A deck is chosen by card id. Every id must name a card the player owns,
and the result must satisfy the deck rules before it can be saved.
"""

from collections.abc import Iterable

from cardbattler.models.card import Card
from cardbattler.models.deck import Deck, build_deck
from cardbattler.models.failure import CardNotFoundError


def assemble_deck(collection: Iterable[Card], card_ids: list[str]) -> Deck:
    """
    Build a saveable deck from card ids, in the given order.

    Raises:
        CardNotFoundError: If an id is not in the collection
        DeckValidationError: If the deck is too large, too small, or repeats a card
    """
    by_id = {card.id: card for card in collection}

    cards: list[Card] = []
    for card_id in card_ids:
        card = by_id.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        cards.append(card)

    deck = build_deck(cards)
    deck.validate_for_save()
    return deck
