from dataclasses import dataclass, field

from cardbattler.config import MAX_DECK_SIZE, MIN_DECK_SIZE
from cardbattler.models.card import Card
from cardbattler.models.failure import FailureKind, KnownError


class DeckValidationError(KnownError):
    """
    Raised when a deck breaks a size or uniqueness rule.

    The deck is left unchanged.
    """

    def __init__(self, kind: FailureKind, message: str, detail: str | None = None):
        super().__init__(
            kind=kind,
            message=message,
            detail=detail,
            suggestion=f"A deck holds {MIN_DECK_SIZE}-{MAX_DECK_SIZE} unique cards.",
            status_code=400,
        )


@dataclass
class Deck:
    """
    An ordered collection of unique cards.

    Cards are unique by id. A deck may be built up one card at a time
    but is only playable once it reaches MIN_DECK_SIZE.
    """

    cards: list[Card] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card_id: object) -> bool:
        return any(c.id == card_id for c in self.cards)

    def card_ids(self) -> list[str]:
        """Card ids in deck order."""
        return [c.id for c in self.cards]

    def add_card(self, card: Card) -> None:
        """
        Append a card.

        Raises:
            DeckValidationError: If the deck is full or already holds the card
        """
        if len(self.cards) >= MAX_DECK_SIZE:
            raise DeckValidationError(
                FailureKind.DECK_SIZE_VIOLATION,
                f"Deck cannot exceed {MAX_DECK_SIZE} cards.",
                detail=f"size={len(self.cards)}",
            )
        if card.id in self:
            raise DeckValidationError(
                FailureKind.INVALID_INPUT,
                "Card already in deck.",
                detail=f"card_id={card.id}",
            )
        self.cards.append(card)

    def is_playable(self) -> bool:
        """True if the deck has enough cards for a battle."""
        return MIN_DECK_SIZE <= len(self.cards) <= MAX_DECK_SIZE

    def validate_for_save(self) -> None:
        """
        Check the deck can be saved as the active deck.

        Raises:
            DeckValidationError: If the deck is too small
        """
        if len(self.cards) < MIN_DECK_SIZE:
            raise DeckValidationError(
                FailureKind.DECK_SIZE_VIOLATION,
                f"Deck must have at least {MIN_DECK_SIZE} cards.",
                detail=f"size={len(self.cards)}",
            )


def build_deck(cards: list[Card]) -> Deck:
    """
    Build a deck from a list of cards, applying the add rules to each.

    Raises:
        DeckValidationError: If any card breaks a deck rule
    """
    deck = Deck()
    for card in cards:
        deck.add_card(card)
    return deck
