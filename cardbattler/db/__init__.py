from cardbattler.db.database import get_session, init_db
from cardbattler.db.operations import (
    card_to_model,
    clear_deck,
    delete_card,
    get_card,
    get_cards,
    get_deck,
    get_deck_card_ids,
    save_card,
    save_deck,
)

__all__ = [
    "card_to_model",
    "clear_deck",
    "delete_card",
    "get_card",
    "get_cards",
    "get_deck",
    "get_deck_card_ids",
    "get_session",
    "init_db",
    "save_card",
    "save_deck",
]
