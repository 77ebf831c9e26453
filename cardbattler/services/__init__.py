"""
CardBattler services.

Card generation, the dungeon catalog, deck assembly and battle sessions.
"""

from cardbattler.services.card_generator import (
    AnthropicCardProvider,
    CardGenerationError,
    CardGenerator,
    OllamaCardProvider,
    build_image_url,
    extract_json_object,
    get_card_generator,
    sanitize_card_payload,
)
from cardbattler.services.deck_builder import assemble_deck
from cardbattler.services.dungeons import (
    DUNGEON_AREAS,
    build_enemy_deck,
    get_area,
    list_areas,
    scale_card,
    scale_stat,
)

__all__ = [
    "AnthropicCardProvider",
    "CardGenerationError",
    "CardGenerator",
    "OllamaCardProvider",
    "build_image_url",
    "extract_json_object",
    "get_card_generator",
    "sanitize_card_payload",
    # Deck assembly
    "assemble_deck",
    # Dungeon catalog
    "DUNGEON_AREAS",
    "build_enemy_deck",
    "get_area",
    "list_areas",
    "scale_card",
    "scale_stat",
]
