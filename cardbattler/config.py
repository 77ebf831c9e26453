from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "CardBattler"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./cardbattler.db"

    # Text model used to turn a prompt into card fields
    card_text_provider: Literal["anthropic", "ollama"] = "anthropic"

    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"

    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "qwen2.5"

    image_base_url: str = "https://image.pollinations.ai/prompt"

    # Seconds; local models can be slow
    generation_timeout: float = 300.0


settings = Settings()


# =============================================================================
# GAME CONSTANTS
# =============================================================================

# A deck holds at most this many unique cards
MAX_DECK_SIZE = 8

# A deck needs at least this many cards to enter a battle
MIN_DECK_SIZE = 5

# Number of enemies drawn from a dungeon pool per battle
ENEMY_DECK_SIZE = 5

# Flat damage bonus for elemental advantage
ELEMENT_BONUS = 2
