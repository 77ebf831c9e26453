from cardbattler.api.battle import router as battle_router
from cardbattler.api.cards import router as cards_router
from cardbattler.api.deck import router as deck_router
from cardbattler.api.dungeons import router as dungeons_router
from cardbattler.api.health import router as health_router

__all__ = [
    "battle_router",
    "cards_router",
    "deck_router",
    "dungeons_router",
    "health_router",
]
