"""
Liveness and readiness probes.

Readiness covers what a player needs to play: the card store, a usable
card text provider and the in-memory battle sessions.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardbattler.config import settings
from cardbattler.db.database import get_session
from cardbattler.services.battle_registry import BattleSessionRegistry, get_battle_registry

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str


class ReadyResponse(BaseModel):
    """
    Readiness report.

    `provider_configured` is False when the Anthropic provider has no API
    key; card generation then only produces the fallback card.
    """

    status: str
    database: str
    card_text_provider: str
    provider_configured: bool
    active_battles: int


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Checks nothing beyond the process answering."""
    return HealthResponse(status="healthy")


def _provider_configured() -> bool:
    if settings.card_text_provider == "anthropic":
        return bool(settings.anthropic_api_key)
    return bool(settings.ollama_base_url)


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ReadyResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> ReadyResponse:
    """
    Readiness probe.

    Returns 503 only when the card store is unreachable. A missing provider
    key is reported but does not block play.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        database = "disconnected"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadyResponse(
        status="ready" if database == "connected" else "not ready",
        database=database,
        card_text_provider=settings.card_text_provider,
        provider_configured=_provider_configured(),
        active_battles=len(registry),
    )
