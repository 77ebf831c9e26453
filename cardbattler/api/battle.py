"""
Battle endpoints.

Each player has one battle session. Commands always answer 200 with
`accepted` and the full session state; a rejected command changes nothing.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardbattler.api.schemas import BattleCardResponse, LogEntryResponse
from cardbattler.db import get_deck
from cardbattler.db.database import get_session
from cardbattler.engine.session import BattleSession
from cardbattler.services.battle_registry import BattleSessionRegistry, get_battle_registry

router = APIRouter(prefix="/battle", tags=["battle"])


class StartBattleRequest(BaseModel):
    """Request body for starting a battle."""

    area_id: str = Field(..., examples=["area1"])
    level_id: str = Field(..., examples=["area1_1"])


class CardSelectionRequest(BaseModel):
    """Request body for selecting a card."""

    card_id: str


class BattleStateResponse(BaseModel):
    """Full state of a player's battle session."""

    accepted: bool = True
    phase: str
    turn: int
    outcome: str | None = None
    area_id: str | None = None
    level_id: str | None = None
    selected_attacker_id: str | None = None
    player_deck: list[BattleCardResponse] = Field(default_factory=list)
    enemy_deck: list[BattleCardResponse] = Field(default_factory=list)
    log: list[LogEntryResponse] = Field(default_factory=list)


def _state(battle: BattleSession, accepted: bool = True) -> BattleStateResponse:
    return BattleStateResponse(
        accepted=accepted,
        phase=battle.phase.value,
        turn=battle.turn,
        outcome=battle.outcome.value if battle.outcome else None,
        area_id=battle.area.id if battle.area else None,
        level_id=battle.level.id if battle.level else None,
        selected_attacker_id=battle.selected_attacker_id,
        player_deck=[BattleCardResponse.from_battle_card(c) for c in battle.player_deck],
        enemy_deck=[BattleCardResponse.from_battle_card(c) for c in battle.enemy_deck],
        log=[LogEntryResponse.from_entry(e) for e in battle.log],
    )


@router.get("/{user_id}", response_model=BattleStateResponse)
async def get_battle(
    user_id: str,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """Get the current battle state."""
    return _state(registry.get(user_id))


@router.post("/{user_id}/start", response_model=BattleStateResponse)
async def start_battle(
    user_id: str,
    request: StartBattleRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """
    Start a battle with the player's saved deck.

    Not accepted if the deck is not playable, the dungeon is unknown,
    or the session is not reset.
    """
    battle = registry.get(user_id)
    deck = await get_deck(session, user_id)
    accepted = battle.start(deck, request.area_id, request.level_id)
    return _state(battle, accepted)


@router.post("/{user_id}/select-attacker", response_model=BattleStateResponse)
async def select_attacker(
    user_id: str,
    request: CardSelectionRequest,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """Select (or deselect) the player's attacking card."""
    battle = registry.get(user_id)
    accepted = battle.select_attacker(request.card_id)
    return _state(battle, accepted)


@router.post("/{user_id}/select-defender", response_model=BattleStateResponse)
async def select_defender(
    user_id: str,
    request: CardSelectionRequest,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """
    Attack an enemy card with the selected attacker.

    The enemy phase runs right after the exchange.
    """
    battle = registry.get(user_id)
    accepted = battle.select_defender(request.card_id)
    return _state(battle, accepted)


@router.post("/{user_id}/end-phase", response_model=BattleStateResponse)
async def end_phase(
    user_id: str,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """Pass the player's phase and let the enemy act."""
    battle = registry.get(user_id)
    accepted = battle.end_phase()
    return _state(battle, accepted)


@router.post("/{user_id}/reset", response_model=BattleStateResponse)
async def reset_battle(
    user_id: str,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> BattleStateResponse:
    """Abandon the battle and return to NOT_STARTED."""
    battle = registry.get(user_id)
    accepted = battle.reset()
    return _state(battle, accepted)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_battle(
    user_id: str,
    registry: Annotated[BattleSessionRegistry, Depends(get_battle_registry)],
) -> None:
    """Forget the player's session entirely. The next request starts a fresh one."""
    registry.discard(user_id)
