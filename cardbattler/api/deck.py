"""
Active deck endpoints.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardbattler.api.schemas import CardResponse
from cardbattler.config import MAX_DECK_SIZE, MIN_DECK_SIZE
from cardbattler.db import card_to_model, clear_deck, get_cards, get_deck, save_deck
from cardbattler.db.database import get_session
from cardbattler.models.deck import Deck
from cardbattler.services.deck_builder import assemble_deck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deck", tags=["deck"])


class DeckResponse(BaseModel):
    """A player's active deck."""

    user_id: str
    cards: list[CardResponse] = Field(default_factory=list)
    count: int = 0
    playable: bool = False


class DeckUpdateRequest(BaseModel):
    """Request body for saving the active deck."""

    card_ids: list[str] = Field(
        ...,
        description=f"Ordered card ids, {MIN_DECK_SIZE}-{MAX_DECK_SIZE} unique cards",
    )


def _deck_response(user_id: str, deck: Deck) -> DeckResponse:
    return DeckResponse(
        user_id=user_id,
        cards=[CardResponse.from_card(c) for c in deck.cards],
        count=len(deck),
        playable=deck.is_playable(),
    )


@router.get("/{user_id}", response_model=DeckResponse)
async def get_active_deck(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Get the player's active deck.

    Returns an empty deck if none has been saved.
    """
    # Stored decks were validated on save
    return _deck_response(user_id, Deck(cards=await get_deck(session, user_id)))


@router.put("/{user_id}", response_model=DeckResponse)
async def update_active_deck(
    user_id: str,
    request: DeckUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckResponse:
    """
    Replace the player's active deck.

    Every id must be in the player's collection. Returns 400 if the deck
    breaks a size or uniqueness rule and 404 for unknown cards.
    """
    collection = [card_to_model(c) for c in await get_cards(session, user_id)]
    deck = assemble_deck(collection, request.card_ids)
    await save_deck(session, user_id, deck.card_ids())

    return _deck_response(user_id, deck)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_active_deck(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    """
    Remove the player's active deck. The collection is untouched.

    Succeeds whether or not a deck was saved.
    """
    removed = await clear_deck(session, user_id)
    logger.info("deck_cleared", extra={"user_id": user_id, "removed": removed})
