"""
Card collection endpoints.

Cards are generated from a prompt and saved to the player's collection.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from cardbattler.api.schemas import CardResponse
from cardbattler.db import card_to_model, delete_card, get_cards, save_card
from cardbattler.db.database import get_session
from cardbattler.models.failure import CardNotFoundError
from cardbattler.services.card_generator import CardGenerator, get_card_generator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


class GenerateCardRequest(BaseModel):
    """Request body for card generation."""

    user_id: str = Field(..., min_length=1, description="Owner of the new card")
    prompt: str = Field(
        ...,
        description="Natural-language card concept",
        examples=["A dragon made of storm clouds"],
    )


class CollectionResponse(BaseModel):
    """A player's card collection."""

    user_id: str
    cards: list[CardResponse] = Field(default_factory=list)
    count: int = 0


@router.post("/generate", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def generate_card(
    request: GenerateCardRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    generator: Annotated[CardGenerator, Depends(get_card_generator)],
) -> CardResponse:
    """
    Generate a card from a prompt and add it to the collection.

    If the text model is unavailable, the fallback card is generated
    and saved instead.
    """
    prompt = request.prompt.strip()
    if not prompt:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Prompt is required",
        )

    card = await generator.generate(prompt)
    await save_card(session, request.user_id, card)
    logger.info("card_saved", extra={"user_id": request.user_id, "card_id": card.id})

    return CardResponse.from_card(card)


@router.get("/{user_id}", response_model=CollectionResponse)
async def get_collection(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CollectionResponse:
    """
    Get a player's collection.

    Returns an empty collection for players with no cards.
    """
    cards = [CardResponse.from_card(card_to_model(c)) for c in await get_cards(session, user_id)]
    return CollectionResponse(user_id=user_id, cards=cards, count=len(cards))


@router.delete("/{user_id}/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_card(
    user_id: str,
    card_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> None:
    """
    Delete a card from the collection.

    The card is also dropped from the active deck.
    """
    deleted = await delete_card(session, user_id, card_id)
    if not deleted:
        raise CardNotFoundError(card_id)
