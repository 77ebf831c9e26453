"""
Database CRUD operations.

The card collection is append-only by card id: saving a card that is
already stored is a no-op. The active deck is overwritten wholesale.
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cardbattler.models.card import Card, CardStats, Element, Keyword
from cardbattler.models.db import ActiveDeckDB, CardDB

# --- Collection Operations ---


async def get_card(session: AsyncSession, user_id: str, card_id: str) -> CardDB | None:
    """Get one card from a player's collection."""
    result = await session.execute(
        select(CardDB).where(CardDB.user_id == user_id, CardDB.card_id == card_id)
    )
    return result.scalar_one_or_none()


async def get_cards(session: AsyncSession, user_id: str) -> list[CardDB]:
    """
    Get a player's collection in the order cards were saved.

    Returns an empty list if the player has no cards.
    """
    result = await session.execute(
        select(CardDB).where(CardDB.user_id == user_id).order_by(CardDB.id)
    )
    return list(result.scalars().all())


async def save_card(session: AsyncSession, user_id: str, card: Card) -> bool:
    """
    Add a card to a player's collection.

    Returns False (and stores nothing) if a card with the same id is
    already stored.
    """
    if await get_card(session, user_id, card.id) is not None:
        return False

    session.add(
        CardDB(
            user_id=user_id,
            card_id=card.id,
            name=card.name,
            attack=card.stats.attack,
            health=card.stats.health,
            element=card.element.value,
            keywords=[k.value for k in card.keywords],
            cost=card.cost,
            explanation=card.explanation,
            image_url=card.image_url,
        )
    )
    await session.flush()
    return True


async def delete_card(session: AsyncSession, user_id: str, card_id: str) -> bool:
    """
    Delete a card from a player's collection and active deck.

    Returns True if deleted, False if not found.
    """
    card = await get_card(session, user_id, card_id)
    if card is None:
        return False

    await session.delete(card)

    deck = await _get_deck_row(session, user_id)
    if deck is not None and card_id in deck.card_ids:
        deck.card_ids = [cid for cid in deck.card_ids if cid != card_id]

    await session.flush()
    return True


def card_to_model(db_card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    keywords = [Keyword.parse(k) for k in db_card.keywords or []]
    return Card(
        id=db_card.card_id,
        name=db_card.name,
        stats=CardStats(attack=db_card.attack, health=db_card.health),
        element=Element.parse(db_card.element),
        keywords=tuple(k for k in keywords if k is not None),
        cost=db_card.cost,
        explanation=db_card.explanation,
        image_url=db_card.image_url,
    )


# --- Deck Operations ---


async def _get_deck_row(session: AsyncSession, user_id: str) -> ActiveDeckDB | None:
    result = await session.execute(select(ActiveDeckDB).where(ActiveDeckDB.user_id == user_id))
    return result.scalar_one_or_none()


async def get_deck_card_ids(session: AsyncSession, user_id: str) -> list[str]:
    """Get the ordered card ids of a player's active deck. Empty if unset."""
    deck = await _get_deck_row(session, user_id)
    if deck is None:
        return []
    return [str(cid) for cid in deck.card_ids]


async def get_deck(session: AsyncSession, user_id: str) -> list[Card]:
    """
    Get a player's active deck as cards, in deck order.

    Ids that no longer resolve to a stored card are skipped.
    """
    card_ids = await get_deck_card_ids(session, user_id)
    if not card_ids:
        return []

    by_id = {c.card_id: c for c in await get_cards(session, user_id)}
    return [card_to_model(by_id[cid]) for cid in card_ids if cid in by_id]


async def save_deck(session: AsyncSession, user_id: str, card_ids: list[str]) -> ActiveDeckDB:
    """
    Replace a player's active deck.

    Callers validate the deck first; this stores the ids as given.
    """
    deck = await _get_deck_row(session, user_id)
    if deck is None:
        deck = ActiveDeckDB(user_id=user_id, card_ids=list(card_ids))
        session.add(deck)
    else:
        deck.card_ids = list(card_ids)

    await session.flush()
    return deck


async def clear_deck(session: AsyncSession, user_id: str) -> bool:
    """
    Remove a player's active deck.

    Returns True if a deck was removed.
    """
    result = await session.execute(delete(ActiveDeckDB).where(ActiveDeckDB.user_id == user_id))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
