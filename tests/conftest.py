import pytest

from cardbattler.models.card import Card, CardStats, Element, Keyword
from cardbattler.services.battle_registry import get_battle_registry


def make_card(
    card_id: str,
    attack: int = 2,
    health: int = 3,
    element: Element = Element.FIRE,
    name: str | None = None,
    keywords: tuple[Keyword, ...] = (),
) -> Card:
    """Build a card with sensible defaults for tests."""
    return Card(
        id=card_id,
        name=name or f"Card {card_id}",
        stats=CardStats(attack=attack, health=health),
        element=element,
        keywords=keywords,
        cost=3,
        explanation="Test card.",
        image_url=f"https://example.com/{card_id}.png",
    )


@pytest.fixture(autouse=True)
def clear_battle_sessions():
    """Battle sessions are process-wide; start every test with none."""
    get_battle_registry().clear()
    yield
    get_battle_registry().clear()


@pytest.fixture
def player_cards() -> list[Card]:
    """A playable five-card deck."""
    return [make_card(f"p{i}", attack=3, health=4, element=Element.WATER) for i in range(5)]
