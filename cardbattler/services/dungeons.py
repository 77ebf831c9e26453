"""
Dungeon catalog.

Static areas, each with an enemy pool and three difficulty levels. Enemy
decks for a battle are drawn from an area's pool and scaled by the chosen
level's multiplier.
"""

import math
import random
from dataclasses import replace

from cardbattler.config import ENEMY_DECK_SIZE
from cardbattler.models.card import Card, CardStats, Element, Keyword
from cardbattler.models.dungeon import DungeonArea, DungeonLevel


def _art(subject: str) -> str:
    return (
        "https://image.pollinations.ai/prompt/fantasy%20card%20art%20"
        f"{subject}?width=512&height=768&nologo=true"
    )


BEGINNER_ENEMIES: tuple[Card, ...] = (
    Card(
        id="b1",
        name="Goblin",
        stats=CardStats(attack=2, health=3),
        element=Element.NATURE,
        cost=1,
        explanation="A small fiend living in the forest.",
        image_url=_art("goblin%20forest"),
    ),
    Card(
        id="b2",
        name="Slime",
        stats=CardStats(attack=1, health=4),
        element=Element.WATER,
        cost=1,
        explanation="It wobbles.",
        image_url=_art("blue%20slime"),
    ),
    Card(
        id="b3",
        name="Wolf",
        stats=CardStats(attack=3, health=2),
        element=Element.NATURE,
        cost=2,
        explanation="Bites with swift movements.",
        image_url=_art("wolf%20forest"),
    ),
    Card(
        id="b4",
        name="Fairy",
        stats=CardStats(attack=2, health=2),
        element=Element.LIGHT,
        cost=2,
        explanation="Wields the magic of light.",
        image_url=_art("fairy%20light"),
    ),
)

INTERMEDIATE_ENEMIES: tuple[Card, ...] = (
    Card(
        id="i1",
        name="Fire Imp",
        stats=CardStats(attack=4, health=2),
        element=Element.FIRE,
        keywords=(Keyword.RUSH,),
        cost=3,
        explanation="A blazing little devil.",
        image_url=_art("fire%20imp"),
    ),
    Card(
        id="i2",
        name="Lizardman",
        stats=CardStats(attack=3, health=5),
        element=Element.FIRE,
        cost=3,
        explanation="A warrior with hard scales.",
        image_url=_art("lizardman%20warrior"),
    ),
    Card(
        id="i3",
        name="Magma Golem",
        stats=CardStats(attack=2, health=7),
        element=Element.FIRE,
        keywords=(Keyword.GUARD,),
        cost=4,
        explanation="A giant made of lava.",
        image_url=_art("magma%20golem"),
    ),
    Card(
        id="i4",
        name="Salamander",
        stats=CardStats(attack=5, health=3),
        element=Element.FIRE,
        cost=4,
        explanation="A lizard cloaked in flame.",
        image_url=_art("fire%20salamander"),
    ),
)

ADVANCED_ENEMIES: tuple[Card, ...] = (
    Card(
        id="a1",
        name="Shadow Knight",
        stats=CardStats(attack=6, health=6),
        element=Element.DARK,
        cost=5,
        explanation="A knight fallen into darkness.",
        image_url=_art("dark%20knight"),
    ),
    Card(
        id="a2",
        name="Archdemon",
        stats=CardStats(attack=7, health=5),
        element=Element.DARK,
        cost=6,
        explanation="A greater demon.",
        image_url=_art("archdemon"),
    ),
    Card(
        id="a3",
        name="Chaos Dragon",
        stats=CardStats(attack=9, health=8),
        element=Element.DARK,
        cost=8,
        explanation="A dragon that summons chaos.",
        image_url=_art("chaos%20dragon"),
    ),
    Card(
        id="a4",
        name="Vampire Lord",
        stats=CardStats(attack=5, health=10),
        element=Element.DARK,
        keywords=(Keyword.REVENGE,),
        cost=7,
        explanation="A noble thirsting for blood.",
        image_url=_art("vampire%20lord"),
    ),
)


DUNGEON_AREAS: tuple[DungeonArea, ...] = (
    DungeonArea(
        id="area1",
        name="Forest of Beginnings",
        description="A forest where monsters have begun to appear.",
        enemy_pool=BEGINNER_ENEMIES,
        levels=(
            DungeonLevel("area1_1", "Beginner", 1.0, 1),
            DungeonLevel("area1_2", "Intermediate", 1.5, 5),
            DungeonLevel("area1_3", "Advanced", 2.0, 10),
        ),
    ),
    DungeonArea(
        id="area2",
        name="Scorching Volcano",
        description="A danger zone inhabited by powerful fire monsters.",
        enemy_pool=INTERMEDIATE_ENEMIES,
        levels=(
            DungeonLevel("area2_1", "Beginner", 0.8, 15),
            DungeonLevel("area2_2", "Intermediate", 1.0, 20),
            DungeonLevel("area2_3", "Advanced", 1.3, 25),
        ),
    ),
    DungeonArea(
        id="area3",
        name="Abyssal Castle",
        description="A castle infested with the most vicious fiends.",
        enemy_pool=ADVANCED_ENEMIES,
        levels=(
            DungeonLevel("area3_1", "Beginner", 0.7, 30),
            DungeonLevel("area3_2", "Intermediate", 1.0, 40),
            DungeonLevel("area3_3", "Advanced", 1.5, 50),
        ),
    ),
)


def list_areas() -> tuple[DungeonArea, ...]:
    """All dungeon areas in display order."""
    return DUNGEON_AREAS


def get_area(area_id: str) -> DungeonArea | None:
    """Find an area by id."""
    for area in DUNGEON_AREAS:
        if area.id == area_id:
            return area
    return None


def scale_stat(value: int, multiplier: float) -> int:
    """
    Scale a stat, rounding up.

    Rounds the product to 9 places first so float noise (2 * 1.15 and the
    like) does not push an exact result up by one.
    """
    return math.ceil(round(value * multiplier, 9))


def scale_card(card: Card, multiplier: float) -> Card:
    """Return a copy of `card` with attack and health scaled by `multiplier`."""
    return replace(
        card,
        stats=CardStats(
            attack=scale_stat(card.stats.attack, multiplier),
            health=scale_stat(card.stats.health, multiplier),
        ),
    )


def build_enemy_deck(
    area: DungeonArea,
    level: DungeonLevel,
    rng: random.Random,
    size: int = ENEMY_DECK_SIZE,
) -> list[Card]:
    """
    Draw an enemy deck for one battle.

    Enemies are drawn with replacement, so the same pool card may appear
    more than once; each copy gets its own id.
    """
    if not area.enemy_pool:
        return []

    cards: list[Card] = []
    for index in range(size):
        base = rng.choice(area.enemy_pool)
        scaled = scale_card(base, level.difficulty_multiplier)
        cards.append(replace(scaled, id=f"enemy-{index}-{base.id}"))
    return cards
