from dataclasses import dataclass, field

from cardbattler.models.card import Card


@dataclass(frozen=True)
class DungeonLevel:
    """
    A difficulty level within an area.

    Attributes:
        id: Level identifier, unique across the catalog
        name: Display name (Beginner, Intermediate, Advanced)
        difficulty_multiplier: Scalar applied to enemy base stats
        recommended_level: Suggested player level
    """

    id: str
    name: str
    difficulty_multiplier: float
    recommended_level: int


@dataclass(frozen=True)
class DungeonArea:
    """An area with its enemy pool and difficulty levels."""

    id: str
    name: str
    description: str
    enemy_pool: tuple[Card, ...] = field(default_factory=tuple)
    levels: tuple[DungeonLevel, ...] = field(default_factory=tuple)

    def get_level(self, level_id: str) -> DungeonLevel | None:
        """Find a level of this area by id."""
        for level in self.levels:
            if level.id == level_id:
                return level
        return None
