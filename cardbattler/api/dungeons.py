"""
Dungeon catalog endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from cardbattler.api.schemas import CardResponse
from cardbattler.services.dungeons import list_areas

router = APIRouter(prefix="/dungeons", tags=["dungeons"])


class LevelResponse(BaseModel):
    id: str
    name: str
    difficulty_multiplier: float
    recommended_level: int


class AreaResponse(BaseModel):
    id: str
    name: str
    description: str
    enemy_pool: list[CardResponse]
    levels: list[LevelResponse]


@router.get("", response_model=list[AreaResponse])
async def get_dungeons() -> list[AreaResponse]:
    """List every dungeon area with its enemy pool and levels."""
    return [
        AreaResponse(
            id=area.id,
            name=area.name,
            description=area.description,
            enemy_pool=[CardResponse.from_card(c) for c in area.enemy_pool],
            levels=[
                LevelResponse(
                    id=level.id,
                    name=level.name,
                    difficulty_multiplier=level.difficulty_multiplier,
                    recommended_level=level.recommended_level,
                )
                for level in area.levels
            ],
        )
        for area in list_areas()
    ]
