"""Tests for the dungeon catalog endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from cardbattler.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestDungeonsEndpoint:
    async def test_lists_all_areas(self, client: AsyncClient) -> None:
        response = await client.get("/dungeons")

        assert response.status_code == 200
        data = response.json()
        assert [a["id"] for a in data] == ["area1", "area2", "area3"]

    async def test_area_shape(self, client: AsyncClient) -> None:
        response = await client.get("/dungeons")

        forest = response.json()[0]
        assert forest["name"] == "Forest of Beginnings"
        assert len(forest["enemy_pool"]) == 4
        assert [lvl["id"] for lvl in forest["levels"]] == ["area1_1", "area1_2", "area1_3"]
        assert [lvl["difficulty_multiplier"] for lvl in forest["levels"]] == [1.0, 1.5, 2.0]

    async def test_enemy_cards_unscaled(self, client: AsyncClient) -> None:
        response = await client.get("/dungeons")

        goblin = response.json()[0]["enemy_pool"][0]
        assert goblin["name"] == "Goblin"
        assert goblin["stats"] == {"attack": 2, "health": 3}
        assert goblin["element"] == "Nature"
