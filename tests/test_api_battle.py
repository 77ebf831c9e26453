"""Tests for battle endpoints."""

import pytest
from conftest import make_card
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardbattler.db import save_card, save_deck
from cardbattler.db.database import get_session
from cardbattler.main import app
from cardbattler.models.card import Element
from cardbattler.models.db import Base
from cardbattler.services.battle_registry import get_battle_registry


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def saved_deck(async_engine):
    """Give user-1 a saved five-card deck of sturdy cards."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        for i in range(5):
            await save_card(
                session, "user-1", make_card(f"p{i}", attack=9, health=30, element=Element.LIGHT)
            )
        await save_deck(session, "user-1", [f"p{i}" for i in range(5)])
        await session.commit()


async def start(client: AsyncClient) -> dict:
    response = await client.post(
        "/battle/user-1/start", json={"area_id": "area1", "level_id": "area1_1"}
    )
    assert response.status_code == 200
    return response.json()


class TestBattleState:
    async def test_fresh_session(self, client: AsyncClient) -> None:
        response = await client.get("/battle/user-1")

        assert response.status_code == 200
        data = response.json()
        assert data["phase"] == "not_started"
        assert data["turn"] == 1
        assert data["player_deck"] == []
        assert data["log"] == []


class TestStartBattle:
    async def test_start(self, client: AsyncClient, saved_deck) -> None:
        data = await start(client)

        assert data["accepted"] is True
        assert data["phase"] == "player"
        assert data["area_id"] == "area1"
        assert data["level_id"] == "area1_1"
        assert [c["id"] for c in data["player_deck"]] == [f"p{i}" for i in range(5)]
        assert len(data["enemy_deck"]) == 5
        assert data["log"][0]["message"].startswith("Battle start!")

    async def test_start_without_deck(self, client: AsyncClient) -> None:
        data = await start(client)

        assert data["accepted"] is False
        assert data["phase"] == "not_started"

    async def test_start_unknown_level(self, client: AsyncClient, saved_deck) -> None:
        response = await client.post(
            "/battle/user-1/start", json={"area_id": "area1", "level_id": "area3_1"}
        )

        assert response.json()["accepted"] is False

    async def test_start_twice(self, client: AsyncClient, saved_deck) -> None:
        first = await start(client)
        second = await start(client)

        assert second["accepted"] is False
        assert second["enemy_deck"] == first["enemy_deck"]


class TestBattleCommands:
    async def test_select_and_attack(self, client: AsyncClient, saved_deck) -> None:
        state = await start(client)
        target = state["enemy_deck"][0]["id"]

        selected = (
            await client.post("/battle/user-1/select-attacker", json={"card_id": "p0"})
        ).json()
        assert selected["accepted"] is True
        assert selected["selected_attacker_id"] == "p0"

        attacked = (
            await client.post("/battle/user-1/select-defender", json={"card_id": target})
        ).json()
        assert attacked["accepted"] is True
        assert attacked["selected_attacker_id"] is None
        enemy = next(c for c in attacked["enemy_deck"] if c["id"] == target)
        assert enemy["is_dead"] is True
        # The enemy phase ran and the player is up again
        assert attacked["turn"] == 2
        assert attacked["phase"] == "player"

    async def test_rejected_command_changes_nothing(
        self, client: AsyncClient, saved_deck
    ) -> None:
        state = await start(client)

        response = await client.post("/battle/user-1/select-defender", json={"card_id": "x"})

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is False
        data["accepted"] = True
        assert data == state

    async def test_end_phase(self, client: AsyncClient, saved_deck) -> None:
        await start(client)

        data = (await client.post("/battle/user-1/end-phase")).json()

        assert data["accepted"] is True
        assert data["turn"] == 2
        assert data["log"][-1]["message"] == "Turn 2: your turn."

    async def test_play_to_victory(self, client: AsyncClient, saved_deck) -> None:
        state = await start(client)

        for _ in range(20):
            if state["phase"] == "finished":
                break
            attacker = next(c for c in state["player_deck"] if c["can_attack"])
            target = next(c for c in state["enemy_deck"] if not c["is_dead"])
            await client.post("/battle/user-1/select-attacker", json={"card_id": attacker["id"]})
            state = (
                await client.post(
                    "/battle/user-1/select-defender", json={"card_id": target["id"]}
                )
            ).json()

        assert state["phase"] == "finished"
        assert state["outcome"] == "player"
        assert state["log"][-1]["type"] == "victory"

    async def test_reset(self, client: AsyncClient, saved_deck) -> None:
        await start(client)

        data = (await client.post("/battle/user-1/reset")).json()

        assert data["accepted"] is True
        assert data["phase"] == "not_started"
        assert data["enemy_deck"] == []
        assert (await start(client))["accepted"] is True

    async def test_players_do_not_share_sessions(self, client: AsyncClient, saved_deck) -> None:
        await start(client)

        other = (await client.get("/battle/user-2")).json()

        assert other["phase"] == "not_started"


class TestDiscardBattle:
    async def test_discard_forgets_session(self, client: AsyncClient, saved_deck) -> None:
        await start(client)

        response = await client.delete("/battle/user-1")

        assert response.status_code == 204
        assert len(get_battle_registry()) == 0
        state = (await client.get("/battle/user-1")).json()
        assert state["phase"] == "not_started"
        assert state["log"] == []

    async def test_discard_without_session(self, client: AsyncClient) -> None:
        response = await client.delete("/battle/user-9")
        assert response.status_code == 204
