"""Tests for the liveness and readiness probes."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cardbattler.db.database import get_session
from cardbattler.main import app
from cardbattler.models.db import Base
from cardbattler.services.battle_registry import get_battle_registry


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def client(async_engine):
    """Provide an async test client backed by the in-memory store."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestLiveness:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestReadiness:
    async def test_ready_reports_store_and_provider(self, client: AsyncClient) -> None:
        with patch("cardbattler.api.health.settings") as mock_settings:
            mock_settings.card_text_provider = "anthropic"
            mock_settings.anthropic_api_key = "test-key"

            response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "database": "connected",
            "card_text_provider": "anthropic",
            "provider_configured": True,
            "active_battles": 0,
        }

    async def test_missing_anthropic_key_does_not_block(self, client: AsyncClient) -> None:
        """Without a key only the fallback card is generated, but play goes on."""
        with patch("cardbattler.api.health.settings") as mock_settings:
            mock_settings.card_text_provider = "anthropic"
            mock_settings.anthropic_api_key = None

            response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json()["provider_configured"] is False

    async def test_ollama_provider(self, client: AsyncClient) -> None:
        with patch("cardbattler.api.health.settings") as mock_settings:
            mock_settings.card_text_provider = "ollama"
            mock_settings.ollama_base_url = "http://localhost:11434"

            data = (await client.get("/ready")).json()

        assert data["card_text_provider"] == "ollama"
        assert data["provider_configured"] is True

    async def test_counts_battle_sessions(self, client: AsyncClient) -> None:
        registry = get_battle_registry()
        registry.get("user-1")
        registry.get("user-2")

        data = (await client.get("/ready")).json()

        assert data["active_battles"] == 2

    async def test_store_unreachable(self) -> None:
        async def override_get_session_broken():
            broken = AsyncMock()
            broken.execute.side_effect = OperationalError(
                "SELECT 1", {}, Exception("unable to open database file")
            )
            yield broken

        app.dependency_overrides[get_session] = override_get_session_broken
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                response = await client.get("/ready")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["database"] == "disconnected"
