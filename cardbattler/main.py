import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cardbattler.api import (
    battle_router,
    cards_router,
    deck_router,
    dungeons_router,
    health_router,
)
from cardbattler.config import settings
from cardbattler.db.database import init_db
from cardbattler.models.failure import ApiResponse, KnownError
from cardbattler.services.battle_registry import get_battle_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield
    get_battle_registry().clear()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("cardbattler"),
    lifespan=lifespan,
)

app.include_router(battle_router)
app.include_router(cards_router)
app.include_router(deck_router)
app.include_router(dungeons_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render explainable failures as the failure envelope."""
    logger.info("known_error", extra={"kind": exc.kind.value, "detail": exc.detail})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Storage failures are not explainable to the player."""
    logger.error("database_error", exc_info=exc)
    return JSONResponse(
        status_code=503,
        content=ApiResponse.unknown_failure(detail="storage unavailable").model_dump(mode="json"),
    )
