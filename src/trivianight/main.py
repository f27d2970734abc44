"""FastAPI application factory."""

import json
import logging
import pathlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from trivianight import __version__
from trivianight.api.games import router as games_router
from trivianight.api.hosts import router as hosts_router
from trivianight.api.seasons import router as seasons_router
from trivianight.api.standings import router as standings_router
from trivianight.api.teams import router as teams_router
from trivianight.config import Settings
from trivianight.store import LeagueStore

logger = logging.getLogger(__name__)


def load_snapshot_file(store: LeagueStore, path: str) -> bool:
    """Load a JSON snapshot into ``store``. Returns False when the file is missing."""
    snapshot_file = pathlib.Path(path)
    if not snapshot_file.exists():
        logger.warning("snapshot_missing path=%s", path)
        return False
    store.load_snapshot(json.loads(snapshot_file.read_text(encoding="utf-8")))
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: seed the store from the configured snapshot, if any."""
    settings: Settings = app.state.settings
    if settings.trivianight_snapshot_path:
        load_snapshot_file(app.state.store, settings.trivianight_snapshot_path)
    logger.info("trivianight_started env=%s", settings.trivianight_env)

    yield

    logger.info("trivianight_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the trivia night FastAPI application."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.trivianight_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Trivia Night",
        version=__version__,
        description="Live trivia scoring with per-game ranks and season royalty standings",
        docs_url="/docs" if settings.trivianight_docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = LeagueStore()

    app.include_router(games_router)
    app.include_router(teams_router)
    app.include_router(hosts_router)
    app.include_router(seasons_router)
    app.include_router(standings_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.trivianight_env}

    return app


app = create_app()
