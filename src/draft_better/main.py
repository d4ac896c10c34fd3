"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from draft_better.config import settings
from draft_better.api.routes.lcu import router as lcu_router
from draft_better.api.websockets.champ_select_ws import champ_select_websocket
from draft_better.services.champ_select_tracker import ChampSelectTracker
from draft_better.services.connection_supervisor import ConnectionSupervisor
from draft_better.services.lcu_client import LcuClient, load_credentials
from draft_better.services.session_feed import LcuSessionFeed
from draft_better.utils.champion_catalog import ChampionCatalog

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


def get_champion_data_path() -> Path | None:
    """Get the champion data path from settings, if configured."""
    if not settings.champion_data_path:
        return None
    return Path(settings.champion_data_path)


def build_supervisor(tracker: ChampSelectTracker) -> ConnectionSupervisor:
    """Wire the client, feed and tracker into a supervisor."""
    client = LcuClient(timeout=settings.request_timeout_seconds)
    return ConnectionSupervisor(
        client=client,
        feed=LcuSessionFeed(),
        tracker=tracker,
        credentials_loader=lambda: load_credentials(settings.lockfile_path),
        reconnect_interval=settings.reconnect_interval_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: build the interpreter and start watching for the client
    if not hasattr(app.state, "tracker"):
        app.state.tracker = ChampSelectTracker(ChampionCatalog(get_champion_data_path()))
    if not hasattr(app.state, "supervisor"):
        app.state.supervisor = build_supervisor(app.state.tracker)
    await app.state.supervisor.start()
    yield
    # Shutdown: stop retrying and close the client connection
    await app.state.supervisor.stop()


app = FastAPI(
    title="Draft Better",
    description="LoL Draft Assistant - live champion select interpreter",
    version="0.1.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "draft-better"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Draft Better API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(lcu_router)


# WebSocket endpoint for live champ select updates
@app.websocket("/ws/champ-select")
async def websocket_champ_select(websocket: WebSocket):
    """WebSocket endpoint streaming champ select views and client status."""
    await champ_select_websocket(
        websocket,
        app.state.tracker,
        app.state.supervisor,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
