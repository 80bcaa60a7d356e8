"""
FastAPI main application
Spotlight - Live scoreboard presentation server

Modular architecture with separated API routers in spotlight/api/:
- health.py: Health check and system status
- sync.py: WebSocket sync hub and state snapshots
- scores.py: Categories, sheet extraction, raw grid extraction
- admin.py: HTTP controls (index, idle, category, sheet loading)

Routers reach the store, hub and sheets client through app.state.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from typing import Optional
import logging
import os

from spotlight.config import APP_VERSION, Settings, load_config
from spotlight.core.hub import SyncHub
from spotlight.services.sheets import SheetsClient
from spotlight.state import PresentationStore

# Import all API routers
from spotlight.api import health, sync, scores, admin


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, sheets: Optional[SheetsClient] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Server settings (default: load_config())
        sheets: Sheets client (default: one built from settings.sheets)
    """
    if settings is None:
        settings = load_config()
    logging.getLogger().setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        if settings.sheets.is_configured:
            logger.info(f"✅ Server started, spreadsheet {settings.sheets.spreadsheet_id}")
        else:
            logger.warning("⚠️ Server started without spreadsheet configuration, sheet endpoints disabled")

        yield

        # Shutdown
        await app.state.hub.close()
        await app.state.sheets.aclose()
        logger.info("🛑 Server shutting down")

    app = FastAPI(
        title="Spotlight - Scoreboard Server",
        description="Live presentation state sync and score sheet extraction",
        version=APP_VERSION,
        lifespan=lifespan
    )

    # One store per app instance, shared by every connection
    app.state.settings = settings
    app.state.hub = SyncHub(PresentationStore())
    app.state.sheets = sheets or SheetsClient(settings.sheets)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ==================== INCLUDE ROUTERS ====================

    # Health check (GET /)
    app.include_router(health.router)

    # Sync (WS /ws, GET /state, GET /state/current)
    app.include_router(sync.router)

    # Scores (POST /extract, GET /categories, GET /scores)
    app.include_router(scores.router)

    # Admin endpoints (POST /admin/set-index, etc.)
    app.include_router(admin.router)

    # ==================== STATIC FILES ====================

    # Built display/admin front-end, if present
    if os.path.exists("static"):
        app.mount("/static", StaticFiles(directory="static"), name="static")

    return app


# ==================== RUN SERVER ====================

def run() -> None:
    import uvicorn
    settings = load_config()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
