"""
Health check and system status endpoints
"""
from fastapi import APIRouter, Request

from spotlight.config import APP_VERSION


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Health check endpoint"""
    return {
        "status": "ok",
        "message": "Spotlight - Live Scoreboard Presentation Server",
        "version": APP_VERSION,
        "connected_clients": request.app.state.hub.connection_count,
        "sheets_configured": request.app.state.settings.sheets.is_configured
    }
