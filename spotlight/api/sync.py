"""
Presentation sync endpoints
WebSocket hub for displays and controllers, plus read-only snapshots
"""
from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect
import logging

from spotlight.state import current_candidate


logger = logging.getLogger(__name__)

router = APIRouter(tags=["sync"])


@router.websocket("/ws")
async def sync_socket(websocket: WebSocket):
    """
    Sync channel

    On connect the client receives:
        {"event": "STATE_UPDATE", "data": {"index", "candidates", "idle", "category"}}

    Client sends intents:
        {"event": "SET_INDEX" | "SET_IDLE" | "SET_CATEGORY", "payload": ...}

    Every accepted intent is answered with a STATE_UPDATE to all clients.
    """
    hub = websocket.app.state.hub
    client_id = await hub.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            await hub.handle_message(client_id, raw)
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"❌ Sync connection {client_id} failed: {type(e).__name__}: {e}", exc_info=True)
    finally:
        hub.disconnect(client_id)


@router.get("/state")
async def get_state(request: Request):
    """Current presentation snapshot"""
    return request.app.state.hub.store.snapshot().model_dump()


@router.get("/state/current")
async def get_current(request: Request):
    """
    What a display should render right now

    candidate is null when idle or when there are no candidates;
    an out-of-range index falls back to the first candidate.
    """
    state = request.app.state.hub.store.snapshot()
    candidate = None if state.idle else current_candidate(state)
    return {
        "index": state.index,
        "idle": state.idle,
        "category": state.category,
        "total_candidates": len(state.candidates),
        "candidate": candidate.model_dump() if candidate else None
    }
