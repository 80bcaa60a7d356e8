"""
Admin endpoints for driving the display over plain HTTP
Every change goes through the hub, so all connected displays follow
"""
from fastapi import APIRouter, HTTPException, Request
import logging

from spotlight.api.scores import sheets_http_error
from spotlight.core.intents import IndexOnly, IndexWithCandidates, SetCategory, SetIdle
from spotlight.exceptions import SheetsError
from spotlight.models import (
    LoadCategoryRequest, RefreshRequest, SetCategoryRequest, SetIdleRequest, SetIndexRequest
)
from spotlight.services.scores import load_candidates


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/set-index")
async def set_index(body: SetIndexRequest, request: Request):
    """
    Admin: Show another candidate

    Request:
        {"index": 2, "candidates": [...]}  # candidates optional
    """
    if body.candidates is None:
        intent = IndexOnly(body.index)
    else:
        intent = IndexWithCandidates(body.index, body.candidates)
    state = await request.app.state.hub.dispatch(intent)
    return state.model_dump()


@router.post("/set-idle")
async def set_idle(body: SetIdleRequest, request: Request):
    """Admin: Toggle the idle screen"""
    state = await request.app.state.hub.dispatch(SetIdle(body.idle))
    return state.model_dump()


@router.post("/set-category")
async def set_category(body: SetCategoryRequest, request: Request):
    """Admin: Switch category (index resets to 0)"""
    state = await request.app.state.hub.dispatch(SetCategory(body.category, body.candidates))
    return state.model_dump()


@router.post("/load-category")
async def load_category(body: LoadCategoryRequest, request: Request):
    """
    Admin: Fetch a category sheet and make it active

    Request:
        {"category": "Swimwear"}
    """
    if not body.category:
        raise HTTPException(status_code=400, detail="category required")
    try:
        candidates = await load_candidates(request.app.state.sheets, body.category)
    except SheetsError as e:
        raise sheets_http_error(e) from e

    state = await request.app.state.hub.dispatch(SetCategory(body.category, candidates))
    logger.info(f"✅ Category '{body.category}' loaded with {len(candidates)} candidates")
    return state.model_dump()


@router.post("/refresh")
async def refresh(body: RefreshRequest, request: Request):
    """
    Admin: Re-fetch the active category, optionally jumping to an index

    Request:
        {"index": 3}  # optional, default keeps the current index
    """
    hub = request.app.state.hub
    current = hub.store.snapshot()
    if not current.category:
        raise HTTPException(status_code=400, detail="No active category. Load a category first.")
    try:
        candidates = await load_candidates(request.app.state.sheets, current.category)
    except SheetsError as e:
        raise sheets_http_error(e) from e

    index = current.index if body.index is None else body.index
    state = await hub.dispatch(IndexWithCandidates(index, candidates))
    return state.model_dump()
