"""
Score endpoints - Categories, sheet extraction and raw grid extraction
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Request
import logging

from spotlight.core.extractor import extract
from spotlight.exceptions import SheetsConfigError, SheetsError
from spotlight.models import ExtractRequest
from spotlight.services.scores import load_candidates, scores_summary


logger = logging.getLogger(__name__)

router = APIRouter(tags=["scores"])


def sheets_http_error(e: SheetsError) -> HTTPException:
    """Map a fetch failure to an HTTP error"""
    if isinstance(e, SheetsConfigError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


@router.post("/extract")
async def extract_grid(request: ExtractRequest):
    """
    Extract candidates from a raw grid

    Request:
        {"rows": [["Swimwear"], ["", "CANDIDATE 1"], ["JUDGE 1", "80"]]}
    """
    candidates = extract(request.rows)
    return scores_summary(candidates)


@router.get("/categories")
async def list_categories(request: Request):
    """Sheet names available in the spreadsheet"""
    try:
        names = await request.app.state.sheets.list_sheet_names()
    except SheetsError as e:
        raise sheets_http_error(e) from e
    return {"categories": names}


@router.get("/scores")
async def get_scores(request: Request, category: str, block: Optional[str] = None):
    """
    Fetch and extract one category sheet

    Args:
        category: Sheet name
        block: Optional block category filter
    """
    try:
        candidates = await load_candidates(request.app.state.sheets, category)
    except SheetsError as e:
        raise sheets_http_error(e) from e
    return {"category": category, **scores_summary(candidates, block)}
