"""
Score service - Fetch a category sheet and turn it into candidates
"""
import logging
from typing import Dict, List, Optional

from spotlight.core.extractor import extract, block_categories, filter_by_category
from spotlight.models import CandidateRecord
from spotlight.services.sheets import SheetsClient


logger = logging.getLogger(__name__)


async def load_candidates(sheets: SheetsClient, category: str) -> List[CandidateRecord]:
    """
    Fetch one category sheet and extract its candidates

    Args:
        sheets: Sheets client
        category: Sheet name

    Returns:
        Extracted candidates (empty for an empty sheet)
    """
    grid = await sheets.fetch_grid(category)
    candidates = extract(grid)
    logger.info(f"🏆 Sheet '{category}': {len(candidates)} candidates")
    return candidates


def scores_summary(candidates: List[CandidateRecord], block: Optional[str] = None) -> Dict:
    """
    Format extracted candidates for the score endpoints

    Args:
        candidates: Extracted candidates
        block: Optional block category filter ("All" keeps everything)
    """
    selected = filter_by_category(candidates, block)
    return {
        "candidates": [c.model_dump() for c in selected],
        "categories": block_categories(candidates),
        "total_candidates": len(selected),
    }
