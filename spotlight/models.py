"""
Data models for the presentation server
"""
from pydantic import BaseModel, computed_field
from typing import Any, List, Optional


DEFAULT_CATEGORY = "General"


class CandidateRecord(BaseModel):
    """One contestant extracted from a score sheet block"""
    name: str
    category: str = DEFAULT_CATEGORY
    scores: List[float] = []  # judge scores, in judge-row order

    @computed_field
    @property
    def aggregate(self) -> float:
        """Mean of the collected scores (0 when no judge scored)"""
        if not self.scores:
            return 0.0
        return sum(self.scores) / len(self.scores)


class PresentationState(BaseModel):
    """What every display is currently showing"""
    index: int = 0
    candidates: List[CandidateRecord] = []
    idle: bool = False
    category: str = ""  # "" = no category selected yet


class ExtractRequest(BaseModel):
    """Raw spreadsheet grid posted to /extract"""
    rows: List[List[Any]] = []


class SetIndexRequest(BaseModel):
    index: int
    candidates: Optional[List[CandidateRecord]] = None


class SetIdleRequest(BaseModel):
    idle: bool


class SetCategoryRequest(BaseModel):
    category: str
    candidates: Optional[List[CandidateRecord]] = None


class LoadCategoryRequest(BaseModel):
    """Fetch a sheet and make it the active category"""
    category: str


class RefreshRequest(BaseModel):
    index: Optional[int] = None
