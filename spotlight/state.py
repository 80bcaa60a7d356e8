"""
Presentation state store
Owns the single PresentationState shared by every connected display
"""
from typing import List, Optional

from spotlight.models import CandidateRecord, PresentationState


class PresentationStore:
    """
    Holds the current presentation state

    Only three transitions mutate it. Each one replaces the touched fields
    and returns a snapshot of the full state. Nothing here validates index
    against the candidate list; a candidate list is always replaced as a
    whole, never merged.
    """

    def __init__(self):
        self._state = PresentationState()

    def snapshot(self) -> PresentationState:
        """Return a copy of the current state"""
        return self._state.model_copy(deep=True)

    def set_index(
        self,
        new_index: int,
        candidates: Optional[List[CandidateRecord]] = None
    ) -> PresentationState:
        self._state.index = new_index
        if candidates is not None:
            self._state.candidates = list(candidates)
        return self.snapshot()

    def set_idle(self, flag: bool) -> PresentationState:
        self._state.idle = bool(flag)
        return self.snapshot()

    def set_category(
        self,
        category: str,
        candidates: Optional[List[CandidateRecord]] = None
    ) -> PresentationState:
        """Switch category; the index always goes back to the first candidate"""
        self._state.category = category
        self._state.index = 0
        if candidates is not None:
            self._state.candidates = list(candidates)
        return self.snapshot()


def current_candidate(state: PresentationState) -> Optional[CandidateRecord]:
    """
    Candidate a display should show for this state

    Out-of-range indices fall back to the first candidate.
    Returns None when there is nothing to show.
    """
    if not state.candidates:
        return None
    if state.index < 0 or state.index >= len(state.candidates):
        return state.candidates[0]
    return state.candidates[state.index]
