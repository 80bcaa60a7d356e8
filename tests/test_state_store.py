"""
Tests for the presentation state store
"""
from spotlight.models import CandidateRecord, PresentationState
from spotlight.state import PresentationStore, current_candidate


def _candidates(*names):
    return [CandidateRecord(name=n, scores=[50]) for n in names]


def test_initial_state():
    """Fresh store: index 0, no candidates, not idle, no category"""
    state = PresentationStore().snapshot()
    assert state == PresentationState(index=0, candidates=[], idle=False, category="")


def test_set_index_without_candidates_keeps_list():
    store = PresentationStore()
    store.set_index(0, _candidates("A", "B"))
    state = store.set_index(1)
    assert state.index == 1
    assert [c.name for c in state.candidates] == ["A", "B"]


def test_set_index_replaces_list_wholesale():
    """A new list replaces the old one, no merging"""
    store = PresentationStore()
    store.set_index(0, _candidates("A", "B", "C"))
    state = store.set_index(0, _candidates("X"))
    assert [c.name for c in state.candidates] == ["X"]


def test_set_index_not_bounded():
    """Out-of-range indices are stored as given"""
    store = PresentationStore()
    assert store.set_index(42).index == 42
    assert store.set_index(-3).index == -3


def test_set_idle_touches_only_idle():
    store = PresentationStore()
    store.set_category("Swimwear", _candidates("A"))
    store.set_index(3)
    state = store.set_idle(True)
    assert state.idle is True
    assert state.index == 3
    assert state.category == "Swimwear"
    assert store.set_idle(0).idle is False


def test_set_category_resets_index():
    store = PresentationStore()
    store.set_index(5, _candidates("A"))
    store.set_idle(True)
    state = store.set_category("Talent")
    assert state.category == "Talent"
    assert state.index == 0
    assert state.idle is True
    assert [c.name for c in state.candidates] == ["A"]


def test_set_category_with_empty_list_replaces():
    """An empty list is still a provided list"""
    store = PresentationStore()
    store.set_index(0, _candidates("A"))
    assert store.set_category("Talent", []).candidates == []


def test_snapshot_is_a_copy():
    """Mutating a snapshot does not touch the store"""
    store = PresentationStore()
    store.set_index(0, _candidates("A"))
    snap = store.snapshot()
    snap.index = 9
    snap.candidates.clear()
    assert store.snapshot().index == 0
    assert len(store.snapshot().candidates) == 1


def test_current_candidate_clamps():
    """Index past the end shows the first candidate"""
    state = PresentationState(index=1, candidates=_candidates("A", "B"))
    assert current_candidate(state).name == "B"
    state.index = 7
    assert current_candidate(state).name == "A"
    state.index = -1
    assert current_candidate(state).name == "A"


def test_current_candidate_empty():
    assert current_candidate(PresentationState(index=3)) is None
