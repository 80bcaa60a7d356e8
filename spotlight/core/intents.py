"""
Intent decoding for the sync protocol

Client message format:
    {"event": "SET_INDEX", "payload": 3}
    {"event": "SET_INDEX", "payload": {"index": 3, "candidates": [...]}}
    {"event": "SET_IDLE", "payload": true}
    {"event": "SET_CATEGORY", "payload": {"category": "Swimwear", "candidates": [...]}}

Anything that does not fit decodes to None and is dropped by the hub.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from spotlight.models import CandidateRecord


logger = logging.getLogger(__name__)

SET_INDEX = "SET_INDEX"
SET_IDLE = "SET_IDLE"
SET_CATEGORY = "SET_CATEGORY"
STATE_UPDATE = "STATE_UPDATE"

_candidate_list = TypeAdapter(List[CandidateRecord])


@dataclass(frozen=True)
class IndexOnly:
    index: int


@dataclass(frozen=True)
class IndexWithCandidates:
    index: int
    candidates: List[CandidateRecord]


@dataclass(frozen=True)
class SetIdle:
    idle: bool


@dataclass(frozen=True)
class SetCategory:
    category: str
    candidates: Optional[List[CandidateRecord]] = None


Intent = Union[IndexOnly, IndexWithCandidates, SetIdle, SetCategory]


def _is_int(value: Any) -> bool:
    # bool is an int subclass, but True is not an index
    return isinstance(value, int) and not isinstance(value, bool)


def _truthy(value: Any) -> bool:
    """JavaScript truthiness: only false, 0, NaN, "" and null are false"""
    if value is None or isinstance(value, (bool, str)):
        return bool(value)
    if isinstance(value, (int, float)):
        return value == value and value != 0  # NaN != NaN
    return True


def _decode_candidates(raw: Any) -> Optional[List[CandidateRecord]]:
    """Validate a candidate list; raises ValueError when malformed"""
    if raw is None:
        return None
    try:
        return _candidate_list.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"invalid candidates: {e.error_count()} errors") from e


def decode_set_index(payload: Any) -> Optional[Intent]:
    if _is_int(payload):
        return IndexOnly(payload)
    if not isinstance(payload, dict) or not _is_int(payload.get("index")):
        return None
    try:
        candidates = _decode_candidates(payload.get("candidates"))
    except ValueError:
        return None
    if candidates is None:
        return IndexOnly(payload["index"])
    return IndexWithCandidates(payload["index"], candidates)


def decode_set_idle(payload: Any) -> Optional[Intent]:
    return SetIdle(_truthy(payload))


def decode_set_category(payload: Any) -> Optional[Intent]:
    if not isinstance(payload, dict) or not isinstance(payload.get("category"), str):
        return None
    try:
        candidates = _decode_candidates(payload.get("candidates"))
    except ValueError:
        return None
    return SetCategory(payload["category"], candidates)


_DECODERS = {
    SET_INDEX: decode_set_index,
    SET_IDLE: decode_set_idle,
    SET_CATEGORY: decode_set_category,
}


def decode_intent(event: Any, payload: Any) -> Optional[Intent]:
    """
    Decode one event/payload pair

    Returns:
        The intent, or None if the event is unknown or the payload malformed
    """
    decoder = _DECODERS.get(event) if isinstance(event, str) else None
    if decoder is None:
        return None
    return decoder(payload)


def decode_message(raw: Union[str, bytes]) -> Optional[Intent]:
    """Decode a raw websocket text frame"""
    try:
        message = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(message, dict):
        return None
    return decode_intent(message.get("event"), message.get("payload"))
