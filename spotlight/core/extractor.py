"""
Score Extractor - Rebuild candidate records from a score sheet grid

Sheet layout (human edited, no fixed schema):

    Swimwear
    CANDIDATE 1 | CANDIDATE 2
    JUDGE 1     | 80 | 90
    JUDGE 2     | 85 | 95

Rules:
  - Header row: any cell containing "CANDIDATE" (trimmed, upper-cased).
    Every such cell opens one candidate slot at its column. When the
    header has no label column (its first cell is already a candidate),
    judge rows still carry their label first, so slots read one column
    to the right.
  - Judge row: first cell starts with "JUDGE". Each open slot reads the
    cell in its own column; only finite numbers are collected.
  - A new header closes the previous block. The end of the sheet closes
    the last one.
  - Block category: walking up from the header, the first non-header row
    whose first cell is non-empty and does not start with "JUDGE".
    Default "General".
  - Aggregate = mean of collected scores (0 when none).
"""
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from spotlight.models import CandidateRecord, DEFAULT_CATEGORY


logger = logging.getLogger(__name__)

HEADER_TOKEN = "CANDIDATE"
JUDGE_TOKEN = "JUDGE"

Row = Sequence[Any]


class RowKind(Enum):
    HEADER = "header"
    JUDGE = "judge"
    OTHER = "other"


class ParserState(Enum):
    SCANNING = "scanning"      # no block open yet
    BLOCK_OPEN = "block_open"  # a header has been seen


@dataclass
class _Slot:
    column: int
    name: str
    scores: List[float] = field(default_factory=list)


def cell_text(row: Row, column: int) -> str:
    """Cell content as a string; missing or None cells are empty"""
    if column >= len(row) or row[column] is None:
        return ""
    return str(row[column])


def normalize(text: str) -> str:
    return text.strip().upper()


def parse_score(text: str) -> Optional[float]:
    """
    Parse a score cell

    Returns:
        The value if the trimmed text is a finite number, else None
    """
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def classify_row(row: Row) -> RowKind:
    """Decide whether a row opens a block, carries judge scores, or neither"""
    if any(HEADER_TOKEN in normalize(cell_text(row, col)) for col in range(len(row))):
        return RowKind.HEADER
    if normalize(cell_text(row, 0)).startswith(JUDGE_TOKEN):
        return RowKind.JUDGE
    return RowKind.OTHER


def resolve_category(rows: Sequence[Row], header_index: int) -> str:
    """
    Find the category label for the block whose header is at header_index

    Scans upward, skipping blank first cells, judge rows and earlier
    headers, so an unlabelled block inherits the label of the block above.
    """
    for i in range(header_index - 1, -1, -1):
        if classify_row(rows[i]) is RowKind.HEADER:
            continue
        text = cell_text(rows[i], 0).strip()
        if text and not text.upper().startswith(JUDGE_TOKEN):
            return text
    return DEFAULT_CATEGORY


class ScoreSheetParser:
    """
    Single forward pass over the rows

    SCANNING   --header--> BLOCK_OPEN
    BLOCK_OPEN --header--> BLOCK_OPEN (previous block finalized)
    BLOCK_OPEN --judge-->  BLOCK_OPEN (scores collected)
    anything else leaves the state unchanged
    """

    def __init__(self, rows: Sequence[Row]):
        self.rows = rows
        self.state = ParserState.SCANNING
        self.slots: List[_Slot] = []
        self.block_category = DEFAULT_CATEGORY
        self.records: List[CandidateRecord] = []

    def run(self) -> List[CandidateRecord]:
        for i, row in enumerate(self.rows):
            kind = classify_row(row)
            if kind is RowKind.HEADER:
                self._open_block(i, row)
            elif kind is RowKind.JUDGE and self.state is ParserState.BLOCK_OPEN:
                self._collect_scores(row)
        self._finalize_block()
        return self.records

    def _open_block(self, index: int, row: Row) -> None:
        self._finalize_block()
        self.block_category = resolve_category(self.rows, index)
        shift = 1 if HEADER_TOKEN in normalize(cell_text(row, 0)) else 0
        for col in range(len(row)):
            text = cell_text(row, col)
            if HEADER_TOKEN in normalize(text):
                self.slots.append(_Slot(column=col + shift, name=text.strip()))
        self.state = ParserState.BLOCK_OPEN

    def _collect_scores(self, row: Row) -> None:
        for slot in self.slots:
            value = parse_score(cell_text(row, slot.column))
            if value is not None:
                slot.scores.append(value)

    def _finalize_block(self) -> None:
        for slot in self.slots:
            self.records.append(CandidateRecord(
                name=slot.name,
                category=self.block_category,
                scores=slot.scores
            ))
        self.slots = []


def extract(rows: Sequence[Row]) -> List[CandidateRecord]:
    """
    Extract candidate records from a spreadsheet grid

    Args:
        rows: Row-major grid of cells (sparse rows allowed)

    Returns:
        Candidates in block order, then column order within a block

    Example:
        >>> [c.aggregate for c in extract([["Swimwear"], ["CANDIDATE 1"], ["JUDGE 1", "80"]])]
        [80.0]
    """
    records = ScoreSheetParser(rows).run()
    logger.debug(f"Extracted {len(records)} candidates from {len(rows)} rows")
    return records


def block_categories(candidates: List[CandidateRecord]) -> List[str]:
    """Distinct block categories, in the order they first appear"""
    seen: Dict[str, None] = {}
    for candidate in candidates:
        seen.setdefault(candidate.category, None)
    return list(seen)


def filter_by_category(candidates: List[CandidateRecord], category: Optional[str]) -> List[CandidateRecord]:
    """Keep only one block category ("All" or empty keeps everything)"""
    if not category or category == "All":
        return list(candidates)
    return [c for c in candidates if c.category == category]
