# ABOUTME: Anchor location: finds the text span(s) in a document to mark for a candidate.
# ABOUTME: Checks block eligibility by place and date, then claims the first untouched occurrence.

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from artref.annotation.document import SpanHandle, TextBlock
from artref.extraction.types import Candidate, DateRange, canonical_location

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r"(?<!\d)\d{3,4}(?!\d)")
_CENTURY_WORD_RE = re.compile(r"\bcentur(?:y|ies)\b", re.IGNORECASE)

# Fallback needles shorter than this are too ambiguous to mark.
_MIN_FALLBACK_LENGTH = 3


@dataclass(frozen=True)
class Anchor:
    """A located span bound to a candidate's canonical key."""

    candidate_key: str
    block_index: int
    offset: int
    length: int
    text: str
    handle: SpanHandle

    @property
    def marker_id(self) -> str:
        return self.handle.marker_id


def element_has_date_range(text: str, date_range: DateRange | None) -> bool:
    """Check whether block text plausibly refers to the given date range.

    True if any 3-4 digit number falls inside the range, or if the text
    mentions a century at all (century ranges are wide enough to accept).
    """
    if date_range is None:
        return False
    numbers = (int(n) for n in _NUMBER_RE.findall(text))
    if any(date_range.contains(n) for n in numbers):
        return True
    return bool(_CENTURY_WORD_RE.search(text))


def _needles(location: str) -> list[str]:
    """Full location, then its first comma segment, then its first word."""
    full = (location or "").strip()
    first_segment = full.split(",")[0].strip()
    words = full.split()
    first_word = words[0] if words else ""

    needles = [full] if full else []
    for fallback in (first_segment, first_word):
        if len(fallback) >= _MIN_FALLBACK_LENGTH and fallback not in needles:
            needles.append(fallback)
    return needles


def _extend_to_word_end(text: str, start: int, length: int) -> int:
    """Grow a match rightward while the next character continues the word."""
    end = start + length
    while end < len(text) and (text[end].isalnum() or text[end] == "_"):
        end += 1
    return end - start


class AnchorLocator:
    """Locate anchors for candidates within a document's blocks.

    Keeps a per-block registry of claimed occurrences keyed by
    (canonical needle, index), so identical spans are never marked twice.
    One locator serves one scan; call `reset` before re-scanning.
    """

    def __init__(self) -> None:
        self._claimed: dict[int, set[tuple[str, int]]] = {}

    def reset(self) -> None:
        self._claimed.clear()

    def qualifies(self, block: TextBlock, candidate: Candidate) -> bool:
        location_key = candidate.location_key
        if not location_key or location_key not in canonical_location(block.text):
            return False
        if candidate.date_range is None:
            return True
        return element_has_date_range(block.text, candidate.date_range)

    def locate(self, candidate: Candidate, blocks: Sequence[TextBlock]) -> list[Anchor]:
        """Mark the first unclaimed occurrence of the candidate in each qualifying block."""
        anchors: list[Anchor] = []
        for block in blocks:
            if not self.qualifies(block, candidate):
                continue
            anchor = self._mark_in_block(candidate, block)
            if anchor is not None:
                anchors.append(anchor)

        if not anchors:
            logger.info("anchor: no anchor found for %s", candidate.key)
        return anchors

    def _mark_in_block(self, candidate: Candidate, block: TextBlock) -> Anchor | None:
        claimed = self._claimed.setdefault(block.index, set())
        lowered = block.text.lower()

        for needle in _needles(candidate.location):
            needle_key = canonical_location(needle)
            position = lowered.find(needle.lower())
            while position != -1:
                length = _extend_to_word_end(block.text, position, len(needle))
                if (needle_key, position) not in claimed and not block.overlaps_tag(
                    position, length
                ):
                    handle = block.tag(position, length)
                    claimed.add((needle_key, position))
                    return Anchor(
                        candidate_key=candidate.key,
                        block_index=block.index,
                        offset=position,
                        length=length,
                        text=handle.text,
                        handle=handle,
                    )
                position = lowered.find(needle.lower(), position + 1)

        logger.debug("anchor: all occurrences claimed in block %d for %s", block.index, candidate.key)
        return None
