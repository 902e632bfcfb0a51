# ABOUTME: Candidate extraction of (place, date range) pairs from article text.
# ABOUTME: Segments sentences, dates each one, inherits ranges from neighbors, and deduplicates.

import logging
import re
from collections.abc import Iterable

from artref.extraction.dates import DateRangeNormalizer
from artref.extraction.recognizers import TextCapabilities
from artref.extraction.types import Candidate, DateRange, canonical_location

logger = logging.getLogger(__name__)

DEFAULT_SCAN_LIMIT = 12_000

_LEADING_NON_WORD_RE = re.compile(r"^\W+")
_TRAILING_NON_WORD_RE = re.compile(r"\W+$")
_WHITESPACE_RE = re.compile(r"\s+")


def clean_place(raw: str) -> str:
    """Trim surrounding punctuation and collapse whitespace in a place mention."""
    text = _LEADING_NON_WORD_RE.sub("", raw or "")
    text = _TRAILING_NON_WORD_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def nearest_range(index: int, ranges_by_sentence: list[list[DateRange]]) -> DateRange | None:
    """Find the closest sentence range, searching outward from `index`.

    Radius 0 is the sentence itself, radius 1 its immediate neighbors, and so
    on. At equal distance the textually-earlier sentence wins.
    """
    count = len(ranges_by_sentence)
    for radius in range(count):
        before = index - radius
        after = index + radius
        if before >= 0 and ranges_by_sentence[before]:
            return ranges_by_sentence[before][0]
        if after < count and ranges_by_sentence[after]:
            return ranges_by_sentence[after][0]
    return None


def dedupe_candidates(candidates: Iterable[Candidate]) -> list[Candidate]:
    """Drop candidates whose canonical key was already seen, keeping reading order.

    Candidates whose location canonicalizes to an empty string are discarded.
    """
    seen: set[str] = set()
    unique: list[Candidate] = []
    for candidate in candidates:
        if not candidate.location_key:
            continue
        key = candidate.key
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


class CandidateExtractor:
    """Extract deduplicated place/time candidates from document text.

    Each call re-derives everything from scratch; no state is kept between
    calls.
    """

    def __init__(
        self,
        capabilities: TextCapabilities,
        normalizer: DateRangeNormalizer | None = None,
        *,
        scan_limit: int = DEFAULT_SCAN_LIMIT,
    ) -> None:
        self._capabilities = capabilities
        self._normalizer = normalizer or DateRangeNormalizer.from_capabilities(capabilities)
        self._scan_limit = scan_limit

    def extract(
        self, text: str, scan_limit: int | None = None, offset: int = 0
    ) -> list[Candidate]:
        """Extract candidates from the window [offset, offset + scan_limit) of `text`."""
        limit = self._scan_limit if scan_limit is None else scan_limit
        window = (text or "")[offset : offset + limit]
        if not window.strip():
            return []

        sentences = self._capabilities.sentences(window)
        if not sentences:
            return []

        ranges_by_sentence = [self._normalizer.candidate_ranges(s) for s in sentences]

        raw: list[Candidate] = []
        for index, sentence in enumerate(sentences):
            places = self._capabilities.places(sentence)
            if not places:
                continue

            own = ranges_by_sentence[index]
            chosen = own[0] if own else nearest_range(index, ranges_by_sentence)

            for place in places:
                location = clean_place(place)
                if not canonical_location(location):
                    continue
                raw.append(Candidate(location=location, date_range=chosen))

        candidates = dedupe_candidates(raw)
        logger.info(
            "Extracted %d candidate(s) from %d sentence(s)", len(candidates), len(sentences)
        )
        return candidates
