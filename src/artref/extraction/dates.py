# ABOUTME: Date-range normalization of free text into canonical year intervals.
# ABOUTME: Runs an ordered strategy table (structured, phrase, century, bare year) and stops at the first hit.

import logging
import re
from dataclasses import dataclass

from artref.extraction.recognizers import (
    DEFAULT_MIN_YEAR,
    MAX_YEAR,
    DateRecognizer,
    TextCapabilities,
    in_year_window,
)
from artref.extraction.types import DateRange

logger = logging.getLogger(__name__)

_ORDINAL_WORDS: dict[str, int] = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
    "eleventh": 11,
    "twelfth": 12,
    "thirteenth": 13,
    "fourteenth": 14,
    "fifteenth": 15,
    "sixteenth": 16,
    "seventeenth": 17,
    "eighteenth": 18,
    "nineteenth": 19,
    "twentieth": 20,
    "twenty-first": 21,
}

# Longest alternatives first so "twenty-first" wins over "first".
_ORDINAL = (
    r"(\d{1,2}(?:st|nd|rd|th)?|"
    + "|".join(sorted(_ORDINAL_WORDS, key=len, reverse=True))
    + r")"
)

# "7th-8th centuries", "7th and 8th centuries", "seventh to eighth centuries"
_MULTI_CENTURY_RE = re.compile(
    rf"\b{_ORDINAL}\s*(?:–|-|to|and)\s*{_ORDINAL}[\s-]+centur(?:y|ies)\b",
    re.IGNORECASE,
)
# "18th century", "early 18th century", "mid-18th century", "the end of the 18th century"
_CENTURY_RE = re.compile(
    r"\b(?:(early|mid(?:dle)?|late|end|ending|beginning|start)(?:\s+of\s+the)?[\s-]+)?"
    rf"{_ORDINAL}[\s-]+centur(?:y|ies)\b",
    re.IGNORECASE,
)

_YEAR = r"(1\d{3}|20\d{2})"
_YEAR_PAIR_RE = re.compile(rf"(?<!\d){_YEAR}\s*[-–—]\s*{_YEAR}(?!\d)")
_LONE_YEAR_RE = re.compile(rf"(?<!\d){_YEAR}(?!\d)")

_EARLY_QUALIFIERS = frozenset({"early", "beginning", "start"})
_MID_QUALIFIERS = frozenset({"mid", "middle"})
_LATE_QUALIFIERS = frozenset({"late", "end", "ending"})


def _ordinal_value(token: str) -> int | None:
    token = token.lower()
    if token in _ORDINAL_WORDS:
        return _ORDINAL_WORDS[token]
    digits = re.match(r"\d+", token)
    if not digits:
        return None
    value = int(digits.group(0))
    return value if value > 0 else None


def century_range(century: int, qualifier: str | None = None) -> DateRange:
    """Map century N (optionally qualified) to its year interval.

    Century N covers [(N-1)*100, (N-1)*100+99]; early/mid/late narrow it to
    the first, middle, and final third of that span.
    """
    base = (century - 1) * 100
    qualifier = (qualifier or "").lower()
    if qualifier in _EARLY_QUALIFIERS:
        return DateRange(base, base + 33)
    if qualifier in _MID_QUALIFIERS:
        return DateRange(base + 34, base + 66)
    if qualifier in _LATE_QUALIFIERS:
        return DateRange(base + 67, base + 99)
    return DateRange(base, base + 99)


def parse_century_phrases(text: str) -> list[DateRange]:
    """Recognize century phrases, including multi-century spans and qualifiers."""
    ranges: list[DateRange] = []
    claimed: list[tuple[int, int]] = []

    for match in _MULTI_CENTURY_RE.finditer(text):
        first = _ordinal_value(match.group(1))
        second = _ordinal_value(match.group(2))
        if first is None or second is None:
            continue
        low, high = min(first, second), max(first, second)
        ranges.append(DateRange((low - 1) * 100, (high - 1) * 100 + 99))
        claimed.append(match.span())

    for match in _CENTURY_RE.finditer(text):
        if any(start <= match.start() < end for start, end in claimed):
            continue
        century = _ordinal_value(match.group(2))
        if century is None:
            continue
        ranges.append(century_range(century, match.group(1)))

    return ranges


def make_year_parser(min_year: int = DEFAULT_MIN_YEAR) -> DateRecognizer:
    """Build the bare-year recognizer for years in [min_year, 2099].

    An explicit 'start-end' pair (hyphen or en-dash) becomes a range; every
    other year becomes a degenerate single-year range.
    """

    def _in_bounds(year: int) -> bool:
        return min_year <= year <= MAX_YEAR

    def parse_years(text: str) -> list[DateRange]:
        ranges: list[DateRange] = []
        paired: list[tuple[int, int]] = []

        for match in _YEAR_PAIR_RE.finditer(text):
            first, second = int(match.group(1)), int(match.group(2))
            if not (_in_bounds(first) and _in_bounds(second)):
                continue
            ranges.append(DateRange(min(first, second), max(first, second)))
            paired.append(match.span())

        for match in _LONE_YEAR_RE.finditer(text):
            if any(start <= match.start() < end for start, end in paired):
                continue
            year = int(match.group(1))
            if _in_bounds(year):
                ranges.append(DateRange.single(year))

        return ranges

    return parse_years


def _with_spanning_range(ranges: list[DateRange]) -> list[DateRange]:
    """Order one strategy's results and prepend a range spanning all of them.

    Results are deduplicated and sorted by (start, end). When two or more
    distinct years appear, the min-to-max span comes first so that
    "from 1915 to 1918" reads as one interval rather than two singletons.
    """
    unique = sorted(set(ranges), key=lambda r: (r.start, r.end))
    years = {bound for r in unique for bound in (r.start, r.end)}
    if len(years) < 2:
        return unique

    spanning = DateRange(min(years), max(years))
    return [spanning] + [r for r in unique if r != spanning]


@dataclass(frozen=True)
class DateStrategy:
    """One named entry in the normalizer's priority table."""

    name: str
    recognize: DateRecognizer
    # Results from injected recognizers are held to the year window.
    bounded: bool = False


class DateRangeNormalizer:
    """Convert heterogeneous date expressions into canonical year ranges.

    Strategies run in strict priority order: structured date recognition,
    general phrase parsing, century phrases, then bare years. The first
    strategy to produce any range wins. A capability that raises is logged
    and skipped, falling through to the next strategy. Recognizer results
    outside [min_year, 2099] are discarded before that check, so a count
    like "300 years" cannot shadow a real year later in the text.
    """

    def __init__(
        self,
        *,
        structured: DateRecognizer | None = None,
        phrase: DateRecognizer | None = None,
        min_year: int = DEFAULT_MIN_YEAR,
    ) -> None:
        self._min_year = min_year
        table = [
            ("structured", structured, True),
            ("phrase", phrase, True),
            ("century", parse_century_phrases, False),
            ("year", make_year_parser(min_year), False),
        ]
        self._strategies = [
            DateStrategy(name=name, recognize=fn, bounded=bounded)
            for name, fn, bounded in table
            if fn is not None
        ]

    @classmethod
    def from_capabilities(
        cls, capabilities: TextCapabilities, *, min_year: int = DEFAULT_MIN_YEAR
    ) -> "DateRangeNormalizer":
        return cls(
            structured=capabilities.structured_dates,
            phrase=capabilities.phrase_dates,
            min_year=min_year,
        )

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    def candidate_ranges(self, text: str) -> list[DateRange]:
        """Return every range the first successful strategy finds, best first."""
        if not text:
            return []

        for strategy in self._strategies:
            try:
                found = strategy.recognize(text)
            except Exception as exc:  # external recognizers may fail in arbitrary ways
                logger.warning("Date strategy %s unavailable: %s", strategy.name, exc)
                continue
            ranges = [r for r in found if r is not None]
            if strategy.bounded:
                ranges = [r for r in ranges if in_year_window(r, self._min_year)]
            if ranges:
                logger.debug("Date strategy %s matched %d range(s)", strategy.name, len(ranges))
                return _with_spanning_range(ranges)

        return []

    def normalize(self, text: str) -> DateRange | None:
        """Return the single best range for a text segment, or None."""
        ranges = self.candidate_ranges(text)
        return ranges[0] if ranges else None
