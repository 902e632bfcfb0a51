# ABOUTME: Core value objects for extracted place/time references.
# ABOUTME: DateRange and Candidate flow from extraction to anchoring and artwork resolution.

import re
from dataclasses import dataclass

_NON_KEY_CHARS_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

# Key suffix for candidates without a date range.
NO_RANGE_KEY = "none"


@dataclass(frozen=True)
class DateRange:
    """An inclusive interval of years. A single year has start == end."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"start must not exceed end, got {self.start} > {self.end}"
            raise ValueError(msg)

    @classmethod
    def single(cls, year: int) -> "DateRange":
        return cls(start=year, end=year)

    @property
    def midpoint(self) -> int:
        """Representative year, rounding halves upward."""
        return (self.start + self.end + 1) // 2

    def contains(self, year: int) -> bool:
        return self.start <= year <= self.end

    def label(self) -> str:
        """Display label: '1889' or '1914–1918'."""
        if self.start == self.end:
            return str(self.start)
        return f"{self.start}–{self.end}"

    def key(self) -> str:
        return f"{self.start}-{self.end}"


def canonical_location(text: str) -> str:
    """Lower-case, strip punctuation, and collapse whitespace in a place mention."""
    lowered = (text or "").lower()
    stripped = _NON_KEY_CHARS_RE.sub("", lowered)
    return _WHITESPACE_RE.sub(" ", stripped).strip()


def canonical_key(location: str, date_range: DateRange | None) -> str:
    """Derive the dedup/cache key for a (location, date range) pair.

    Pure function of its inputs: equal keys mean equivalent candidates for
    marking and fetching, whatever the original casing or spacing.
    """
    range_key = date_range.key() if date_range is not None else NO_RANGE_KEY
    return f"{canonical_location(location)}|{range_key}"


@dataclass(frozen=True)
class Candidate:
    """A place mention paired with an optional date range.

    Candidates are value objects; their identity is their canonical key.
    """

    location: str
    date_range: DateRange | None = None

    @property
    def key(self) -> str:
        return canonical_key(self.location, self.date_range)

    @property
    def location_key(self) -> str:
        return canonical_location(self.location)

    @property
    def is_dated(self) -> bool:
        return self.date_range is not None

    def describe(self) -> str:
        """Human-readable form: 'Paris, 1889' or just 'Paris'."""
        if self.date_range is None:
            return self.location
        return f"{self.location}, {self.date_range.label()}"
