# ABOUTME: Natural-language capabilities used by extraction: sentences, places, and dates.
# ABOUTME: Bundles spaCy- and dateutil-backed recognizers into an explicit capability descriptor.

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import spacy
from dateutil import parser as dateutil_parser

from artref.extraction.types import DateRange

logger = logging.getLogger(__name__)

SentenceSplitter = Callable[[str], list[str]]
PlaceRecognizer = Callable[[str], list[str]]
DateRecognizer = Callable[[str], list[DateRange]]

# spaCy entity labels treated as place mentions.
_PLACE_LABELS = frozenset({"GPE", "LOC", "FAC"})
_DATE_LABELS = frozenset({"DATE"})

# Years outside [min_year, MAX_YEAR] are counts or durations, not dates.
DEFAULT_MIN_YEAR = 1000
MAX_YEAR = 2099

# Years inside a date entity, ignoring digit groups like "2,000".
_ENTITY_YEAR_RE = re.compile(r"(?<![\d,.])\b(\d{3,4})\b(?![,.]\d)")
# "1920s" -> decade, "1800s" -> century.
_DECADE_RE = re.compile(r"\b(\d{3})0s\b")
_CONNECTED_RANGE_RE = re.compile(
    r"\b(?:from|between)\s+(\d{3,4})\s+(?:to|and|until|till|through)\s+(\d{3,4})\b",
    re.IGNORECASE,
)
_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
    "|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec"
)
# "March 5, 1889", "5 March 1889", "March 1889"
_MONTH_DATE_RE = re.compile(
    rf"\b(?:\d{{1,2}}(?:st|nd|rd|th)?\s+)?(?:{_MONTHS})\.?"
    rf"(?:\s+\d{{1,2}}(?:st|nd|rd|th)?)?,?\s+\d{{4}}\b",
    re.IGNORECASE,
)
_DEFAULT_DATE = datetime(2000, 1, 1)


class RecognitionUnavailable(Exception):
    """Raised when a natural-language capability cannot be provided."""


@dataclass(frozen=True)
class TextCapabilities:
    """Recognition capabilities resolved once at construction time.

    `sentences` and `places` are required. The two date recognizers are
    optional; an absent recognizer is simply skipped by the normalizer.
    """

    sentences: SentenceSplitter
    places: PlaceRecognizer
    structured_dates: DateRecognizer | None = None
    phrase_dates: DateRecognizer | None = None


def in_year_window(date_range: DateRange, min_year: int = DEFAULT_MIN_YEAR) -> bool:
    return min_year <= date_range.start and date_range.end <= MAX_YEAR


def _decade_range(match: re.Match[str]) -> DateRange:
    prefix = match.group(1)
    base = int(prefix) * 10
    # "1800s" reads as the whole century, "1920s" as one decade.
    if prefix.endswith("0"):
        return DateRange(base, base + 99)
    return DateRange(base, base + 9)


def years_from_date_text(text: str, min_year: int = DEFAULT_MIN_YEAR) -> list[DateRange]:
    """Turn the surface text of a recognized date into year ranges.

    A decade expression yields its span; two or more years yield one range
    from the smallest to the largest; a single year yields a degenerate range.
    Numbers outside [min_year, MAX_YEAR], such as "300 years", are ignored.
    """
    decades = [_decade_range(m) for m in _DECADE_RE.finditer(text)]
    decades = [r for r in decades if in_year_window(r, min_year)]
    if decades:
        return decades

    years = [int(y) for y in _ENTITY_YEAR_RE.findall(text) if min_year <= int(y) <= MAX_YEAR]
    if not years:
        return []
    if len(set(years)) > 1:
        return [DateRange(min(years), max(years))]
    return [DateRange.single(years[0])]


def parse_date_phrases(text: str, min_year: int = DEFAULT_MIN_YEAR) -> list[DateRange]:
    """Parse general date phrases: connected year ranges, decades, and calendar dates.

    Connectors and decades are matched by pattern; month-name dates are handed
    to dateutil. Ranges reaching outside [min_year, MAX_YEAR] are dropped, so
    "between 200 and 400 soldiers" is not a period.
    """
    ranges: list[DateRange] = []

    for match in _CONNECTED_RANGE_RE.finditer(text):
        first, second = int(match.group(1)), int(match.group(2))
        ranges.append(DateRange(min(first, second), max(first, second)))

    ranges.extend(_decade_range(m) for m in _DECADE_RE.finditer(text))

    for match in _MONTH_DATE_RE.finditer(text):
        try:
            parsed = dateutil_parser.parse(match.group(0), default=_DEFAULT_DATE)
        except (ValueError, OverflowError):
            logger.debug("Unparseable date phrase: %r", match.group(0))
            continue
        ranges.append(DateRange.single(parsed.year))

    return [r for r in ranges if in_year_window(r, min_year)]


class SpacyRecognizer:
    """Sentence, place, and date recognition backed by a spaCy pipeline."""

    def __init__(self, nlp: "spacy.language.Language", *, min_year: int = DEFAULT_MIN_YEAR) -> None:
        self._nlp = nlp
        self._min_year = min_year

    @classmethod
    def load(cls, model_name: str, *, min_year: int = DEFAULT_MIN_YEAR) -> "SpacyRecognizer":
        """Load a spaCy model by name.

        Raises:
            RecognitionUnavailable: If the model is not installed.
        """
        try:
            nlp = spacy.load(model_name)
        except OSError as exc:
            raise RecognitionUnavailable(
                f"spaCy model '{model_name}' not found. "
                f"Run: python -m spacy download {model_name}"
            ) from exc
        return cls(nlp, min_year=min_year)

    def sentences(self, text: str) -> list[str]:
        doc = self._nlp(text)
        return [sent.text.strip() for sent in doc.sents if sent.text.strip()]

    def places(self, text: str) -> list[str]:
        doc = self._nlp(text)
        return [ent.text for ent in doc.ents if ent.label_ in _PLACE_LABELS]

    def dates(self, text: str) -> list[DateRange]:
        doc = self._nlp(text)
        ranges: list[DateRange] = []
        for ent in doc.ents:
            if ent.label_ in _DATE_LABELS:
                ranges.extend(years_from_date_text(ent.text, self._min_year))
        return ranges

    def phrase_dates(self, text: str) -> list[DateRange]:
        return parse_date_phrases(text, self._min_year)

    def capabilities(self) -> TextCapabilities:
        return TextCapabilities(
            sentences=self.sentences,
            places=self.places,
            structured_dates=self.dates,
            phrase_dates=self.phrase_dates,
        )


def load_capabilities(model_name: str, *, min_year: int = DEFAULT_MIN_YEAR) -> TextCapabilities:
    """Build the default capability descriptor from a spaCy model name."""
    recognizer = SpacyRecognizer.load(model_name, min_year=min_year)
    logger.info("Loaded spaCy model %s", model_name)
    return recognizer.capabilities()
