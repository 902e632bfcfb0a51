# ABOUTME: Extraction package: turns article text into place/time candidates.
# ABOUTME: Exports the value objects, the date normalizer, and the candidate extractor.

from artref.extraction.dates import DateRangeNormalizer
from artref.extraction.extractor import CandidateExtractor, dedupe_candidates
from artref.extraction.recognizers import RecognitionUnavailable, TextCapabilities
from artref.extraction.types import Candidate, DateRange, canonical_key, canonical_location

__all__ = [
    "Candidate",
    "CandidateExtractor",
    "DateRange",
    "DateRangeNormalizer",
    "RecognitionUnavailable",
    "TextCapabilities",
    "canonical_key",
    "canonical_location",
    "dedupe_candidates",
]
