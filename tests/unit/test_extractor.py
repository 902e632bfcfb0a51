# ABOUTME: Unit tests for candidate extraction from document text.
# ABOUTME: Covers range inheritance, deduplication, scan windows, and place cleanup.

from artref.extraction.dates import DateRangeNormalizer
from artref.extraction.extractor import (
    CandidateExtractor,
    clean_place,
    dedupe_candidates,
    nearest_range,
)
from artref.extraction.recognizers import TextCapabilities
from artref.extraction.types import Candidate, DateRange
from tests.fixtures.fakes import make_capabilities


class TestNearestRange:
    """Tests for outward range inheritance."""

    def test_own_range_at_radius_zero(self) -> None:
        """A sentence's own range is found first."""
        ranges = [[DateRange.single(1800)], [DateRange.single(1900)]]
        assert nearest_range(1, ranges) == DateRange.single(1900)

    def test_earlier_neighbor_wins_ties(self) -> None:
        """At equal distance the earlier sentence wins."""
        ranges = [[DateRange.single(1800)], [], [DateRange.single(1900)]]
        assert nearest_range(1, ranges) == DateRange.single(1800)

    def test_closer_neighbor_wins(self) -> None:
        """A nearer later sentence beats a farther earlier one."""
        ranges = [[DateRange.single(1800)], [], [], [DateRange.single(1900)]]
        assert nearest_range(2, ranges) == DateRange.single(1900)

    def test_no_ranges(self) -> None:
        """Without any range there is nothing to inherit."""
        assert nearest_range(0, [[], []]) is None


class TestCleanPlace:
    """Tests for place mention cleanup."""

    def test_trims_punctuation_and_spacing(self) -> None:
        """Surrounding punctuation and repeated whitespace go away."""
        assert clean_place("  “New   York,” ") == "New York"

    def test_keeps_inner_punctuation(self) -> None:
        """Inner punctuation is kept."""
        assert clean_place("St. Petersburg") == "St. Petersburg"


class TestDedupeCandidates:
    """Tests for canonical-key deduplication."""

    def test_first_occurrence_wins(self) -> None:
        """Later duplicates are dropped in favor of the first."""
        first = Candidate("Paris", DateRange.single(1889))
        dup = Candidate("PARIS", DateRange.single(1889))
        other = Candidate("Paris", DateRange.single(1900))
        assert dedupe_candidates([first, dup, other]) == [first, other]

    def test_empty_locations_dropped(self) -> None:
        """Locations that canonicalize to nothing are discarded."""
        assert dedupe_candidates([Candidate("!!")]) == []


class TestCandidateExtractor:
    """Tests for CandidateExtractor."""

    def test_paris_1889(self, capabilities: TextCapabilities) -> None:
        """The World's Fair sentence yields one dated Paris candidate."""
        extractor = CandidateExtractor(capabilities)
        result = extractor.extract("The exhibition opened in Paris in 1889 at the World's Fair.")
        assert result == [Candidate("Paris", DateRange(1889, 1889))]

    def test_undated_sentence_inherits_neighbor_range(self, capabilities: TextCapabilities) -> None:
        """A place without a date borrows the nearest sentence's range."""
        text = "The war lasted from 1914-1918. Vienna was hungry. Nothing else happened."
        result = CandidateExtractor(capabilities).extract(text)
        assert result == [Candidate("Vienna", DateRange(1914, 1918))]

    def test_own_range_never_inherits(self, capabilities: TextCapabilities) -> None:
        """A sentence with its own range keeps it."""
        text = "Rome fell in 1527. Florence flourished in 1480."
        result = CandidateExtractor(capabilities).extract(text)
        assert result == [
            Candidate("Rome", DateRange.single(1527)),
            Candidate("Florence", DateRange.single(1480)),
        ]

    def test_no_dates_anywhere_gives_location_only(self, capabilities: TextCapabilities) -> None:
        """Without any range the candidate is location-only."""
        result = CandidateExtractor(capabilities).extract("London is large. Berlin too.")
        assert result == [Candidate("London"), Candidate("Berlin")]

    def test_cross_product_of_places_and_range(self, capabilities: TextCapabilities) -> None:
        """Every place in a sentence pairs with the sentence's range."""
        result = CandidateExtractor(capabilities).extract("Paris and London in 1851.")
        assert result == [
            Candidate("Paris", DateRange.single(1851)),
            Candidate("London", DateRange.single(1851)),
        ]

    def test_duplicates_removed_in_reading_order(self, capabilities: TextCapabilities) -> None:
        """Repeated mentions collapse to the first."""
        text = "Paris in 1889. Later, Paris in 1889 again. Then Rome."
        result = CandidateExtractor(capabilities).extract(text)
        keys = [c.key for c in result]
        assert len(keys) == len(set(keys))
        assert keys == ["paris|1889-1889", "rome|1889-1889"]

    def test_scan_limit_truncates(self, capabilities: TextCapabilities) -> None:
        """Text beyond the scan limit is ignored."""
        text = "Paris in 1889. " + "x" * 50 + ". London in 1851."
        result = CandidateExtractor(capabilities, scan_limit=20).extract(text)
        assert [c.location for c in result] == ["Paris"]

    def test_offset_selects_window(self, capabilities: TextCapabilities) -> None:
        """An offset scans a later window of the text."""
        text = "Paris in 1889. London in 1851."
        result = CandidateExtractor(capabilities).extract(text, scan_limit=100, offset=15)
        assert result == [Candidate("London", DateRange.single(1851))]

    def test_empty_text(self, capabilities: TextCapabilities) -> None:
        """Blank input yields nothing."""
        assert CandidateExtractor(capabilities).extract("   ") == []

    def test_custom_normalizer_is_used(self) -> None:
        """An injected normalizer decides the ranges."""
        caps = make_capabilities()
        normalizer = DateRangeNormalizer(min_year=1500)
        result = CandidateExtractor(caps, normalizer).extract("Rome in 1450.")
        assert result == [Candidate("Rome")]

    def test_structured_capability_drives_ranges(self) -> None:
        """The capability descriptor's structured recognizer is consulted first."""
        caps = make_capabilities(structured_dates=lambda text: [DateRange(1600, 1610)])
        result = CandidateExtractor(caps).extract("Rome in 1450.")
        assert result == [Candidate("Rome", DateRange(1600, 1610))]
