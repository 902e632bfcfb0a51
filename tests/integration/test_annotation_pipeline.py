# ABOUTME: Integration tests for the full annotation session.
# ABOUTME: Runs extraction, anchoring, marking, and resolution together with fake providers.

import pytest
import spacy

from artref.annotation.document import Document
from artref.annotation.markers import MarkerState
from artref.annotation.session import AnnotationSession
from artref.artworks.resolver import ArtworkResolver
from artref.extraction.extractor import CandidateExtractor
from artref.extraction.recognizers import SpacyRecognizer, TextCapabilities
from artref.extraction.types import Candidate, DateRange
from tests.fixtures.fakes import FakeProvider, make_record

WORLDS_FAIR = "The exhibition opened in Paris in 1889 at the World's Fair."


def _session(
    capabilities: TextCapabilities, *providers: FakeProvider, fetch: bool = True
) -> AnnotationSession:
    return AnnotationSession(
        CandidateExtractor(capabilities),
        ArtworkResolver(list(providers)),
        per_provider_limit=8,
        fetch=fetch,
    )


class TestAnnotationSession:
    """End-to-end session behavior with fake capabilities."""

    @pytest.mark.asyncio
    async def test_worlds_fair_ends_with_art(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """One candidate, one anchor, and a marker ending in DatedWithArt."""
        doc = Document.from_text(WORLDS_FAIR)
        report = await _session(capabilities, met_provider).run(doc)

        assert report.candidates == [Candidate("Paris", DateRange(1889, 1889))]
        assert len(report.markers) == 1
        marker = report.markers[0]
        assert marker.anchor.text == "Paris"
        assert marker.anchor.block_index == 0
        assert marker.state is MarkerState.DATED_WITH_ART
        assert marker.style == "art"

    @pytest.mark.asyncio
    async def test_location_only_markers_are_not_resolved(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """Undated candidates become Located markers without any fetch."""
        doc = Document.from_text("Rome is eternal.")
        report = await _session(capabilities, met_provider).run(doc)
        assert [m.state for m in report.markers] == [MarkerState.LOCATED]
        assert met_provider.queries == []

    @pytest.mark.asyncio
    async def test_candidate_without_anchor_dropped(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """A candidate whose place and date sit in different blocks is dropped."""
        doc = Document(["Paris was calm.", "The fair opened in 1889."])
        report = await _session(capabilities, met_provider).run(doc)
        assert report.dropped == [Candidate("Paris", DateRange.single(1889))]
        assert report.markers == []

    @pytest.mark.asyncio
    async def test_markers_sharing_a_candidate_fetch_once(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """Concurrent markers with the same key share one provider call."""
        doc = Document(["Paris in 1889.", "Again Paris in 1889."])
        report = await _session(capabilities, met_provider).run(doc)
        assert len(report.markers) == 2
        assert all(m.state is MarkerState.DATED_WITH_ART for m in report.markers)
        assert len(met_provider.queries) == 1

    @pytest.mark.asyncio
    async def test_empty_and_failed_results_look_alike(
        self, capabilities: TextCapabilities, failing_provider: FakeProvider
    ) -> None:
        """A failing provider leaves markers pending, styled as no art."""
        doc = Document.from_text(WORLDS_FAIR)
        report = await _session(capabilities, failing_provider).run(doc)
        marker = report.markers[0]
        assert marker.state is MarkerState.DATED_PENDING
        assert marker.style == "no-art"

    @pytest.mark.asyncio
    async def test_rescan_rebuilds_everything(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """A re-scan discards markers, tags, and cached results."""
        doc = Document.from_text(WORLDS_FAIR)
        session = _session(capabilities, met_provider)
        first = await session.run(doc)
        second = await session.run(doc)

        assert len(doc.tagged_spans()) == 1
        assert first.markers[0] is not second.markers[0]
        assert session.markers == second.markers
        assert len(met_provider.queries) == 2

    @pytest.mark.asyncio
    async def test_no_fetch_leaves_markers_pending(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """With fetching disabled, dated markers stay pending."""
        doc = Document.from_text(WORLDS_FAIR)
        report = await _session(capabilities, met_provider, fetch=False).run(doc)
        assert report.markers[0].style == "pending"
        assert met_provider.queries == []

    @pytest.mark.asyncio
    async def test_html_document(
        self, capabilities: TextCapabilities, met_provider: FakeProvider
    ) -> None:
        """HTML input is annotated block by block."""
        html = (
            "<article><h2>Vienna</h2>"
            "<p>Klimt painted in Vienna in 1907.</p>"
            "<p>Later he visited Florence.</p></article>"
        )
        doc = Document.from_html(html)
        report = await _session(capabilities, met_provider).run(doc)

        assert [(m.anchor.block_index, m.anchor.text) for m in report.markers] == [(1, "Vienna")]
        assert report.markers[0].state is MarkerState.DATED_WITH_ART
        # Florence inherits 1907, but its own block never mentions that year.
        assert report.dropped == [Candidate("Florence", DateRange.single(1907))]


class TestSpacyBackedSession:
    """Session using the spaCy recognizer on a rule-based pipeline."""

    @pytest.mark.asyncio
    async def test_spacy_capabilities(self, met_provider: FakeProvider) -> None:
        """spaCy sentences and entities drive extraction end to end."""
        nlp = spacy.blank("en")
        nlp.add_pipe("sentencizer")
        ruler = nlp.add_pipe("entity_ruler")
        ruler.add_patterns(
            [
                {"label": "GPE", "pattern": "Paris"},
                {"label": "DATE", "pattern": "1889"},
            ]
        )
        capabilities = SpacyRecognizer(nlp).capabilities()
        report = await _session(capabilities, met_provider).run(Document.from_text(WORLDS_FAIR))

        assert report.candidates == [Candidate("Paris", DateRange.single(1889))]
        assert report.markers[0].state is MarkerState.DATED_WITH_ART
        assert report.markers[0].artworks == [make_record()]
