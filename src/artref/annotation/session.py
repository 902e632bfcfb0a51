# ABOUTME: Page-scan session: extraction, anchoring, marking, and concurrent artwork resolution.
# ABOUTME: Each run rebuilds markers from scratch and discards the previous run's cache.

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass, field

from artref.annotation.anchors import AnchorLocator
from artref.annotation.document import Document
from artref.annotation.markers import Marker, MarkerState
from artref.artworks.resolver import ArtworkResolver
from artref.artworks.types import DEFAULT_LIMIT
from artref.extraction.extractor import CandidateExtractor
from artref.extraction.types import Candidate

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    """Result of one scan over a document."""

    candidates: list[Candidate] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    dropped: list[Candidate] = field(default_factory=list)

    def state_counts(self) -> Counter[MarkerState]:
        return Counter(marker.state for marker in self.markers)

    def markers_for(self, candidate: Candidate) -> list[Marker]:
        return [m for m in self.markers if m.candidate.key == candidate.key]


class AnnotationSession:
    """Run the full annotation pipeline against a document.

    Pipeline per run:
    1. Clear previous markers, tags, and the provider cache
    2. Extract candidates from the document text
    3. Locate anchors per candidate (candidates without one are dropped)
    4. Create a marker per anchor
    5. Resolve every dated marker concurrently
    """

    def __init__(
        self,
        extractor: CandidateExtractor,
        resolver: ArtworkResolver,
        *,
        per_provider_limit: int = DEFAULT_LIMIT,
        scan_limit: int | None = None,
        fetch: bool = True,
    ) -> None:
        self._extractor = extractor
        self._resolver = resolver
        self._per_provider_limit = per_provider_limit
        self._scan_limit = scan_limit
        self._fetch = fetch
        self.markers: list[Marker] = []

    async def run(self, document: Document) -> ScanReport:
        document.clear_tags()
        self.markers = []
        self._resolver.reset_cache()
        locator = AnchorLocator()

        report = ScanReport()
        report.candidates = self._extractor.extract(document.text, self._scan_limit)

        for candidate in report.candidates:
            anchors = locator.locate(candidate, document.blocks)
            if not anchors:
                report.dropped.append(candidate)
                continue
            report.markers.extend(Marker(anchor, candidate) for anchor in anchors)
        self.markers = report.markers

        pending = [m for m in report.markers if m.state is MarkerState.DATED_PENDING]
        logger.info(
            "scan: %d candidate(s), %d marker(s), %d to resolve, %d dropped",
            len(report.candidates),
            len(report.markers),
            len(pending),
            len(report.dropped),
        )
        if self._fetch and pending:
            await asyncio.gather(
                *(marker.resolve(self._resolver, self._per_provider_limit) for marker in pending)
            )
        return report
