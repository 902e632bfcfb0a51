# ABOUTME: Marker lifecycle for annotated anchors: located, dated-pending, dated-with-art.
# ABOUTME: Applies artwork resolutions to markers, discarding results from stale requests.

import logging
from dataclasses import dataclass, field
from enum import Enum

from artref.annotation.anchors import Anchor
from artref.artworks.resolver import ArtworkResolver, ResolutionResult
from artref.artworks.types import ArtworkRecord
from artref.extraction.types import Candidate

logger = logging.getLogger(__name__)


class MarkerState(Enum):
    """Marker lifecycle states. DATED_WITH_ART never moves backward."""

    LOCATED = "located"
    DATED_PENDING = "dated-pending"
    DATED_WITH_ART = "dated-with-art"


@dataclass
class TooltipPayload:
    """What the tooltip attached to a dated marker shows."""

    state: str
    title: str
    caption: str
    image: str | None = None
    gallery_params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def loading(cls) -> "TooltipPayload":
        return cls(state="loading", title="Fetching art…", caption="Please wait")

    @classmethod
    def no_art(cls) -> "TooltipPayload":
        return cls(
            state="error",
            title="No related art found",
            caption="Try another section or refine query.",
        )

    @classmethod
    def ready(cls, candidate: Candidate, artworks: list[ArtworkRecord]) -> "TooltipPayload":
        first = artworks[0]
        caption_bits = [candidate.describe(), first.location_label or first.source]
        params = {"location": candidate.location}
        if candidate.date_range is not None:
            params["startYear"] = str(candidate.date_range.start)
            params["endYear"] = str(candidate.date_range.end)
        return cls(
            state="ready",
            title=first.title or "Artwork",
            caption=" • ".join(bit for bit in caption_bits if bit) or "Related art",
            image=first.thumbnail_url,
            gallery_params=params,
        )


class Marker:
    """Stateful annotation attached to one anchor.

    Location-only markers are created LOCATED and stay there. Dated markers
    start DATED_PENDING and move to DATED_WITH_ART once a resolution yields
    at least one artwork; an empty or failed resolution leaves them pending,
    shown as "no art".

    Each resolution request gets a sequence number; only the result of the
    most recent request is ever applied.
    """

    def __init__(self, anchor: Anchor, candidate: Candidate) -> None:
        self.anchor = anchor
        self.candidate = candidate
        self.artworks: list[ArtworkRecord] = []
        self.settled = False
        self._request_seq = 0
        if candidate.is_dated:
            self.state = MarkerState.DATED_PENDING
            self.tooltip: TooltipPayload | None = TooltipPayload.loading()
        else:
            self.state = MarkerState.LOCATED
            self.tooltip = None

    def __repr__(self) -> str:
        return f"Marker({self.marker_id}, {self.candidate.key}, {self.state.value})"

    @property
    def marker_id(self) -> str:
        return self.anchor.marker_id

    @property
    def style(self) -> str:
        """Visual class: location, pending, no-art, or art."""
        if self.state is MarkerState.LOCATED:
            return "location"
        if self.state is MarkerState.DATED_WITH_ART:
            return "art"
        return "no-art" if self.settled else "pending"

    @property
    def active_request(self) -> int:
        return self._request_seq

    def begin_request(self) -> int:
        """Issue a new request number, superseding any outstanding one."""
        if self.state is MarkerState.LOCATED:
            raise ValueError(f"location-only marker {self.marker_id} has nothing to resolve")
        self._request_seq += 1
        return self._request_seq

    def apply(self, request_id: int, result: ResolutionResult) -> bool:
        """Apply a resolution result. Returns False if the request is stale."""
        if request_id != self._request_seq:
            logger.debug(
                "marker: dropping stale result %d (active %d) for %s",
                request_id,
                self._request_seq,
                self.candidate.key,
            )
            return False

        self.settled = True
        if result.records:
            self.state = MarkerState.DATED_WITH_ART
            self.artworks = list(result.records)
            self.tooltip = TooltipPayload.ready(self.candidate, self.artworks)
            logger.info(
                "marker: %d artwork(s) for %s", len(self.artworks), self.candidate.key
            )
            return True

        if self.state is MarkerState.DATED_WITH_ART:
            return True

        self.tooltip = TooltipPayload.no_art()
        if result.failed:
            logger.warning(
                "marker: resolution failed for %s: %s", self.candidate.key, result.failures
            )
        else:
            logger.info("marker: no art found for %s", self.candidate.key)
        return True

    async def resolve(self, resolver: ArtworkResolver, per_provider_limit: int | None = None) -> bool:
        """Request artworks for this marker and apply them if still current."""
        request_id = self.begin_request()
        try:
            result = await resolver.resolve_detailed(self.candidate, per_provider_limit)
        except Exception as exc:
            logger.warning("marker: resolver error for %s: %s", self.candidate.key, exc)
            result = ResolutionResult(providers=["resolver"], failures={"resolver": str(exc)})
        return self.apply(request_id, result)
