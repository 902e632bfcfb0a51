# ABOUTME: Artwork value objects shared by providers, the cache, and the resolver.
# ABOUTME: ArtworkRecord is the provider-tagged result; ArtworkQuery is the provider-facing request.

from dataclasses import dataclass

from artref.extraction.types import Candidate, DateRange, canonical_location

DEFAULT_LIMIT = 8


@dataclass(frozen=True)
class ArtworkRecord:
    """A single artwork returned by a collection provider.

    `id` is unique within its provider only; (source, id) is globally unique.
    """

    id: str
    title: str
    artist: str
    date_label: str
    thumbnail_url: str
    full_image_url: str
    source: str
    location_label: str = ""

    @property
    def global_id(self) -> tuple[str, str]:
        return (self.source, self.id)


@dataclass(frozen=True)
class ArtworkQuery:
    """What a provider is asked for: a place, an optional date range, and a result cap."""

    location: str
    date_range: DateRange | None = None
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.limit < 1:
            msg = f"limit must be positive, got {self.limit}"
            raise ValueError(msg)

    @classmethod
    def for_candidate(cls, candidate: Candidate, limit: int = DEFAULT_LIMIT) -> "ArtworkQuery":
        return cls(location=candidate.location, date_range=candidate.date_range, limit=limit)

    @property
    def year(self) -> int | None:
        """Representative year sent to providers (the range midpoint)."""
        return self.date_range.midpoint if self.date_range is not None else None

    def cache_key(self) -> str:
        """Location, representative year, and limit all change the result set."""
        year = "" if self.year is None else str(self.year)
        return f"{canonical_location(self.location)}|{year}|{self.limit}"
