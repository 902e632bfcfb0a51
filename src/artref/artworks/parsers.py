# ABOUTME: Parsing functions for Met Museum and Europeana API JSON responses.
# ABOUTME: Converts provider-specific record shapes into ArtworkRecord instances.

import re
from typing import Any

from artref.artworks.types import ArtworkRecord

MET_SOURCE = "Met Museum"
EUROPEANA_SOURCE = "Europeana"

_WHITESPACE_RE = re.compile(r"\s+")
_DIGIT_RE = re.compile(r"\d")
_MAX_PLACE_WORDS = 5


def _first(value: Any) -> str | None:
    """Europeana wraps most fields in lists; return the first non-empty entry."""
    if isinstance(value, list):
        for item in value:
            if item:
                return str(item)
        return None
    if value:
        return str(value)
    return None


def parse_met_search(data: Any) -> list[int]:
    """Extract object ids from a Met search response.

    The Met returns {"total": 0, "objectIDs": null} for an empty search, which
    is an empty result rather than a failure.

    Raises:
        ValueError: If the response is not a search payload at all.
    """
    if not isinstance(data, dict) or ("objectIDs" not in data and "total" not in data):
        raise ValueError("Met search response has no objectIDs")
    ids = data.get("objectIDs") or []
    return [int(object_id) for object_id in ids]


def parse_met_object(data: Any) -> ArtworkRecord | None:
    """Map a Met object detail record. Objects without a small image are skipped."""
    if not isinstance(data, dict) or not data.get("primaryImageSmall"):
        return None

    thumb = data["primaryImageSmall"]
    location = data.get("repository") or data.get("GalleryNumber") or data.get("department") or ""
    return ArtworkRecord(
        id=f"met-{data.get('objectID') or data.get('id')}",
        title=data.get("title") or "Untitled",
        artist=data.get("artistDisplayName") or "",
        date_label=data.get("objectDate") or "",
        thumbnail_url=thumb,
        full_image_url=data.get("primaryImage") or thumb,
        source=MET_SOURCE,
        location_label=str(location),
    )


def parse_europeana_item(item: Any) -> ArtworkRecord | None:
    """Map a Europeana search item. Items without a preview image are skipped."""
    if not isinstance(item, dict):
        return None
    thumb = _first(item.get("edmPreview"))
    if not thumb:
        return None

    data_provider = _first(item.get("dataProvider"))
    title = _first(item.get("title")) or data_provider or "Untitled"
    artist = _first(item.get("dcCreator")) or data_provider or ""
    date = _first(item.get("year")) or _first(item.get("edmTimespanLabel")) or ""
    location = data_provider or _first(item.get("provider")) or _first(item.get("country")) or ""

    return ArtworkRecord(
        id=f"eu-{item.get('id') or item.get('guid') or thumb}",
        title=title,
        artist=artist,
        date_label=date,
        thumbnail_url=thumb,
        full_image_url=_first(item.get("edmIsShownBy")) or thumb,
        source=EUROPEANA_SOURCE,
        location_label=location,
    )


def parse_europeana_search(data: Any) -> list[ArtworkRecord]:
    """Map every usable item in a Europeana search response."""
    if not isinstance(data, dict):
        return []
    records = [parse_europeana_item(item) for item in data.get("items") or []]
    return [record for record in records if record is not None]


def normalize_location(raw: str) -> str:
    """First comma-delimited segment of a place, whitespace-collapsed."""
    if not raw:
        return ""
    first = raw.split(",")[0].strip()
    return _WHITESPACE_RE.sub(" ", first)


def is_likely_place(text: str) -> bool:
    """Heuristic: short and digit-free text can be used as a spatial filter."""
    if not text or _DIGIT_RE.search(text):
        return False
    return len(text.split()) <= _MAX_PLACE_WORDS
