# ABOUTME: Met Museum collection provider implementation.
# ABOUTME: Searches the curated Met collection within a padded year window and fetches object details.

import asyncio
import logging

from artref.artworks.http import HttpClient, ProviderFetchError
from artref.artworks.parsers import parse_met_object, parse_met_search
from artref.artworks.types import ArtworkQuery, ArtworkRecord

logger = logging.getLogger(__name__)

_MET_BASE = "https://collectionapi.metmuseum.org/public/collection/v1"
DEFAULT_YEAR_PADDING = 20

# Date window used when the query carries no year.
_OPEN_BEGIN = 0
_OPEN_END = 2100


class MetMuseumProvider:
    """Artwork provider backed by the Met Museum collection API.

    Issues a single search request with a ± padding window around the
    query's representative year, then fetches details for the first
    `limit` object ids concurrently. Individual detail failures are skipped.
    """

    def __init__(self, http_client: HttpClient, *, year_padding: int = DEFAULT_YEAR_PADDING) -> None:
        self._http = http_client
        self._year_padding = year_padding

    @property
    def name(self) -> str:
        return "met"

    def search_params(self, query: ArtworkQuery) -> dict[str, str]:
        year = query.year
        begin = year - self._year_padding if year is not None else _OPEN_BEGIN
        end = year + self._year_padding if year is not None else _OPEN_END
        return {
            "hasImages": "true",
            "q": query.location or "",
            "dateBegin": str(begin),
            "dateEnd": str(end),
        }

    async def search(self, query: ArtworkQuery) -> list[ArtworkRecord]:
        """Search the Met and return up to `query.limit` records with images.

        Raises:
            ProviderFetchError: If the search request fails or is malformed.
        """
        data = await self._http.get(f"{_MET_BASE}/search", params=self.search_params(query))
        try:
            object_ids = parse_met_search(data)
        except ValueError as exc:
            raise ProviderFetchError(f"Met search failed for {query.location!r}: {exc}") from exc

        object_ids = object_ids[: query.limit]
        details = await asyncio.gather(*(self._fetch_object(oid) for oid in object_ids))
        records = [record for record in details if record is not None]
        logger.info(
            "met: %d record(s) from %d id(s) for %s", len(records), len(object_ids), query.cache_key()
        )
        return records

    async def _fetch_object(self, object_id: int) -> ArtworkRecord | None:
        try:
            data = await self._http.get(f"{_MET_BASE}/objects/{object_id}")
        except ProviderFetchError as exc:
            logger.debug("met: skipping object %s: %s", object_id, exc)
            return None
        return parse_met_object(data)
