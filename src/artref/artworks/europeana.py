# ABOUTME: Europeana collection provider implementation with progressive query relaxation.
# ABOUTME: Retries a search without the spatial filter, then without the year filter, until results appear.

import logging
from dataclasses import dataclass

from artref.artworks.http import HttpClient, ProviderFetchError
from artref.artworks.parsers import is_likely_place, normalize_location, parse_europeana_search
from artref.artworks.types import ArtworkQuery, ArtworkRecord

logger = logging.getLogger(__name__)

_EUROPEANA_SEARCH_URL = "https://api.europeana.eu/record/v2/search.json"
DEFAULT_YEAR_PADDING = 20


@dataclass(frozen=True)
class RelaxationStep:
    """One search attempt: which optional filters it applies."""

    label: str
    use_spatial: bool
    use_year: bool


RELAXATION_STEPS: tuple[RelaxationStep, ...] = (
    RelaxationStep("spatial+year", use_spatial=True, use_year=True),
    RelaxationStep("no-spatial+year", use_spatial=False, use_year=True),
    RelaxationStep("query-only", use_spatial=False, use_year=False),
)


class EuropeanaProvider:
    """Artwork provider backed by the Europeana search API.

    The broader collection gets a relaxation ladder: spatial + year filters,
    then year only, then the free-text query alone. Each step is a separate
    request and the first step with any usable record wins.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str,
        *,
        year_padding: int = DEFAULT_YEAR_PADDING,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._year_padding = year_padding

    @property
    def name(self) -> str:
        return "europeana"

    def year_filter(self, year: int) -> str:
        return f"YEAR:[{max(0, year - self._year_padding)} TO {year + self._year_padding}]"

    def search_params(
        self, query: ArtworkQuery, step: RelaxationStep
    ) -> list[tuple[str, str]]:
        """Build query parameters for one relaxation step (repeated `qf` keys)."""
        if query.year is None:
            raise ProviderFetchError("Europeana search requires a year")

        location = normalize_location(query.location)
        params = [
            ("wskey", self._api_key),
            ("query", location or "*"),
            ("media", "true"),
            ("profile", "rich"),
            ("rows", str(query.limit)),
            ("qf", "TYPE:IMAGE"),
        ]
        if step.use_spatial and is_likely_place(location):
            params.append(("qf", f"spatial:{location}"))
        if step.use_year:
            params.append(("qf", self.year_filter(query.year)))
        return params

    async def search(self, query: ArtworkQuery) -> list[ArtworkRecord]:
        """Walk the relaxation ladder until a step yields records.

        A step that fails at transport level is logged and the next step is
        tried. Returns an empty list when every answered step was empty.

        Raises:
            ProviderFetchError: If the query has no year, or every step failed.
        """
        failed_steps = 0
        for step in RELAXATION_STEPS:
            params = self.search_params(query, step)
            try:
                data = await self._http.get(_EUROPEANA_SEARCH_URL, params=params)
            except ProviderFetchError as exc:
                logger.warning(
                    "europeana: %s attempt failed for %s: %s", step.label, query.cache_key(), exc
                )
                failed_steps += 1
                continue

            records = parse_europeana_search(data)
            logger.info(
                "europeana: %s attempt returned %d record(s) for %s",
                step.label,
                len(records),
                query.cache_key(),
            )
            if records:
                return records

        if failed_steps == len(RELAXATION_STEPS):
            raise ProviderFetchError(f"Every Europeana attempt failed for {query.location!r}")
        return []
