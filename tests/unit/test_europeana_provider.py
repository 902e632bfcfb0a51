# ABOUTME: Unit tests for EuropeanaProvider and its query relaxation ladder.
# ABOUTME: Uses a scripted fake async HTTP client to verify each attempt's filters.

from typing import Any

import pytest

from artref.artworks.europeana import RELAXATION_STEPS, EuropeanaProvider
from artref.artworks.http import ProviderFetchError
from artref.artworks.types import ArtworkQuery
from artref.extraction.types import DateRange
from tests.fixtures.provider_responses import EUROPEANA_EMPTY_RESPONSE, EUROPEANA_SEARCH_RESPONSE

PARIS_QUERY = ArtworkQuery("Paris, France", DateRange.single(1889), limit=4)


class ScriptedHttpClient:
    """Fake async HTTP client that answers successive requests from a script."""

    def __init__(self, script: list[Any]) -> None:
        self._script = list(script)
        self.requests: list[tuple[str, list[tuple[str, str]]]] = []

    async def get(self, url: str, params: Any = None) -> Any:
        self.requests.append((url, list(params or [])))
        response = self._script.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def filters(self, index: int) -> list[str]:
        return [value for key, value in self.requests[index][1] if key == "qf"]


class TestEuropeanaParams:
    """Tests for Europeana request parameters."""

    def test_first_step_has_spatial_and_year(self) -> None:
        """The strictest step applies both filters."""
        provider = EuropeanaProvider(ScriptedHttpClient([]), "secret")
        params = provider.search_params(PARIS_QUERY, RELAXATION_STEPS[0])
        assert ("wskey", "secret") in params
        assert ("query", "Paris") in params
        assert ("rows", "4") in params
        assert ("media", "true") in params
        assert ("profile", "rich") in params
        assert [v for k, v in params if k == "qf"] == [
            "TYPE:IMAGE",
            "spatial:Paris",
            "YEAR:[1869 TO 1909]",
        ]

    def test_relaxed_steps_drop_filters(self) -> None:
        """Later steps drop the spatial filter, then the year filter."""
        provider = EuropeanaProvider(ScriptedHttpClient([]), "secret")
        second = provider.search_params(PARIS_QUERY, RELAXATION_STEPS[1])
        third = provider.search_params(PARIS_QUERY, RELAXATION_STEPS[2])
        assert [v for k, v in second if k == "qf"] == ["TYPE:IMAGE", "YEAR:[1869 TO 1909]"]
        assert [v for k, v in third if k == "qf"] == ["TYPE:IMAGE"]

    def test_unlikely_place_gets_no_spatial_filter(self) -> None:
        """Locations with digits are not used as spatial filters."""
        provider = EuropeanaProvider(ScriptedHttpClient([]), "secret")
        query = ArtworkQuery("Route 66", DateRange.single(1950))
        params = provider.search_params(query, RELAXATION_STEPS[0])
        assert not any(v.startswith("spatial:") for k, v in params if k == "qf")

    def test_year_required(self) -> None:
        """An undated query cannot be sent."""
        provider = EuropeanaProvider(ScriptedHttpClient([]), "secret")
        with pytest.raises(ProviderFetchError, match="requires a year"):
            provider.search_params(ArtworkQuery("Paris"), RELAXATION_STEPS[0])

    def test_year_filter_never_negative(self) -> None:
        """The lower bound of the year window stops at zero."""
        provider = EuropeanaProvider(ScriptedHttpClient([]), "secret")
        assert provider.year_filter(10) == "YEAR:[0 TO 30]"


class TestEuropeanaRelaxation:
    """Tests for the relaxation ladder."""

    @pytest.mark.asyncio
    async def test_first_step_success_stops(self) -> None:
        """Records on the first attempt skip the other steps."""
        client = ScriptedHttpClient([EUROPEANA_SEARCH_RESPONSE])
        records = await EuropeanaProvider(client, "k").search(PARIS_QUERY)
        assert len(records) == 2
        assert len(client.requests) == 1

    @pytest.mark.asyncio
    async def test_date_only_success_stops_relaxation(self) -> None:
        """Empty spatial+year then non-empty year-only returns the year-only set."""
        client = ScriptedHttpClient([EUROPEANA_EMPTY_RESPONSE, EUROPEANA_SEARCH_RESPONSE])
        records = await EuropeanaProvider(client, "k").search(PARIS_QUERY)
        assert [r.id for r in records] == ["eu-/9200579/abc123", "eu-/9200579/def456"]
        assert len(client.requests) == 2
        assert client.filters(1) == ["TYPE:IMAGE", "YEAR:[1869 TO 1909]"]

    @pytest.mark.asyncio
    async def test_query_only_last_resort(self) -> None:
        """The free-text attempt runs only after both filtered attempts are empty."""
        client = ScriptedHttpClient(
            [EUROPEANA_EMPTY_RESPONSE, EUROPEANA_EMPTY_RESPONSE, EUROPEANA_SEARCH_RESPONSE]
        )
        records = await EuropeanaProvider(client, "k").search(PARIS_QUERY)
        assert len(records) == 2
        assert client.filters(2) == ["TYPE:IMAGE"]

    @pytest.mark.asyncio
    async def test_all_empty(self) -> None:
        """Three empty attempts give an empty result, not an error."""
        client = ScriptedHttpClient([EUROPEANA_EMPTY_RESPONSE] * 3)
        assert await EuropeanaProvider(client, "k").search(PARIS_QUERY) == []
        assert len(client.requests) == 3

    @pytest.mark.asyncio
    async def test_failed_attempt_falls_through(self) -> None:
        """A transport failure moves on to the next step."""
        client = ScriptedHttpClient([ProviderFetchError("HTTP 502"), EUROPEANA_SEARCH_RESPONSE])
        records = await EuropeanaProvider(client, "k").search(PARIS_QUERY)
        assert len(records) == 2

    @pytest.mark.asyncio
    async def test_every_attempt_failed(self) -> None:
        """If no attempt got an answer the provider fails."""
        client = ScriptedHttpClient([ProviderFetchError("HTTP 502")] * 3)
        with pytest.raises(ProviderFetchError, match="Every Europeana attempt failed"):
            await EuropeanaProvider(client, "k").search(PARIS_QUERY)
