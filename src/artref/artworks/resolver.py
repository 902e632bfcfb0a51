# ABOUTME: Artwork resolution: fans a candidate out to every provider concurrently.
# ABOUTME: Aggregates partial successes in registration order through the shared coalescing cache.

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from artref.artworks.cache import ProviderCache
from artref.artworks.credentials import EUROPEANA_API_KEY, CredentialStore
from artref.artworks.europeana import EuropeanaProvider
from artref.artworks.http import HttpClient
from artref.artworks.met import MetMuseumProvider
from artref.artworks.provider import ArtProvider
from artref.artworks.types import DEFAULT_LIMIT, ArtworkQuery, ArtworkRecord
from artref.extraction.types import Candidate

logger = logging.getLogger(__name__)


@dataclass
class ResolutionResult:
    """Outcome of resolving one candidate across all providers."""

    records: list[ArtworkRecord] = field(default_factory=list)
    providers: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        """True when nothing was found because every provider failed."""
        return not self.records and bool(self.providers) and len(self.failures) == len(
            self.providers
        )


class ArtworkResolver:
    """Resolve candidates to artworks across several providers.

    Providers run concurrently and the resolver waits for every one of them
    to settle, so one slow provider delays the whole result. A failing
    provider contributes nothing and never aborts its siblings; `resolve`
    itself never raises for provider failures.

    The resolver owns its ProviderCache; one resolver (and cache) lives for
    one scan session.
    """

    def __init__(
        self,
        providers: Sequence[ArtProvider],
        cache: ProviderCache | None = None,
        *,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self._providers = list(providers)
        self._cache = cache if cache is not None else ProviderCache()
        self._default_limit = default_limit

    @property
    def providers(self) -> list[ArtProvider]:
        return list(self._providers)

    @property
    def cache(self) -> ProviderCache:
        return self._cache

    def reset_cache(self) -> None:
        """Discard cached results, e.g. when the document is re-scanned."""
        self._cache.clear()

    async def resolve(
        self, candidate: Candidate, per_provider_limit: int | None = None
    ) -> list[ArtworkRecord]:
        """Return the union of every provider's records for a candidate."""
        result = await self.resolve_detailed(candidate, per_provider_limit)
        return result.records

    async def resolve_detailed(
        self, candidate: Candidate, per_provider_limit: int | None = None
    ) -> ResolutionResult:
        """Resolve a candidate and report which providers failed."""
        limit = per_provider_limit or self._default_limit
        query = ArtworkQuery.for_candidate(candidate, limit)
        result = ResolutionResult(providers=[p.name for p in self._providers])
        if not self._providers:
            return result

        outcomes = await asyncio.gather(
            *(self._fetch(provider, query) for provider in self._providers),
            return_exceptions=True,
        )

        for provider, outcome in zip(self._providers, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "resolve: provider %s failed for %s: %s", provider.name, candidate.key, outcome
                )
                result.failures[provider.name] = str(outcome) or type(outcome).__name__
                continue
            logger.debug(
                "resolve: provider %s returned %d record(s) for %s",
                provider.name,
                len(outcome),
                candidate.key,
            )
            result.records.extend(outcome)

        return result

    async def _fetch(self, provider: ArtProvider, query: ArtworkQuery) -> list[ArtworkRecord]:
        key = f"{provider.name}|{query.cache_key()}"
        return await self._cache.get_or_fetch(key, lambda: provider.search(query))


def default_providers(
    http_client: HttpClient,
    credentials: CredentialStore,
    *,
    year_padding: int = 20,
) -> list[ArtProvider]:
    """Build the provider list in registration order.

    Europeana needs an API key; without one it is left out of the fan-out.
    """
    providers: list[ArtProvider] = [MetMuseumProvider(http_client, year_padding=year_padding)]

    europeana_key = credentials.get(EUROPEANA_API_KEY)
    if europeana_key:
        providers.append(
            EuropeanaProvider(http_client, europeana_key, year_padding=year_padding)
        )
    else:
        logger.info("resolve: Europeana disabled, no API key configured")

    return providers
