# ABOUTME: ArtProvider protocol defining the contract for art-collection sources.
# ABOUTME: Any external collection API (Met Museum, Europeana, etc.) implements this.

from typing import Protocol, runtime_checkable

from artref.artworks.types import ArtworkQuery, ArtworkRecord


@runtime_checkable
class ArtProvider(Protocol):
    """Protocol for artwork lookup services.

    `search` returns the provider's records for a query, or raises
    ProviderFetchError when the provider could not be reached.
    """

    @property
    def name(self) -> str: ...

    async def search(self, query: ArtworkQuery) -> list[ArtworkRecord]: ...
