# ABOUTME: Artworks package: providers, caching, and resolution of candidates to artworks.
# ABOUTME: Exports the ArtworkRecord value object, the provider protocol, and the resolver.

from artref.artworks.cache import ProviderCache
from artref.artworks.http import ArtrefHttpClient, ProviderFetchError
from artref.artworks.provider import ArtProvider
from artref.artworks.resolver import ArtworkResolver, ResolutionResult, default_providers
from artref.artworks.types import ArtworkQuery, ArtworkRecord

__all__ = [
    "ArtProvider",
    "ArtrefHttpClient",
    "ArtworkQuery",
    "ArtworkRecord",
    "ArtworkResolver",
    "ProviderCache",
    "ProviderFetchError",
    "ResolutionResult",
    "default_providers",
]
