# ABOUTME: Builders for the NLP capabilities, extractor, and artwork resolver used by CLI commands.
# ABOUTME: Kept in one module so commands share wiring and tests can substitute fakes.

from artref.artworks.cache import ProviderCache
from artref.artworks.credentials import default_credentials
from artref.artworks.http import HttpClient
from artref.artworks.resolver import ArtworkResolver, default_providers
from artref.config import ArtrefConfig
from artref.extraction.dates import DateRangeNormalizer
from artref.extraction.extractor import CandidateExtractor
from artref.extraction.recognizers import TextCapabilities, load_capabilities


def load_text_capabilities(config: ArtrefConfig) -> TextCapabilities:
    """Load the spaCy-backed capabilities named by the config."""
    return load_capabilities(config.spacy_model, min_year=config.min_year)


def create_extractor(config: ArtrefConfig) -> CandidateExtractor:
    capabilities = load_text_capabilities(config)
    normalizer = DateRangeNormalizer.from_capabilities(capabilities, min_year=config.min_year)
    return CandidateExtractor(capabilities, normalizer, scan_limit=config.scan_limit)


def create_resolver(config: ArtrefConfig, http_client: HttpClient) -> ArtworkResolver:
    """Create the resolver with every provider that has the credentials it needs."""
    providers = default_providers(
        http_client,
        default_credentials(config.credentials_path),
        year_padding=config.year_padding,
    )
    return ArtworkResolver(
        providers,
        ProviderCache(ttl=config.cache_ttl),
        default_limit=config.per_provider_limit,
    )
