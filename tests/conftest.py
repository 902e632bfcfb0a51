# ABOUTME: Shared pytest fixtures for artref tests.
# ABOUTME: Provides fake text capabilities, a canned artwork record, and scriptable fake providers.

import pytest

from artref.artworks.http import ProviderFetchError
from artref.artworks.types import ArtworkRecord
from artref.extraction.recognizers import TextCapabilities
from tests.fixtures.fakes import FakeProvider, make_capabilities, make_record


@pytest.fixture
def capabilities() -> TextCapabilities:
    """Deterministic capabilities without an NLP model."""
    return make_capabilities()


@pytest.fixture
def paris_record() -> ArtworkRecord:
    return make_record()


@pytest.fixture
def met_provider(paris_record: ArtworkRecord) -> FakeProvider:
    return FakeProvider("met", [paris_record])


@pytest.fixture
def failing_provider() -> FakeProvider:
    return FakeProvider("europeana", error=ProviderFetchError("HTTP 503 from europeana"))
