# ABOUTME: Runtime configuration for artref: scan limits, cache TTL, provider padding, NLP model.
# ABOUTME: Defaults can be overridden through ARTREF_* environment variables.

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from artref.artworks.cache import DEFAULT_TTL
from artref.artworks.credentials import DEFAULT_CREDENTIALS_PATH
from artref.artworks.types import DEFAULT_LIMIT
from artref.extraction.recognizers import DEFAULT_MIN_YEAR
from artref.extraction.extractor import DEFAULT_SCAN_LIMIT

logger = logging.getLogger(__name__)

ENV_PREFIX = "ARTREF_"


@dataclass(frozen=True)
class ArtrefConfig:
    """Settings shared by the extraction, resolution, and CLI layers."""

    scan_limit: int = DEFAULT_SCAN_LIMIT
    per_provider_limit: int = DEFAULT_LIMIT
    cache_ttl: float = DEFAULT_TTL
    year_padding: int = 20
    min_year: int = DEFAULT_MIN_YEAR
    spacy_model: str = "en_core_web_sm"
    credentials_path: Path = DEFAULT_CREDENTIALS_PATH

    def __post_init__(self) -> None:
        if self.scan_limit < 1:
            raise ValueError(f"scan_limit must be positive, got {self.scan_limit}")
        if self.per_provider_limit < 1:
            raise ValueError(
                f"per_provider_limit must be positive, got {self.per_provider_limit}"
            )
        if self.cache_ttl < 0:
            raise ValueError(f"cache_ttl must not be negative, got {self.cache_ttl}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ArtrefConfig":
        """Build a config from defaults plus ARTREF_<FIELD> overrides.

        Values that fail to parse, or parse but fail validation (for example
        ARTREF_SCAN_LIMIT=0), are logged and the default is kept.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            try:
                value = _coerce(f.name, raw)
                cls(**{f.name: value})
            except ValueError as exc:
                logger.warning(
                    "config: ignoring invalid %s%s=%r: %s", ENV_PREFIX, f.name.upper(), raw, exc
                )
                continue
            overrides[f.name] = value
        return cls(**overrides)

    def with_overrides(self, **changes: object) -> "ArtrefConfig":
        """Return a copy with the non-None values in `changes` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


_INT_FIELDS = {"scan_limit", "per_provider_limit", "year_padding", "min_year"}


def _coerce(name: str, raw: str) -> object:
    if name in _INT_FIELDS:
        return int(raw)
    if name == "cache_ttl":
        return float(raw)
    if name == "credentials_path":
        return Path(raw).expanduser()
    return raw
