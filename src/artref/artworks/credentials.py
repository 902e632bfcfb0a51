# ABOUTME: Read-only credential lookup for provider API keys.
# ABOUTME: Reads keys from environment variables or a JSON credentials file, first hit wins.

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

EUROPEANA_API_KEY = "europeanaApiKey"

DEFAULT_CREDENTIALS_PATH = Path.home() / ".artref" / "credentials.json"

# Credential name -> environment variable.
_ENV_VARS: dict[str, str] = {
    EUROPEANA_API_KEY: "EUROPEANA_API_KEY",
}


@runtime_checkable
class CredentialStore(Protocol):
    """Read-only lookup of provider credentials by name."""

    def get(self, name: str) -> str | None: ...


class EnvCredentialStore:
    """Credentials from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> str | None:
        var = _ENV_VARS.get(name)
        if var is None:
            return None
        value = self._environ.get(var, "").strip()
        return value or None


class JsonCredentialStore:
    """Credentials from a JSON object file like {"europeanaApiKey": "..."}.

    The file is read once on first lookup. A missing file means no keys;
    an unreadable one is logged and treated the same way.
    """

    def __init__(self, path: Path = DEFAULT_CREDENTIALS_PATH) -> None:
        self._path = path
        self._values: dict[str, str] | None = None

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read credentials from %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring credentials file %s: not a JSON object", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}

    def get(self, name: str) -> str | None:
        if self._values is None:
            self._values = self._load()
        value = self._values.get(name, "").strip()
        return value or None


class ChainedCredentialStore:
    """Ask each store in order and return the first non-empty value."""

    def __init__(self, *stores: CredentialStore) -> None:
        self._stores = stores

    def get(self, name: str) -> str | None:
        for store in self._stores:
            value = store.get(name)
            if value:
                return value
        return None


def default_credentials(path: Path = DEFAULT_CREDENTIALS_PATH) -> CredentialStore:
    """Environment first, then the credentials file."""
    return ChainedCredentialStore(EnvCredentialStore(), JsonCredentialStore(path))
