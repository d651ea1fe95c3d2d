"""Configuration resolution for the graphic packs updater.

Settings come from the environment with fixed defaults; the CLI can override
individual values. The pack selection filter is not configurable.
"""

import os
from typing import Mapping, Optional, Tuple

from .constants import (
    DEFAULT_PACK_FILTER,
    DOWNLOAD_DIR as DEFAULT_DOWNLOAD_DIR,
    EXTRACT_DIR as DEFAULT_EXTRACT_DIR,
    RELEASES_URL as DEFAULT_RELEASES_URL,
)

_TRUTHY = {"1", "true", "yes", "on"}


class UpdaterSettings:
    """Resolve environment-backed configuration for the updater."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, object]] = None,
    ) -> None:
        self._environ = os.environ if environ is None else environ
        self._overrides = dict(overrides or {})

    def with_overrides(self, **overrides: object) -> 'UpdaterSettings':
        """Return a copy where the given non-None values take precedence."""
        merged = dict(self._overrides)
        merged.update({key: value for key, value in overrides.items() if value is not None})
        return UpdaterSettings(self._environ, merged)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._environ.get(key, default)

    def releases_url(self) -> str:
        if "releases_url" in self._overrides:
            return str(self._overrides["releases_url"]).rstrip("/")
        return (self.get("GFXPACK_RELEASES_URL") or DEFAULT_RELEASES_URL).rstrip("/")

    def extract_dir(self) -> str:
        if "extract_dir" in self._overrides:
            return str(self._overrides["extract_dir"])
        return self.get("GFXPACK_EXTRACT_DIR") or DEFAULT_EXTRACT_DIR

    def download_dir(self) -> str:
        if "download_dir" in self._overrides:
            return str(self._overrides["download_dir"])
        return self.get("GFXPACK_DOWNLOAD_DIR") or DEFAULT_DOWNLOAD_DIR

    def http_timeout(self) -> Optional[float]:
        """Socket timeout in seconds; None keeps the platform default."""
        if "http_timeout" in self._overrides:
            return float(self._overrides["http_timeout"])  # type: ignore[arg-type]
        raw = (self.get("GFXPACK_HTTP_TIMEOUT") or "").strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        return value if value > 0 else None

    def prompt_on_exit(self) -> bool:
        if "prompt_on_exit" in self._overrides:
            return bool(self._overrides["prompt_on_exit"])
        return (self.get("GFXPACK_NO_PROMPT") or "").strip().lower() not in _TRUTHY

    def pack_filter(self) -> Tuple[str, ...]:
        return DEFAULT_PACK_FILTER
