"""Locate the newest graphic packs archive on the release page."""

from __future__ import annotations

import http.client
import posixpath
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Optional

from gfxpack_updater.common.config import UpdaterSettings
from gfxpack_updater.common.constants import ASSET_PATH_PATTERN, LATEST_RELEASE_SUFFIX
from gfxpack_updater.common.errors import NetworkError, NotFoundError
from gfxpack_updater.common.logging_config import get_logger


@dataclass(frozen=True)
class ReleaseAsset:
    """Path of a release archive relative to the releases URL."""

    relative_path: str

    @property
    def filename(self) -> str:
        return posixpath.basename(self.relative_path)

    def download_url(self, releases_url: str) -> str:
        return releases_url.rstrip("/") + self.relative_path


def find_asset_path(text: str) -> str:
    """Return the first archive path linked in the page text."""
    match = ASSET_PATH_PATTERN.search(text)
    if match is None:
        raise NotFoundError("search key no matches")
    return match.group(0)


def fetch_index_page(url: str, timeout: Optional[float] = None) -> str:
    """Fetch the release page and return its body as text."""
    kwargs = {} if timeout is None else {"timeout": timeout}
    try:
        with urllib.request.urlopen(url, **kwargs) as response:  # noqa: S310
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise NetworkError(f"{url} returned HTTP {exc.code}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise NetworkError(f"{url}: {exc}") from exc
    return body.decode("utf-8", errors="replace")


def locate_latest_asset(settings: Optional[UpdaterSettings] = None) -> ReleaseAsset:
    """Fetch the latest release page and find its graphic packs archive."""
    settings = settings or UpdaterSettings()
    logger = get_logger(__name__)
    url = settings.releases_url() + LATEST_RELEASE_SUFFIX
    text = fetch_index_page(url, timeout=settings.http_timeout())
    asset = ReleaseAsset(find_asset_path(text))
    logger.debug("Found release asset %s on %s", asset.relative_path, url)
    return asset
