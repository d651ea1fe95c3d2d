"""HTTP download of release archives."""

from __future__ import annotations

import http.client
import os
import posixpath
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from gfxpack_updater.common.constants import DOWNLOAD_CHUNK_SIZE, PARTIAL_SUFFIX
from gfxpack_updater.common.errors import NetworkError, UpdaterIOError
from gfxpack_updater.common.logging_config import get_logger


@dataclass(frozen=True)
class DownloadResult:
    """A finished download."""

    filename: str
    path: Path
    size: int


def filename_from_url(url: str) -> str:
    """Final path segment of the URL."""
    name = posixpath.basename(urllib.parse.urlsplit(url).path)
    if not name:
        raise NetworkError(f"{url} does not name a file")
    return urllib.parse.unquote(name)


def download_file(
    url: str,
    directory: Union[str, Path] = ".",
    timeout: Optional[float] = None,
) -> DownloadResult:
    """Stream the body of ``url`` into ``directory``.

    The body goes to a ``.part`` file that is renamed once complete, so an
    interrupted download never leaves a file under the final name.
    """
    logger = get_logger(__name__)
    filename = filename_from_url(url)
    destination = Path(directory) / filename
    partial = destination.with_name(filename + PARTIAL_SUFFIX)
    kwargs = {} if timeout is None else {"timeout": timeout}

    try:
        with urllib.request.urlopen(url, **kwargs) as response:  # noqa: S310
            size = _write_body(response, partial)
    except urllib.error.HTTPError as exc:
        _discard(partial)
        raise NetworkError(f"{url} returned HTTP {exc.code}") from exc
    except (urllib.error.URLError, http.client.HTTPException) as exc:
        _discard(partial)
        raise NetworkError(f"{url}: {exc}") from exc
    except UpdaterIOError:
        _discard(partial)
        raise
    except OSError as exc:
        _discard(partial)
        raise NetworkError(f"{url}: {exc}") from exc

    try:
        os.replace(partial, destination)
    except OSError as exc:
        _discard(partial)
        raise UpdaterIOError(f"could not move {partial} to {destination}: {exc}") from exc

    logger.info("downloaded %s %d KB", filename, size // 1000)
    return DownloadResult(filename=filename, path=destination, size=size)


def _write_body(response, partial: Path) -> int:
    """Copy the response body into ``partial`` and return the byte count."""
    try:
        out_file = partial.open("wb")
    except OSError as exc:
        raise UpdaterIOError(f"could not create {partial}: {exc}") from exc

    size = 0
    with out_file:
        while True:
            chunk = response.read(DOWNLOAD_CHUNK_SIZE)
            if not chunk:
                break
            try:
                out_file.write(chunk)
            except OSError as exc:
                raise UpdaterIOError(f"could not write {partial}: {exc}") from exc
            size += len(chunk)
    return size


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        get_logger(__name__).debug("Could not remove %s: %s", path, exc)
