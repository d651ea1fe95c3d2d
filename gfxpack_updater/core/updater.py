"""
Update workflow for the graphic packs directory.

Runs the release lookup, the local up-to-date check, the download and the
extraction in sequence. The first failure ends the run; nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from gfxpack_updater.common.config import UpdaterSettings
from gfxpack_updater.common.constants import LATEST_RELEASE_SUFFIX
from gfxpack_updater.common.errors import NetworkError, UpdaterError, UpdaterIOError
from gfxpack_updater.common.logging_config import get_logger
from gfxpack_updater.core import fetcher, locator
from gfxpack_updater.core.extractor import SafeExtractor


class UpdateState(Enum):
    IDLE = "idle"
    LOCATING = "locating"
    CHECKING_LOCAL = "checking-local"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"


# Message prefix shown when a stage fails.
_FAILURE_PREFIXES = {
    UpdateState.LOCATING: "could not find path",
    UpdateState.CHECKING_LOCAL: "could not check local file",
    UpdateState.DOWNLOADING: "could not download file",
    UpdateState.EXTRACTING: "extraction failed",
}

UP_TO_DATE_MESSAGE = "your graphic-packs is up-to-date!"
DONE_MESSAGE = "update done!"


@dataclass
class UpdateResult:
    """Outcome of one updater run."""

    state: UpdateState
    message: str
    asset: Optional[locator.ReleaseAsset] = None
    download: Optional[fetcher.DownloadResult] = None
    extracted: List[Path] = field(default_factory=list)
    error: Optional[UpdaterError] = None

    @property
    def ok(self) -> bool:
        return self.state is UpdateState.DONE

    @property
    def up_to_date(self) -> bool:
        return self.ok and self.download is None


class GraphicPacksUpdater:
    """Check for, download and extract the newest graphic packs release."""

    def __init__(
        self,
        settings: Optional[UpdaterSettings] = None,
        output: Callable[..., None] = print,
    ) -> None:
        self.settings = settings or UpdaterSettings()
        self.state = UpdateState.IDLE
        self._output = output
        self._log = get_logger(__name__)

    def _transition(self, state: UpdateState) -> None:
        self._log.debug("State %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> UpdateResult:
        """Run the whole update once and return its outcome."""
        result = UpdateResult(state=self.state, message="")
        try:
            self._run(result)
        except UpdaterError as exc:
            prefix = self._failure_prefix(exc)
            self._transition(UpdateState.FAILED)
            result.error = exc
            result.message = f"{prefix}: {exc}"
            self._log.debug("Update failed", exc_info=True)
        result.state = self.state
        return result

    def _failure_prefix(self, exc: UpdaterError) -> str:
        if self.state is UpdateState.LOCATING and isinstance(exc, NetworkError):
            return "could not load url"
        return _FAILURE_PREFIXES.get(self.state, "update failed")

    def _run(self, result: UpdateResult) -> None:
        settings = self.settings

        self._transition(UpdateState.LOCATING)
        self._output("loading", settings.releases_url() + LATEST_RELEASE_SUFFIX)
        asset = locator.locate_latest_asset(settings)
        result.asset = asset

        self._transition(UpdateState.CHECKING_LOCAL)
        download_dir = Path(settings.download_dir())
        if (download_dir / asset.filename).exists():
            self._transition(UpdateState.DONE)
            result.message = f"{UP_TO_DATE_MESSAGE} {asset.filename}"
            return
        try:
            download_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise UpdaterIOError(f"could not create {download_dir}: {exc}") from exc

        self._transition(UpdateState.DOWNLOADING)
        url = asset.download_url(settings.releases_url())
        self._output("downloading", url)
        download = fetcher.download_file(url, download_dir, timeout=settings.http_timeout())
        result.download = download
        self._output("downloaded", download.filename, download.size // 1000, "KB")

        self._transition(UpdateState.EXTRACTING)
        extract_dir = settings.extract_dir()
        self._output("extracting", download.filename, "to", extract_dir)
        extractor = SafeExtractor(extract_dir, settings.pack_filter())
        result.extracted = extractor.extract(download.path)

        self._transition(UpdateState.DONE)
        result.message = DONE_MESSAGE
