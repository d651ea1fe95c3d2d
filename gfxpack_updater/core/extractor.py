"""Safe extraction of graphic pack archives.

Every entry is resolved against the destination root before anything is
written for it. An entry that would land outside the root aborts the whole
extraction with :class:`PathTraversalError`; entries already written stay
on disk.
"""

from __future__ import annotations

import os
import shutil
import zipfile
import zlib
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from gfxpack_updater.common.constants import DEFAULT_DIR_MODE, DEFAULT_PACK_FILTER
from gfxpack_updater.common.errors import PathTraversalError, UpdaterIOError
from gfxpack_updater.common.logging_config import get_logger
from gfxpack_updater.core.archive import ArchiveEntry, ArchiveReader


class SafeExtractor:
    """Extract selected archive entries below a destination directory."""

    def __init__(
        self,
        destination: Union[str, Path],
        pack_filter: Iterable[str] = DEFAULT_PACK_FILTER,
    ) -> None:
        self.destination = Path(destination)
        self.pack_filter: Tuple[str, ...] = tuple(pack_filter)
        self._log = get_logger(__name__)

    def should_extract(self, target_path: Union[str, Path]) -> bool:
        """Return True unless the path names one of the filtered packs.

        An empty filter selects every entry.
        """
        if not self.pack_filter:
            return True
        path = str(target_path)
        for name in self.pack_filter:
            if name in path:
                return False
        return True

    def ensure_within_destination(self, entry_name: str) -> Path:
        """Resolve an entry name below the destination root or raise."""
        root = self.destination.resolve()
        target = (root / entry_name).resolve()
        if root not in target.parents:
            raise PathTraversalError(entry_name)
        return target

    def extract(self, archive_path: Union[str, Path]) -> List[Path]:
        """Extract the archive and return the target paths in archive order."""
        processed: List[Path] = []
        with ArchiveReader(archive_path) as reader:
            for entry in reader.entries():
                target = self.ensure_within_destination(entry.relative_path)
                if not self.should_extract(os.path.join(self.destination, entry.relative_path)):
                    self._log.debug("Skipping %s", entry.relative_path)
                    continue

                processed.append(target)
                if entry.is_directory:
                    self._log.info("extracting %s", target)
                    self._make_directory(target)
                else:
                    self._write_file(entry, target)
        return processed

    def _make_directory(self, target: Path) -> None:
        try:
            target.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise UpdaterIOError(f"could not create directory {target}: {exc}") from exc

    def _write_file(self, entry: ArchiveEntry, target: Path) -> None:
        self._log.debug("Writing %s (mode %o)", target, entry.permission_bits)
        try:
            target.parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, entry.permission_bits)
            with os.fdopen(fd, 'wb') as out_file, entry.open() as source:
                shutil.copyfileobj(source, out_file)
        except (OSError, zipfile.BadZipFile, zlib.error) as exc:
            raise UpdaterIOError(f"could not extract {entry.relative_path}: {exc}") from exc
