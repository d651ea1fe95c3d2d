"""ZIP archive reading for the graphic packs updater."""

from __future__ import annotations

import stat
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterator, Union

from gfxpack_updater.common.constants import (
    DEFAULT_DIR_MODE,
    DEFAULT_FILE_MODE,
    READONLY_FILE_MODE,
)
from gfxpack_updater.common.errors import UpdaterIOError

_UNIX_SYSTEM = 3
_MSDOS_READONLY = 0x01


def permission_bits(info: zipfile.ZipInfo) -> int:
    """Permission bits recorded for an entry, with MS-DOS style fallbacks."""
    unix_mode = (info.external_attr >> 16) & 0o7777
    if info.create_system == _UNIX_SYSTEM and unix_mode:
        return stat.S_IMODE(unix_mode)
    if info.is_dir():
        return DEFAULT_DIR_MODE
    if info.external_attr & _MSDOS_READONLY:
        return READONLY_FILE_MODE
    return DEFAULT_FILE_MODE


@dataclass
class ArchiveEntry:
    """One record of a ZIP archive."""

    relative_path: str
    is_directory: bool
    permission_bits: int
    _archive: zipfile.ZipFile = field(repr=False)
    _info: zipfile.ZipInfo = field(repr=False)

    def open(self) -> IO[bytes]:
        """Open the decompressed content of a file entry."""
        return self._archive.open(self._info)


class ArchiveReader:
    """Context manager that enumerates the entries of a ZIP file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._zip: zipfile.ZipFile | None = None

    def __enter__(self) -> 'ArchiveReader':
        try:
            self._zip = zipfile.ZipFile(self.path)
        except (OSError, zipfile.BadZipFile) as exc:
            raise UpdaterIOError(f"could not open archive {self.path}: {exc}") from exc
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    def entries(self) -> Iterator[ArchiveEntry]:
        """Yield entries in the archive's native order."""
        if self._zip is None:
            raise UpdaterIOError(f"archive {self.path} is not open")
        for info in self._zip.infolist():
            yield ArchiveEntry(
                relative_path=info.filename,
                is_directory=info.is_dir(),
                permission_bits=permission_bits(info),
                _archive=self._zip,
                _info=info,
            )
