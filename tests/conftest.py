"""Test configuration helpers: stable temp directory on WSL and ZIP builders."""

from __future__ import annotations

import io
import os
import platform
import tempfile
import urllib.request
import zipfile
from pathlib import Path
from types import SimpleNamespace

import pytest


def _is_wsl() -> bool:
    release = platform.release().lower()
    version = platform.version().lower()
    return "microsoft" in release or "microsoft" in version


if _is_wsl() and os.path.isdir("/tmp"):
    os.environ["TMPDIR"] = "/tmp"
    os.environ["TEMP"] = "/tmp"
    os.environ["TMP"] = "/tmp"
    tempfile.tempdir = "/tmp"


def build_zip(path: Path, entries) -> Path:
    """Write a ZIP file from ``(name, data, mode)`` tuples.

    ``data`` of None makes a directory entry; ``mode`` of None leaves the
    external attributes unset.
    """
    with zipfile.ZipFile(path, "w") as archive:
        for name, data, mode in entries:
            info = zipfile.ZipInfo(name)
            if mode is not None:
                info.create_system = 3
                kind = 0o040000 if data is None else 0o100000
                info.external_attr = (kind | mode) << 16
                if data is None:
                    info.external_attr |= 0x10
            archive.writestr(info, b"" if data is None else data)
    return path


@pytest.fixture
def make_zip(tmp_path):
    """Factory fixture returning a ZIP path under tmp_path."""

    def _make(entries, name="graphicPacks_test.zip"):
        return build_zip(tmp_path / name, entries)

    return _make


class FakeResponse(io.BytesIO):
    """Stand-in for the object returned by urllib.request.urlopen."""

    def __init__(self, body: bytes, status: int = 200):
        super().__init__(body)
        self.status = status


@pytest.fixture(autouse=True)
def _no_gfxpack_env(monkeypatch):
    for key in (
        "GFXPACK_RELEASES_URL",
        "GFXPACK_EXTRACT_DIR",
        "GFXPACK_DOWNLOAD_DIR",
        "GFXPACK_HTTP_TIMEOUT",
        "GFXPACK_NO_PROMPT",
        "GFXPACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Replace urllib.request.urlopen with a URL -> body (or exception) table."""
    responses = {}
    calls = []

    def _urlopen(url, *args, **kwargs):
        calls.append((url, kwargs))
        outcome = responses[url]
        if isinstance(outcome, BaseException):
            raise outcome
        return FakeResponse(outcome)

    monkeypatch.setattr(urllib.request, "urlopen", _urlopen)
    return SimpleNamespace(responses=responses, calls=calls)
