from __future__ import annotations

import os
import stat
import sys
import zipfile

import pytest

from gfxpack_updater.common.constants import DEFAULT_PACK_FILTER
from gfxpack_updater.common.errors import PathTraversalError, UpdaterIOError
from gfxpack_updater.core.extractor import SafeExtractor


def _relative_files(root):
    return sorted(
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file()
    )


def test_should_extract_empty_filter_selects_everything(tmp_path):
    extractor = SafeExtractor(tmp_path, pack_filter=())

    assert extractor.should_extract("graphicPacks/BreathOfTheWild/a.txt") is True
    assert extractor.should_extract("graphicPacks/Other/b.txt") is True


def test_should_extract_rejects_paths_naming_a_filtered_pack(tmp_path):
    extractor = SafeExtractor(tmp_path, pack_filter={"BreathOfTheWild"})

    assert extractor.should_extract("graphicPacks/BreathOfTheWild/a.txt") is False
    assert extractor.should_extract("graphicPacks/Other/b.txt") is True


def test_default_filter_is_the_three_packs(tmp_path):
    extractor = SafeExtractor(tmp_path)

    assert extractor.pack_filter == DEFAULT_PACK_FILTER
    assert extractor.pack_filter == ("BreathOfTheWild", "MarioKart8", "SuperMario3DWorld")


def test_extract_applies_filter(tmp_path, make_zip):
    archive = make_zip([
        ("BreathOfTheWild/a.txt", b"botw", None),
        ("Other/b.txt", b"other", None),
    ])
    dest = tmp_path / "graphicPacks"

    processed = SafeExtractor(dest, pack_filter={"BreathOfTheWild"}).extract(archive)

    assert _relative_files(dest) == ["Other/b.txt"]
    assert (dest / "Other" / "b.txt").read_bytes() == b"other"
    assert processed == [(dest / "Other" / "b.txt").resolve()]


def test_extract_empty_filter_writes_all_entries_in_archive_order(tmp_path, make_zip):
    archive = make_zip([
        ("zeta/", None, None),
        ("zeta/rules.txt", b"z", None),
        ("alpha/rules.txt", b"a", None),
    ])
    dest = tmp_path / "graphicPacks"

    processed = SafeExtractor(dest, pack_filter=()).extract(archive)

    root = dest.resolve()
    assert processed == [
        root / "zeta",
        root / "zeta" / "rules.txt",
        root / "alpha" / "rules.txt",
    ]
    assert (dest / "alpha" / "rules.txt").read_bytes() == b"a"


@pytest.mark.parametrize("entry_name", [
    "../../etc/passwd",
    "../outside.txt",
    "nested/../../outside.txt",
    "/etc/passwd",
])
def test_extract_rejects_path_traversal(tmp_path, make_zip, entry_name):
    archive = make_zip([(entry_name, b"pwned", None)])
    dest = tmp_path / "graphicPacks"

    with pytest.raises(PathTraversalError) as excinfo:
        SafeExtractor(dest, pack_filter=()).extract(archive)

    assert excinfo.value.entry_name == entry_name
    assert entry_name in str(excinfo.value)
    assert not (tmp_path / "outside.txt").exists()


def test_extract_rejects_destination_root_itself(tmp_path, make_zip):
    archive = make_zip([("./", None, None)])

    with pytest.raises(PathTraversalError):
        SafeExtractor(tmp_path / "graphicPacks", pack_filter=()).extract(archive)


def test_traversal_aborts_remaining_entries(tmp_path, make_zip):
    archive = make_zip([
        ("first.txt", b"1", None),
        ("../escape.txt", b"x", None),
        ("second.txt", b"2", None),
    ])
    dest = tmp_path / "graphicPacks"

    with pytest.raises(PathTraversalError):
        SafeExtractor(dest, pack_filter=()).extract(archive)

    assert (dest / "first.txt").exists()
    assert not (dest / "second.txt").exists()
    assert not (tmp_path / "escape.txt").exists()


def test_traversal_is_checked_for_filtered_entries_too(tmp_path, make_zip):
    archive = make_zip([("../BreathOfTheWild/evil.txt", b"x", None)])

    with pytest.raises(PathTraversalError):
        SafeExtractor(tmp_path / "graphicPacks", pack_filter={"BreathOfTheWild"}).extract(archive)


def test_directory_entry_is_idempotent(tmp_path, make_zip):
    archive = make_zip([("Other/", None, None)])
    dest = tmp_path / "graphicPacks"
    extractor = SafeExtractor(dest, pack_filter=())

    extractor.extract(archive)
    extractor.extract(archive)

    assert (dest / "Other").is_dir()


def test_existing_file_is_truncated(tmp_path, make_zip):
    dest = tmp_path / "graphicPacks"
    (dest / "Other").mkdir(parents=True)
    (dest / "Other" / "rules.txt").write_bytes(b"old content that is longer")
    archive = make_zip([("Other/rules.txt", b"new", None)])

    SafeExtractor(dest, pack_filter=()).extract(archive)

    assert (dest / "Other" / "rules.txt").read_bytes() == b"new"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_file_permission_bits_are_preserved(tmp_path, make_zip):
    archive = make_zip([
        ("Other/run.sh", b"#!/bin/sh\n", 0o755),
        ("Other/readonly.txt", b"r", 0o444),
    ])
    dest = tmp_path / "graphicPacks"

    previous = os.umask(0o022)
    try:
        SafeExtractor(dest, pack_filter=()).extract(archive)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(os.stat(dest / "Other" / "run.sh").st_mode) == 0o755
    assert stat.S_IMODE(os.stat(dest / "Other" / "readonly.txt").st_mode) == 0o444


def test_missing_archive_raises_io_error(tmp_path):
    with pytest.raises(UpdaterIOError):
        SafeExtractor(tmp_path / "graphicPacks").extract(tmp_path / "missing.zip")


def test_corrupt_archive_raises_io_error(tmp_path):
    bogus = tmp_path / "graphicPacks_bogus.zip"
    bogus.write_bytes(b"this is not a zip file")

    with pytest.raises(UpdaterIOError):
        SafeExtractor(tmp_path / "graphicPacks").extract(bogus)


def test_unwritable_target_raises_io_error(tmp_path, make_zip):
    dest = tmp_path / "graphicPacks"
    dest.mkdir()
    # A regular file where a directory is expected.
    (dest / "Other").write_bytes(b"")
    archive = make_zip([("Other/rules.txt", b"x", None)])

    with pytest.raises(UpdaterIOError):
        SafeExtractor(dest, pack_filter=()).extract(archive)


def test_corrupt_entry_data_raises_io_error(tmp_path):
    archive = tmp_path / "graphicPacks_crc.zip"
    payload = b"A" * 256
    with zipfile.ZipFile(archive, "w", compression=zipfile.ZIP_STORED) as handle:
        handle.writestr("Other/rules.txt", payload)
    raw = archive.read_bytes()
    archive.write_bytes(raw.replace(payload, b"B" * len(payload), 1))
    dest = tmp_path / "graphicPacks"

    with pytest.raises(UpdaterIOError, match="Other/rules.txt"):
        SafeExtractor(dest, pack_filter=()).extract(archive)
