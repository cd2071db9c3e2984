from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from assethash.errors import AssetBackendError
from assethash.services.hashed_fs import HashedFileSystem
from assethash.storage.base import ROOT_PATH, BackingFileSystem, clean_path
from assethash.storage.directory import DirectoryFileSystem
from assethash.storage.memory import MemoryFileSystem
from tests.helpers import SCRIPT_JS, TEXT_TXT


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ROOT_PATH),
        (".", ROOT_PATH),
        ("css/site.css", "css/site.css"),
        ("./css//site.css", "css/site.css"),
        ("css/../js/app.js", "js/app.js"),
        ("/etc/passwd", None),
        ("..", None),
        ("../secret", None),
        ("css/../../secret", None),
        (r"css\site.css", None),
    ],
)
def test_clean_path(raw: str, expected: str | None) -> None:
    assert clean_path(raw) == expected


@pytest.fixture(params=["memory", "directory"])
def backing(
    request: pytest.FixtureRequest, memory_fs: MemoryFileSystem, static_dir: Path
) -> BackingFileSystem:
    if request.param == "memory":
        return memory_fs
    return DirectoryFileSystem(static_dir)


def test_backends_satisfy_protocol(backing: BackingFileSystem) -> None:
    assert isinstance(backing, BackingFileSystem)


def test_read_bytes(backing: BackingFileSystem) -> None:
    assert backing.read_bytes("testdata/subdir1/script.js") == SCRIPT_JS


def test_open_file_reports_size_and_content(backing: BackingFileSystem) -> None:
    with backing.open("testdata/sub.dir.2/text.txt") as handle:
        info = handle.stat()
        assert info.is_dir is False
        assert info.size == len(TEXT_TXT)
        assert handle.seekable()
        assert handle.read(4) == TEXT_TXT[:4]
        assert handle.read() == TEXT_TXT[4:]


@pytest.mark.parametrize("path", [".", "testdata", "testdata/subdir1"])
def test_open_directory(backing: BackingFileSystem, path: str) -> None:
    with backing.open(path) as handle:
        assert handle.stat().is_dir is True
        with pytest.raises(IsADirectoryError):
            handle.read()


@pytest.mark.parametrize("path", ["missing.txt", "testdata/nope/script.js", "../outside", "/abs"])
def test_missing_paths_raise_file_not_found(backing: BackingFileSystem, path: str) -> None:
    with pytest.raises(FileNotFoundError):
        backing.open(path)
    with pytest.raises(FileNotFoundError):
        backing.read_bytes(path)


def test_read_bytes_on_directory_raises(backing: BackingFileSystem) -> None:
    with pytest.raises(IsADirectoryError):
        backing.read_bytes("testdata")


def test_iter_files_lists_every_file(
    backing: BackingFileSystem, asset_files: dict[str, bytes]
) -> None:
    assert sorted(backing.iter_files()) == sorted(asset_files)


def test_memory_file_system_accepts_text_and_rejects_bad_paths() -> None:
    fs = MemoryFileSystem({"js/app.js": "alert(1);"})

    assert fs.read_bytes("js/app.js") == b"alert(1);"
    with pytest.raises(ValueError):
        MemoryFileSystem({"../escape.js": b""})


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_directory_file_system_blocks_symlink_escape(tmp_path: Path) -> None:
    root = tmp_path / "static"
    root.mkdir()
    secret = tmp_path / "secret.txt"
    secret.write_bytes(b"secret")
    try:
        (root / "link.txt").symlink_to(secret)
    except OSError:
        pytest.skip("symlinks not permitted")

    fs = DirectoryFileSystem(root)

    with pytest.raises(FileNotFoundError):
        fs.read_bytes("link.txt")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_directory_file_system_symlink_loop_is_an_os_error(tmp_path: Path) -> None:
    root = tmp_path / "static"
    root.mkdir()
    try:
        (root / "loop.css").symlink_to(root / "loop.css")
    except OSError:
        pytest.skip("symlinks not permitted")

    fs = DirectoryFileSystem(root)

    with pytest.raises(OSError) as excinfo:
        fs.read_bytes("loop.css")
    assert excinfo.value.errno == errno.ELOOP

    hfs = HashedFileSystem(fs)
    assert hfs.translate("loop.css") == "loop.css"
    assert len(hfs) == 0
    with pytest.raises(AssetBackendError):
        hfs.resolve("loop.css")


def test_directory_file_system_missing_root_has_no_files(tmp_path: Path) -> None:
    assert list(DirectoryFileSystem(tmp_path / "absent").iter_files()) == []
