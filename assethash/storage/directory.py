"""Backing filesystem rooted at an on-disk directory."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime
import errno
import os
from pathlib import Path
from typing import BinaryIO

from assethash.storage.base import ROOT_PATH, AssetFile, AssetStat, clean_path


class DirectoryAssetFile(AssetFile):
    """A regular file or directory opened from a :class:`DirectoryFileSystem`."""

    def __init__(self, path: str, target: Path) -> None:
        super().__init__(path)
        self._target = target
        self._stat = target.stat()
        self._handle: BinaryIO | None = None
        if not target.is_dir():
            self._handle = target.open("rb")

    def stat(self) -> AssetStat:
        return AssetStat(
            size=0 if self._handle is None else self._stat.st_size,
            is_dir=self._handle is None,
            modified=datetime.fromtimestamp(self._stat.st_mtime, tz=UTC),
        )

    def read(self, size: int = -1) -> bytes:
        if self._handle is None:
            raise IsADirectoryError(self.path)
        return self._handle.read(size)

    def seekable(self) -> bool:
        return self._handle is not None and self._handle.seekable()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        if self._handle is None:
            raise IsADirectoryError(self.path)
        return self._handle.seek(offset, whence)

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()


class DirectoryFileSystem:
    """Serve files found below ``root``.

    Paths are resolved and constrained to the root, so symlinks pointing
    outside of it behave like missing files.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root).expanduser().resolve(strict=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"

    def _resolve(self, path: str) -> Path:
        cleaned = clean_path(path)
        if cleaned is None:
            raise FileNotFoundError(path)
        if cleaned == ROOT_PATH:
            return self.root
        try:
            candidate = (self.root / cleaned).resolve(strict=False)
        except RuntimeError as exc:
            # Symlink loops surface as RuntimeError before Python 3.13.
            raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), path) from exc
        try:
            candidate.relative_to(self.root)
        except ValueError:
            raise FileNotFoundError(path) from None
        return candidate

    def open(self, path: str) -> DirectoryAssetFile:
        return DirectoryAssetFile(path, self._resolve(path))

    def read_bytes(self, path: str) -> bytes:
        return self._resolve(path).read_bytes()

    def iter_files(self) -> Iterator[str]:
        if not self.root.is_dir():
            return
        for file_path in sorted(self.root.rglob("*")):
            if not file_path.is_file():
                continue
            yield file_path.relative_to(self.root).as_posix()


__all__ = ["DirectoryAssetFile", "DirectoryFileSystem"]
