"""Backing filesystem over an in-memory mapping of paths to bytes.

Suited to assets bundled with the application and to tests. Directories are
implied by the file paths: ``css/site.css`` makes ``css`` a directory.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime
import io

from assethash.storage.base import ROOT_PATH, AssetFile, AssetStat, clean_path


class MemoryAssetFile(AssetFile):
    def __init__(
        self,
        path: str,
        content: bytes | None,
        *,
        modified: datetime | None = None,
    ) -> None:
        super().__init__(path)
        self._buffer = None if content is None else io.BytesIO(content)
        self._size = 0 if content is None else len(content)
        self._modified = modified

    def stat(self) -> AssetStat:
        return AssetStat(size=self._size, is_dir=self._buffer is None, modified=self._modified)

    def read(self, size: int = -1) -> bytes:
        if self._buffer is None:
            raise IsADirectoryError(self.path)
        return self._buffer.read(size)

    def seekable(self) -> bool:
        return self._buffer is not None

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self._buffer is None:
            raise IsADirectoryError(self.path)
        return self._buffer.seek(offset, whence)

    def close(self) -> None:
        if self._buffer is not None:
            self._buffer.close()


class MemoryFileSystem:
    """Read-only filesystem backed by a ``{path: bytes}`` mapping."""

    def __init__(
        self,
        files: Mapping[str, bytes | str],
        *,
        modified: datetime | None = None,
    ) -> None:
        self._files: dict[str, bytes] = {}
        self._directories: set[str] = {ROOT_PATH}
        self._modified = modified
        for raw_path, content in files.items():
            cleaned = clean_path(raw_path)
            if cleaned is None or cleaned == ROOT_PATH:
                raise ValueError(f"invalid asset path: {raw_path!r}")
            if isinstance(content, str):
                content = content.encode("utf-8")
            self._files[cleaned] = bytes(content)
            parent = cleaned.rpartition("/")[0]
            while parent:
                self._directories.add(parent)
                parent = parent.rpartition("/")[0]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(files={len(self._files)})"

    def _lookup(self, path: str) -> tuple[str, bytes | None]:
        cleaned = clean_path(path)
        if cleaned is None:
            raise FileNotFoundError(path)
        if cleaned in self._files:
            return cleaned, self._files[cleaned]
        if cleaned in self._directories:
            return cleaned, None
        raise FileNotFoundError(path)

    def open(self, path: str) -> MemoryAssetFile:
        cleaned, content = self._lookup(path)
        return MemoryAssetFile(cleaned, content, modified=self._modified)

    def read_bytes(self, path: str) -> bytes:
        cleaned, content = self._lookup(path)
        if content is None:
            raise IsADirectoryError(cleaned)
        return content

    def iter_files(self) -> Iterator[str]:
        yield from sorted(self._files)


__all__ = ["MemoryAssetFile", "MemoryFileSystem"]
