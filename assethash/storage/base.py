"""Contract for the read-only filesystems that assets are served from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
import posixpath
from types import TracebackType
from typing import Protocol, runtime_checkable

ROOT_PATH = "."


@dataclass(slots=True, frozen=True)
class AssetStat:
    """Metadata for an opened asset."""

    size: int
    is_dir: bool
    modified: datetime | None = None


class AssetFile(ABC):
    """An opened file or directory from a :class:`BackingFileSystem`.

    Directories can be opened so that callers can tell them apart from files;
    reading from one raises :class:`IsADirectoryError`.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    @abstractmethod
    def stat(self) -> AssetStat:
        ...

    @abstractmethod
    def read(self, size: int = -1) -> bytes:
        ...

    def seekable(self) -> bool:
        return False

    def close(self) -> None:
        pass

    def __enter__(self) -> AssetFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


@runtime_checkable
class BackingFileSystem(Protocol):
    """Read-only, slash separated view over named blobs.

    Implementations raise :class:`FileNotFoundError` for missing or invalid
    paths, :class:`IsADirectoryError` when ``read_bytes`` targets a directory
    and other :class:`OSError` subclasses for backend failures.
    """

    def open(self, path: str) -> AssetFile:
        """Open *path* (a file or a directory)."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Return the full contents of the file at *path*."""
        ...

    def iter_files(self) -> Iterator[str]:
        """Yield the path of every file, relative to the root."""
        ...


def clean_path(path: str) -> str | None:
    """Normalise a slash separated relative path.

    Returns :data:`ROOT_PATH` for the root, and ``None`` for absolute paths,
    backslashes or anything escaping the root via ``..``.
    """

    if path in ("", ROOT_PATH):
        return ROOT_PATH
    if path.startswith("/") or "\\" in path or "\x00" in path:
        return None
    cleaned = posixpath.normpath(path)
    if cleaned == ".." or cleaned.startswith("../"):
        return None
    return cleaned


__all__ = [
    "ROOT_PATH",
    "AssetFile",
    "AssetStat",
    "BackingFileSystem",
    "clean_path",
]
