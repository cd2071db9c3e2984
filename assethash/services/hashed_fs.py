"""Content-hashed view over a backing filesystem.

:class:`HashedFileSystem` keeps two lookup tables:

* forward: original path -> hashed path, consulted by :meth:`translate` so the
  hash of a file is computed at most once per instance;
* reverse: hashed path -> (original path, hash), consulted by :meth:`resolve`
  when a browser requests a hashed path.

Entries are added together and never removed. Backing content is assumed to
stay unchanged for the lifetime of the process (bundled or embedded assets).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
import posixpath
import threading

from assethash.config import DEFAULT_MAX_AGE, HashedFileSystemConfig
from assethash.core.digests import hex_length, resolve_algorithm
from assethash.core.naming import HashLocation, compute_hash, parse_hashed_name, splice_hash
from assethash.errors import AssetBackendError, AssetNotFoundError, ConfigurationError
from assethash.storage.base import AssetFile, BackingFileSystem
from assethash.utils.http_cache import build_cache_control


@dataclass(slots=True, frozen=True)
class ReverseEntry:
    """Original path and content hash recorded for a hashed path."""

    original_path: str
    hash: str


@dataclass(slots=True)
class ResolvedAsset:
    """Outcome of :meth:`HashedFileSystem.resolve`.

    ``hash`` is empty when the request did not name a known hashed path; such
    responses must not be cached aggressively.
    """

    requested_path: str
    original_path: str
    hash: str
    file: AssetFile

    @property
    def is_hashed(self) -> bool:
        return bool(self.hash)

    def close(self) -> None:
        self.file.close()


class HashedFileSystem:
    """Compute, cache and resolve content-hashed paths for a backing filesystem."""

    def __init__(
        self,
        backing: BackingFileSystem,
        config: HashedFileSystemConfig | None = None,
    ) -> None:
        config = config or HashedFileSystemConfig()

        self._backing = backing
        self._algorithm = resolve_algorithm(config.algorithm)
        try:
            self._location = HashLocation(config.location)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown hash location: {config.location!r}") from exc

        full_length = hex_length(self._algorithm)
        self._hash_length = config.hash_length if 0 < config.hash_length < full_length else 0
        self._parsed_length = self._hash_length or full_length

        max_age = config.max_age
        if not isinstance(max_age, timedelta) or max_age.total_seconds() <= 0:
            max_age = DEFAULT_MAX_AGE
        self._max_age = max_age
        self._cold_start_fallback = config.cold_start_fallback

        self._config = HashedFileSystemConfig(
            algorithm=self._algorithm,
            location=self._location,
            hash_length=self._hash_length,
            max_age=self._max_age,
            cold_start_fallback=self._cold_start_fallback,
        )

        self._lock = threading.Lock()
        self._forward: dict[str, str] = {}
        self._reverse: dict[str, ReverseEntry] = {}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(backing={self._backing!r}, "
            f"algorithm={self._algorithm.value}, location={self._location.value})"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._forward)

    @property
    def backing(self) -> BackingFileSystem:
        return self._backing

    @property
    def config(self) -> HashedFileSystemConfig:
        """Effective configuration after validation and defaulting."""

        return self._config

    @property
    def max_age_seconds(self) -> int:
        return int(self._max_age.total_seconds())

    @property
    def cache_control(self) -> str:
        return build_cache_control(self.max_age_seconds)

    def hashed_path_for(self, original_path: str) -> str | None:
        """Return the cached hashed path without computing one."""

        with self._lock:
            return self._forward.get(original_path)

    def reverse_lookup(self, hashed_path: str) -> ReverseEntry | None:
        with self._lock:
            return self._reverse.get(hashed_path)

    def translate(self, original_path: str) -> str:
        """Return the hashed path for *original_path*.

        The file is read and hashed on the first call only. When the file
        cannot be read the original path is returned unchanged and nothing is
        cached, so templates still render a working (uncached) link.
        """

        with self._lock:
            cached = self._forward.get(original_path)
        if cached is not None:
            return cached

        computed = self._compute(original_path)
        if computed is None:
            return original_path

        hashed_path, hash_value = computed
        self._store(original_path, hashed_path, hash_value)
        return hashed_path

    def warm(self, paths: Iterable[str] | None = None) -> int:
        """Translate *paths* (every file when omitted) ahead of first use.

        Returns how many of them now have a hashed path.
        """

        candidates = self._backing.iter_files() if paths is None else paths
        warmed = 0
        for original_path in candidates:
            if self.translate(original_path) != original_path:
                warmed += 1
        return warmed

    def resolve(self, requested_path: str) -> ResolvedAsset:
        """Open the content behind *requested_path*.

        A known hashed path opens its original file and carries the recorded
        hash. Any other path is opened as-is with an empty hash.

        Raises:
            AssetNotFoundError: nothing exists at the resolved path.
            AssetBackendError: the backing filesystem failed otherwise.
        """

        entry = self.reverse_lookup(requested_path)
        if entry is None and self._cold_start_fallback:
            entry = self._recover_entry(requested_path)

        if entry is None:
            original_path, hash_value = requested_path, ""
        else:
            original_path, hash_value = entry.original_path, entry.hash

        try:
            handle = self._backing.open(original_path)
        except FileNotFoundError as exc:
            raise AssetNotFoundError(requested_path) from exc
        except OSError as exc:
            raise AssetBackendError(requested_path, exc.strerror or type(exc).__name__) from exc

        return ResolvedAsset(
            requested_path=requested_path,
            original_path=original_path,
            hash=hash_value,
            file=handle,
        )

    def open(self, path: str) -> AssetFile:
        """Open *path*, which may be either a hashed or an original path."""

        return self.resolve(path).file

    def _compute(self, original_path: str) -> tuple[str, str] | None:
        """Read and hash *original_path* without touching the caches.

        Returns ``(hashed_path, hash)`` or ``None`` when the file cannot be read.
        """

        try:
            content = self._backing.read_bytes(original_path)
        except OSError:
            return None

        hash_value = compute_hash(content, self._algorithm, self._hash_length)
        directory, filename = posixpath.split(original_path)
        hashed_name = splice_hash(filename, hash_value, self._location)
        if not hashed_name:
            return None
        return posixpath.join(directory, hashed_name), hash_value

    def _store(self, original_path: str, hashed_path: str, hash_value: str) -> None:
        with self._lock:
            self._reverse[hashed_path] = ReverseEntry(original_path, hash_value)
            self._forward[original_path] = hashed_path

    def _recover_entry(self, requested_path: str) -> ReverseEntry | None:
        """Rebuild a reverse entry for a hashed path this instance never issued.

        The filename is parsed for a hash, and the candidate original is only
        accepted when hashing its content reproduces that hash. A verified
        entry is cached exactly as :meth:`translate` would have cached it.
        """

        directory, filename = posixpath.split(requested_path)
        parsed = parse_hashed_name(filename, self._location, self._parsed_length)
        if not parsed.found:
            return None

        original_path = posixpath.join(directory, parsed.original_name)
        computed = self._compute(original_path)
        if computed is None or computed[0] != requested_path:
            return None

        hash_value = computed[1]
        self._store(original_path, requested_path, hash_value)
        return ReverseEntry(original_path, hash_value)


__all__ = ["HashedFileSystem", "ResolvedAsset", "ReverseEntry"]
