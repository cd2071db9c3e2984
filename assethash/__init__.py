"""Content-hashed filenames for cache-busting static assets."""

from assethash.config import HashedFileSystemConfig
from assethash.core.digests import HashAlgorithm
from assethash.core.naming import HashLocation
from assethash.errors import (
    AssetBackendError,
    AssetHashError,
    AssetNotFoundError,
    ConfigurationError,
    UnsupportedAlgorithmError,
)
from assethash.services.hashed_fs import HashedFileSystem, ResolvedAsset, ReverseEntry
from assethash.static_files import HashedStaticFiles
from assethash.storage.directory import DirectoryFileSystem
from assethash.storage.memory import MemoryFileSystem

__version__ = "0.1.0"

__all__ = [
    "AssetBackendError",
    "AssetHashError",
    "AssetNotFoundError",
    "ConfigurationError",
    "DirectoryFileSystem",
    "HashAlgorithm",
    "HashLocation",
    "HashedFileSystem",
    "HashedFileSystemConfig",
    "HashedStaticFiles",
    "MemoryFileSystem",
    "ResolvedAsset",
    "ReverseEntry",
    "UnsupportedAlgorithmError",
    "__version__",
]
