"""Service layer wrapping a backing filesystem with hashed path lookups."""

from assethash.services.hashed_fs import HashedFileSystem, ResolvedAsset, ReverseEntry

__all__ = ["HashedFileSystem", "ResolvedAsset", "ReverseEntry"]
