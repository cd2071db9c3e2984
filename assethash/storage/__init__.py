"""Backing filesystems that hashed assets are read from."""

from assethash.storage.base import ROOT_PATH, AssetFile, AssetStat, BackingFileSystem, clean_path
from assethash.storage.directory import DirectoryAssetFile, DirectoryFileSystem
from assethash.storage.memory import MemoryAssetFile, MemoryFileSystem

__all__ = [
    "ROOT_PATH",
    "AssetFile",
    "AssetStat",
    "BackingFileSystem",
    "DirectoryAssetFile",
    "DirectoryFileSystem",
    "MemoryAssetFile",
    "MemoryFileSystem",
    "clean_path",
]
