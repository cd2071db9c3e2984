"""Helpers for computing HTTP cache headers of hashed assets."""

from __future__ import annotations

from dataclasses import dataclass


def build_cache_control(max_age_seconds: int) -> str:
    """Return the ``Cache-Control`` value for content that never changes."""

    return f"public, max-age={int(max_age_seconds)}, immutable"


@dataclass(frozen=True)
class CacheMetadata:
    """Cache validators for a response whose content is addressed by hash."""

    etag: str
    cache_control: str

    def as_headers(self) -> dict[str, str]:
        return {
            "Cache-Control": self.cache_control,
            "ETag": self.etag,
        }


def hashed_asset_headers(hash_value: str, *, max_age_seconds: int) -> dict[str, str]:
    """Headers for a resolved asset; empty when no hash is known."""

    if not hash_value:
        return {}
    metadata = CacheMetadata(etag=hash_value, cache_control=build_cache_control(max_age_seconds))
    return metadata.as_headers()


__all__ = ["CacheMetadata", "build_cache_control", "hashed_asset_headers"]
