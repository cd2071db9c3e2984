"""Stateless hashing and filename helpers."""

from assethash.core.digests import DEFAULT_ALGORITHM, HashAlgorithm, resolve_algorithm
from assethash.core.naming import (
    DEFAULT_HASH_LOCATION,
    HashLocation,
    ParsedName,
    compute_hash,
    parse_hashed_name,
    splice_hash,
    split_name,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_HASH_LOCATION",
    "HashAlgorithm",
    "HashLocation",
    "ParsedName",
    "compute_hash",
    "parse_hashed_name",
    "resolve_algorithm",
    "splice_hash",
    "split_name",
]
