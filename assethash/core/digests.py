"""Supported content digest algorithms."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
import hashlib
from typing import Any

from assethash.errors import UnsupportedAlgorithmError


class HashAlgorithm(str, Enum):
    """Closed set of algorithms usable for content hashes.

    SHA-1 is deliberately absent; configuring it fails like any other
    unknown name.
    """

    MD5 = "md5"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    BLAKE2B = "blake2b"


DEFAULT_ALGORITHM = HashAlgorithm.SHA256

_CONSTRUCTORS: dict[HashAlgorithm, Callable[[], Any]] = {
    HashAlgorithm.MD5: hashlib.md5,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA384: hashlib.sha384,
    HashAlgorithm.SHA512: hashlib.sha512,
    # 32 byte digest, same width as SHA-256
    HashAlgorithm.BLAKE2B: lambda: hashlib.blake2b(digest_size=32),
}


def resolve_algorithm(value: HashAlgorithm | str) -> HashAlgorithm:
    """Return the :class:`HashAlgorithm` for *value* or raise.

    Names are matched case-insensitively and may contain dashes
    (``"SHA-256"``).
    """

    if isinstance(value, HashAlgorithm):
        return value
    if not isinstance(value, str):
        raise UnsupportedAlgorithmError(value)
    normalised = value.strip().lower().replace("-", "").replace("_", "")
    try:
        return HashAlgorithm(normalised)
    except ValueError as exc:
        raise UnsupportedAlgorithmError(value) from exc


def new_hasher(algorithm: HashAlgorithm) -> Any:
    """Return a fresh hashlib object for *algorithm*."""

    return _CONSTRUCTORS[algorithm]()


def hex_length(algorithm: HashAlgorithm) -> int:
    """Number of hex characters in an untruncated digest."""

    return new_hasher(algorithm).digest_size * 2


def hex_digest(content: bytes, algorithm: HashAlgorithm) -> str:
    hasher = new_hasher(algorithm)
    hasher.update(content)
    return hasher.hexdigest()


__all__ = [
    "DEFAULT_ALGORITHM",
    "HashAlgorithm",
    "hex_digest",
    "hex_length",
    "new_hasher",
    "resolve_algorithm",
]
