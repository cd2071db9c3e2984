"""Pure helpers for building and parsing content-hashed filenames.

Three placements are supported for the hash, shown for ``script.min.js``:

* ``start``:        ``<hash>-script.min.js``
* ``first_period``: ``script-<hash>.min.js``
* ``end``:          ``script.min.js-<hash>.js``

``end`` is the default. It keeps the original name intact for readability in
browser dev tools and repeats the extension after the hash so that MIME type
detection by extension keeps working.
"""

from __future__ import annotations

from enum import Enum
import posixpath
import re
from typing import NamedTuple

from assethash.core.digests import HashAlgorithm, hex_digest, resolve_algorithm

HASH_SEPARATOR = "-"


class HashLocation(str, Enum):
    """Where in a filename the content hash is placed."""

    START = "start"
    FIRST_PERIOD = "first_period"
    END = "end"


DEFAULT_HASH_LOCATION = HashLocation.END


class ParsedName(NamedTuple):
    original_name: str
    hash: str
    found: bool


def split_name(filename: str) -> tuple[str, str]:
    """Split *filename* into ``(stem, extension)``.

    The extension keeps its leading period and is empty when the name has
    none. Names starting with a period (``.htaccess``) have no extension.
    """

    return posixpath.splitext(filename)


def compute_hash(
    content: bytes,
    algorithm: HashAlgorithm | str = HashAlgorithm.SHA256,
    truncate_length: int = 0,
) -> str:
    """Return the lowercase hex digest of *content*.

    A positive ``truncate_length`` shorter than the full digest keeps only the
    leading characters; ``0`` or anything at least as long as the digest
    returns it whole.
    """

    digest = hex_digest(content, resolve_algorithm(algorithm))
    if 0 < truncate_length < len(digest):
        return digest[:truncate_length]
    return digest


def splice_hash(filename: str, hash_value: str, location: HashLocation | str) -> str:
    """Insert *hash_value* into *filename* according to *location*.

    Returns an empty string when either input is empty or the location is not
    recognised.
    """

    if not filename or not hash_value:
        return ""

    if location == HashLocation.START:
        return f"{hash_value}{HASH_SEPARATOR}{filename}"

    if location == HashLocation.FIRST_PERIOD:
        index = filename.find(".")
        if index == -1:
            return f"{filename}{HASH_SEPARATOR}{hash_value}"
        return f"{filename[:index]}{HASH_SEPARATOR}{hash_value}{filename[index:]}"

    if location == HashLocation.END:
        _, extension = split_name(filename)
        return f"{filename}{HASH_SEPARATOR}{hash_value}{extension}"

    return ""


def _hash_pattern(hash_length: int) -> str:
    return f"[0-9a-f]{{{hash_length}}}"


def parse_hashed_name(
    filename: str,
    location: HashLocation | str = DEFAULT_HASH_LOCATION,
    hash_length: int = 64,
) -> ParsedName:
    """Best-effort inverse of :func:`splice_hash`.

    Only a lowercase hex token of exactly ``hash_length`` characters placed the
    way *location* would place it is recognised. A name that merely looks like
    a hashed name is reported as found, so callers must verify the result
    against the content before trusting it.
    """

    not_found = ParsedName(filename, "", False)
    if not filename or hash_length <= 0:
        return not_found

    token = _hash_pattern(hash_length)

    if location == HashLocation.START:
        match = re.fullmatch(rf"(?P<hash>{token}){HASH_SEPARATOR}(?P<original>.+)", filename)
        if match is None:
            return not_found
        return ParsedName(match["original"], match["hash"], True)

    if location == HashLocation.FIRST_PERIOD:
        match = re.fullmatch(
            rf"(?P<stem>[^.]*){HASH_SEPARATOR}(?P<hash>{token})(?P<rest>\..*)?",
            filename,
        )
        if match is None:
            return not_found
        original = match["stem"] + (match["rest"] or "")
        if not original:
            return not_found
        return ParsedName(original, match["hash"], True)

    if location == HashLocation.END:
        match = re.fullmatch(
            rf"(?P<original>.+){HASH_SEPARATOR}(?P<hash>{token})(?P<ext>\.[^.]*)?",
            filename,
        )
        if match is None:
            return not_found
        original = match["original"]
        if split_name(original)[1] != (match["ext"] or ""):
            return not_found
        return ParsedName(original, match["hash"], True)

    return not_found


__all__ = [
    "DEFAULT_HASH_LOCATION",
    "HASH_SEPARATOR",
    "HashLocation",
    "ParsedName",
    "compute_hash",
    "parse_hashed_name",
    "split_name",
    "splice_hash",
]
