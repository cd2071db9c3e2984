"""Shared fixtures data and digest helpers for the asset tests."""

from __future__ import annotations

import hashlib

SCRIPT_JS = b"console.log('testdata');\n"
STYLES_CSS = b"body { color: #333; }\n"
INDEX_HTML = b"<p>testdata</p>\n"
TEXT_TXT = b"testdata"


def sha256_hex(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()
