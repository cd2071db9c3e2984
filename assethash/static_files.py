"""ASGI application serving assets through a :class:`HashedFileSystem`.

This is a deliberately small relative of Starlette's ``StaticFiles``: no
directory listings, no ``index.html`` defaulting, no range or conditional
requests. Requests for a known hashed path are answered with long lived,
immutable caching headers; anything else is served without them.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
import mimetypes
import posixpath

from starlette import status
from starlette.concurrency import run_in_threadpool
from starlette.responses import PlainTextResponse, Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from assethash.errors import AssetForbiddenError, AssetHashError
from assethash.logging import get_logger
from assethash.logging_events import log_event
from assethash.services.hashed_fs import HashedFileSystem, ResolvedAsset
from assethash.storage.base import ROOT_PATH
from assethash.utils.http_cache import hashed_asset_headers

_logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024
_ALLOWED_METHODS = ("GET", "HEAD")


def _route_path(scope: Scope) -> str:
    path: str = scope["path"]
    root_path: str = scope.get("root_path", "")
    if not root_path or not path.startswith(root_path):
        return path
    if path == root_path:
        return ""
    if path[len(root_path)] == "/":
        return path[len(root_path) :]
    return path


def normalise_request_path(path: str) -> str:
    """Map a URL path onto a backing filesystem path.

    ``""`` and ``"/"`` become the root marker, the leading slash is dropped and
    dot segments are collapsed.
    """

    if path in ("", "/"):
        return ROOT_PATH
    return posixpath.normpath(path.lstrip("/"))


def _error_response(status_code: int, headers: dict[str, str] | None = None) -> Response:
    phrase = {
        status.HTTP_403_FORBIDDEN: "Forbidden",
        status.HTTP_404_NOT_FOUND: "Not Found",
        status.HTTP_405_METHOD_NOT_ALLOWED: "Method Not Allowed",
    }.get(status_code, "Internal Server Error")
    return PlainTextResponse(phrase, status_code=status_code, headers=headers)


def _iter_chunks(asset: ResolvedAsset) -> Iterator[bytes]:
    try:
        while True:
            chunk = asset.file.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        asset.close()


class HashedStaticFiles:
    """Serve files from a :class:`HashedFileSystem`.

    Mount it like Starlette's static files app::

        app.mount("/static", HashedStaticFiles(hfs), name="static")
    """

    def __init__(self, hfs: HashedFileSystem) -> None:
        if not isinstance(hfs, HashedFileSystem):
            raise TypeError("HashedStaticFiles requires a HashedFileSystem")
        self.hfs = hfs

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        assert scope["type"] == "http"
        response = await run_in_threadpool(self.get_response, _route_path(scope), scope)
        await response(scope, receive, send)

    def get_response(self, path: str, scope: Scope) -> Response:
        method = scope.get("method", "GET")
        if method not in _ALLOWED_METHODS:
            return _error_response(
                status.HTTP_405_METHOD_NOT_ALLOWED,
                headers={"Allow": ", ".join(_ALLOWED_METHODS)},
            )

        file_path = normalise_request_path(path)
        try:
            asset = self.hfs.resolve(file_path)
        except AssetHashError as exc:
            if exc.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                log_event(
                    _logger,
                    "static.error",
                    level=logging.ERROR,
                    path=file_path,
                    status=exc.http_status,
                    error=exc.message,
                )
            return _error_response(exc.http_status)

        try:
            return self._file_response(asset, method=method)
        except AssetHashError as exc:
            asset.close()
            return _error_response(exc.http_status)
        except OSError as exc:
            asset.close()
            log_event(
                _logger,
                "static.error",
                level=logging.ERROR,
                path=file_path,
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                error=str(exc),
            )
            return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)

    def _file_response(self, asset: ResolvedAsset, *, method: str) -> Response:
        info = asset.file.stat()
        if info.is_dir:
            raise AssetForbiddenError(asset.requested_path)

        headers = hashed_asset_headers(asset.hash, max_age_seconds=self.hfs.max_age_seconds)
        headers["Content-Length"] = str(info.size)
        media_type = mimetypes.guess_type(asset.original_path)[0] or "application/octet-stream"

        if method == "HEAD":
            asset.close()
            return Response(status_code=status.HTTP_200_OK, headers=headers, media_type=media_type)

        if asset.file.seekable():
            return StreamingResponse(
                _iter_chunks(asset),
                status_code=status.HTTP_200_OK,
                headers=headers,
                media_type=media_type,
            )

        # Handles that cannot stream are copied whole.
        try:
            content = asset.file.read()
        finally:
            asset.close()
        return Response(
            content,
            status_code=status.HTTP_200_OK,
            headers=headers,
            media_type=media_type,
        )


__all__ = ["CHUNK_SIZE", "HashedStaticFiles", "normalise_request_path"]
