"""Template helpers that rewrite static asset URLs to their hashed form."""

from __future__ import annotations

from typing import Any

from assethash.logging import get_logger
from assethash.services.hashed_fs import HashedFileSystem

logger = get_logger(__name__)


def _normalise_prefix(url_prefix: str) -> str:
    stripped = url_prefix.strip().strip("/")
    return f"/{stripped}" if stripped else ""


class StaticAssetUrl:
    """Callable turning ``/static/css/site.css`` into its hashed URL.

    The URL prefix the assets are mounted under is removed before the path is
    looked up in the hashed filesystem and put back afterwards. In
    ``dev_mode`` URLs are returned unhashed so edited files are picked up
    without restarting.
    """

    def __init__(
        self,
        hfs: HashedFileSystem,
        *,
        url_prefix: str = "/static",
        dev_mode: bool = False,
    ) -> None:
        self.hfs = hfs
        self.url_prefix = _normalise_prefix(url_prefix)
        self.dev_mode = dev_mode

    def _strip_prefix(self, url: str) -> str:
        path = url if url.startswith("/") else f"/{url}"
        if self.url_prefix and (path == self.url_prefix or path.startswith(f"{self.url_prefix}/")):
            path = path[len(self.url_prefix) :]
        return path.lstrip("/")

    def __call__(self, url: str) -> str:
        original_path = self._strip_prefix(url)
        if self.dev_mode:
            return f"{self.url_prefix}/{original_path}"

        hashed_path = self.hfs.translate(original_path)
        if hashed_path == original_path:
            logger.warning("Static asset %s could not be hashed; serving it uncached", url)
        return f"{self.url_prefix}/{hashed_path}"


def install_asset_helpers(templates: Any, helper: StaticAssetUrl, *, name: str = "static") -> None:
    """Expose *helper* to Jinja templates as ``{{ static('css/site.css') }}``."""

    templates.env.globals[name] = helper


__all__ = ["StaticAssetUrl", "install_asset_helpers"]
