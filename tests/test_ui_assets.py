from __future__ import annotations

import logging
from pathlib import Path

from fastapi.templating import Jinja2Templates
import pytest

from assethash.services.hashed_fs import HashedFileSystem
from assethash.storage.memory import MemoryFileSystem
from assethash.ui.assets import StaticAssetUrl, install_asset_helpers
from tests.helpers import STYLES_CSS, sha256_hex

STYLES_HASH = sha256_hex(STYLES_CSS)


@pytest.fixture()
def hfs() -> HashedFileSystem:
    return HashedFileSystem(MemoryFileSystem({"css/styles.css": STYLES_CSS}))


@pytest.mark.parametrize(
    "url",
    ["/static/css/styles.css", "static/css/styles.css"],
)
def test_static_url_strips_and_restores_prefix(hfs: HashedFileSystem, url: str) -> None:
    static = StaticAssetUrl(hfs)

    assert static(url) == f"/static/css/styles.css-{STYLES_HASH}.css"


def test_static_url_without_prefix_in_input(hfs: HashedFileSystem) -> None:
    static = StaticAssetUrl(hfs, url_prefix="/assets/")

    assert static("css/styles.css") == f"/assets/css/styles.css-{STYLES_HASH}.css"


def test_static_url_with_empty_prefix(hfs: HashedFileSystem) -> None:
    static = StaticAssetUrl(hfs, url_prefix="")

    assert static("/css/styles.css") == f"/css/styles.css-{STYLES_HASH}.css"


def test_static_url_does_not_strip_partial_prefix_match() -> None:
    hfs = HashedFileSystem(MemoryFileSystem({"staticfiles/a.css": STYLES_CSS}))
    static = StaticAssetUrl(hfs)

    assert static("/staticfiles/a.css") == f"/static/staticfiles/a.css-{STYLES_HASH}.css"


def test_static_url_missing_asset_logs_and_returns_unhashed(
    hfs: HashedFileSystem, caplog: pytest.LogCaptureFixture
) -> None:
    static = StaticAssetUrl(hfs)

    with caplog.at_level(logging.WARNING, logger="assethash.ui.assets"):
        result = static("/static/css/missing.css")

    assert result == "/static/css/missing.css"
    assert "could not be hashed" in caplog.text
    assert len(hfs) == 0


def test_static_url_dev_mode_skips_hashing(hfs: HashedFileSystem) -> None:
    static = StaticAssetUrl(hfs, dev_mode=True)

    assert static("/static/css/styles.css") == "/static/css/styles.css"
    assert static("css/styles.css") == "/static/css/styles.css"
    assert len(hfs) == 0


def test_install_asset_helpers_renders_hashed_urls(hfs: HashedFileSystem, tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text(
        "<link href=\"{{ static('/static/css/styles.css') }}\">", encoding="utf-8"
    )
    templates = Jinja2Templates(directory=str(tmp_path))

    install_asset_helpers(templates, StaticAssetUrl(hfs))
    rendered = templates.get_template("page.html").render()

    assert rendered == f'<link href="/static/css/styles.css-{STYLES_HASH}.css">'
