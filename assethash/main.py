"""Example FastAPI application serving hashed static assets.

Run with ``uvicorn assethash.main:get_app --factory``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from assethash.config import AppConfig, load_config
from assethash.logging import configure_logging, get_logger
from assethash.logging_events import log_event
from assethash.services.hashed_fs import HashedFileSystem
from assethash.static_files import HashedStaticFiles
from assethash.storage.directory import DirectoryFileSystem
from assethash.ui.assets import StaticAssetUrl, install_asset_helpers

logger = get_logger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the application; fails at start-up on an unsupported hash algorithm."""

    config = config or load_config()
    configure_logging(config.logging.level, config.logging.log_file)

    hfs = HashedFileSystem(DirectoryFileSystem(config.static_dir), config.hashing)
    static = StaticAssetUrl(hfs, url_prefix=config.url_prefix, dev_mode=config.dev_mode)
    templates = Jinja2Templates(directory=str(config.templates_dir))
    install_asset_helpers(templates, static)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if config.warm_on_startup and not config.dev_mode:
            warmed = await run_in_threadpool(hfs.warm)
            log_event(
                logger,
                "assets.warmed",
                count=warmed,
                static_dir=str(config.static_dir),
                meta={
                    "algorithm": hfs.config.algorithm.value,
                    "location": hfs.config.location.value,
                    "hash_length": hfs.config.hash_length,
                },
            )
        yield

    app = FastAPI(title="assethash", lifespan=lifespan)
    app.state.config = config
    app.state.hashed_fs = hfs
    app.state.templates = templates
    app.state.static_url = static

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index(request: Request) -> HTMLResponse:
        return templates.TemplateResponse(request, "index.html", {})

    app.mount(config.url_prefix or "/", HashedStaticFiles(hfs), name="static")
    return app


def get_app() -> FastAPI:
    return create_app()


__all__ = ["create_app", "get_app"]
