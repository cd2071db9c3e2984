"""Process wide logging setup for the asset server."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: str | int) -> tuple[int, bool]:
    if isinstance(level, int):
        return level, True
    numeric = logging.getLevelNamesMapping().get(str(level).strip().upper())
    if numeric is None:
        return logging.INFO, False
    return numeric, True


def configure_logging(
    level: str | int = "INFO", log_file: str | os.PathLike[str] | None = None
) -> None:
    """Install a stdout handler, plus a file handler when *log_file* is set.

    Unknown level names fall back to ``INFO``; the fallback is reported once
    the handlers are in place. The log file's directory is created on demand.
    """

    numeric, known = _resolve_level(level)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    logging.basicConfig(level=numeric, format=LOG_FORMAT, handlers=handlers, force=True)
    if not known:
        get_logger(__name__).warning("Unknown log level %r; using INFO", level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
