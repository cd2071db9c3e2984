"""Configuration for hashed asset serving."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
import os
from pathlib import Path
from typing import Any

from assethash.core.digests import DEFAULT_ALGORITHM, HashAlgorithm
from assethash.core.naming import DEFAULT_HASH_LOCATION, HashLocation
from assethash.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_AGE = timedelta(days=365)
DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "ui" / "static"
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "ui" / "templates"
DEFAULT_URL_PREFIX = "/static"

_RUNTIME_ENV_CACHE: dict[str, str] | None = None


@dataclass(slots=True, frozen=True)
class HashedFileSystemConfig:
    """Construction-time options of a :class:`~assethash.services.HashedFileSystem`.

    ``algorithm`` and ``location`` are validated when the filesystem is built;
    a non-positive ``max_age`` falls back to :data:`DEFAULT_MAX_AGE` and a
    ``hash_length`` of ``0`` keeps the full digest.
    """

    algorithm: HashAlgorithm | str = DEFAULT_ALGORITHM
    location: HashLocation | str = DEFAULT_HASH_LOCATION
    hash_length: int = 0
    max_age: timedelta = DEFAULT_MAX_AGE
    cold_start_fallback: bool = False


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_file: str | None = None


@dataclass(slots=True, frozen=True)
class AppConfig:
    static_dir: Path = DEFAULT_STATIC_DIR
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    url_prefix: str = DEFAULT_URL_PREFIX
    dev_mode: bool = False
    warm_on_startup: bool = True
    hashing: HashedFileSystemConfig = field(default_factory=HashedFileSystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _load_env_file(path: Path) -> dict[str, str]:
    try:
        contents = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    env_values: dict[str, str] = {}
    for line in contents.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition("=")
        if not sep:
            continue
        env_values[key.strip()] = value.strip().strip('"').strip("'")
    return env_values


def load_runtime_env(
    *,
    env_file: str | os.PathLike[str] | None = None,
    base_env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Load runtime environment values applying .env before explicit environment."""

    env: dict[str, str] = {}
    source = dict(base_env or os.environ)

    path = Path(env_file) if env_file is not None else Path(".env")
    if path.exists() and path.is_file():
        env.update(_load_env_file(path))

    env.update({key: str(value) for key, value in source.items() if value is not None})
    return env


def get_runtime_env() -> Mapping[str, str]:
    """Return the cached runtime environment mapping."""

    global _RUNTIME_ENV_CACHE
    if _RUNTIME_ENV_CACHE is None:
        _RUNTIME_ENV_CACHE = load_runtime_env()
    return _RUNTIME_ENV_CACHE


def override_runtime_env(runtime_env: Mapping[str, str] | None) -> None:
    """Override the cached runtime environment (primarily for testing)."""

    global _RUNTIME_ENV_CACHE
    if runtime_env is None:
        _RUNTIME_ENV_CACHE = None
    else:
        _RUNTIME_ENV_CACHE = dict(runtime_env)


def get_env(name: str, default: str | None = None) -> str | None:
    """Return an environment variable honoring ENV > .env > defaults."""

    env = get_runtime_env()
    return env.get(name, default)


def _env_value(env: Mapping[str, Any], key: str) -> str | None:
    value = env.get(key)
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


def _as_bool(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(name: str, value: str | None, *, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid integer for %s: %r; defaulting to %s", name, value, default)
        return default


def _parse_location(raw: str | None) -> HashLocation:
    if raw is None:
        return DEFAULT_HASH_LOCATION
    normalised = raw.strip().lower().replace("-", "_")
    try:
        return HashLocation(normalised)
    except ValueError:
        logger.warning(
            "Unknown ASSETHASH_HASH_LOCATION value %s; defaulting to %s",
            raw,
            DEFAULT_HASH_LOCATION.value,
        )
        return DEFAULT_HASH_LOCATION


def _normalise_url_prefix(raw: str | None) -> str:
    if raw is None:
        return DEFAULT_URL_PREFIX
    stripped = raw.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def load_config(env: Mapping[str, Any] | None = None) -> AppConfig:
    """Build an :class:`AppConfig` from ``ASSETHASH_*`` environment values.

    The hash algorithm is passed through untouched so that an unsupported
    name fails loudly when the hashed filesystem is constructed.
    """

    source = get_runtime_env() if env is None else env

    static_dir = _env_value(source, "ASSETHASH_STATIC_DIR")
    templates_dir = _env_value(source, "ASSETHASH_TEMPLATES_DIR")
    max_age_seconds = _as_int(
        "ASSETHASH_MAX_AGE_SECONDS",
        _env_value(source, "ASSETHASH_MAX_AGE_SECONDS"),
        default=int(DEFAULT_MAX_AGE.total_seconds()),
    )

    hashing = HashedFileSystemConfig(
        algorithm=_env_value(source, "ASSETHASH_HASH_ALGORITHM") or DEFAULT_ALGORITHM,
        location=_parse_location(_env_value(source, "ASSETHASH_HASH_LOCATION")),
        hash_length=_as_int(
            "ASSETHASH_HASH_LENGTH",
            _env_value(source, "ASSETHASH_HASH_LENGTH"),
            default=0,
        ),
        max_age=timedelta(seconds=max_age_seconds),
        cold_start_fallback=_as_bool(_env_value(source, "ASSETHASH_COLD_START_FALLBACK")),
    )

    return AppConfig(
        static_dir=Path(static_dir).expanduser() if static_dir else DEFAULT_STATIC_DIR,
        templates_dir=Path(templates_dir).expanduser() if templates_dir else DEFAULT_TEMPLATES_DIR,
        url_prefix=_normalise_url_prefix(_env_value(source, "ASSETHASH_URL_PREFIX")),
        dev_mode=_as_bool(_env_value(source, "ASSETHASH_DEV_MODE")),
        warm_on_startup=_as_bool(_env_value(source, "ASSETHASH_WARM_ON_STARTUP"), default=True),
        hashing=hashing,
        logging=LoggingConfig(
            level=_env_value(source, "ASSETHASH_LOG_LEVEL") or "INFO",
            log_file=_env_value(source, "ASSETHASH_LOG_FILE"),
        ),
    )


__all__ = [
    "DEFAULT_MAX_AGE",
    "DEFAULT_STATIC_DIR",
    "DEFAULT_TEMPLATES_DIR",
    "DEFAULT_URL_PREFIX",
    "AppConfig",
    "HashedFileSystemConfig",
    "LoggingConfig",
    "get_env",
    "get_runtime_env",
    "load_config",
    "load_runtime_env",
    "override_runtime_env",
]
