"""Error taxonomy shared by the hashing core and the HTTP adapter."""

from __future__ import annotations

from enum import Enum

from starlette import status


class ErrorCode(str, Enum):
    """Stable error codes attached to every :class:`AssetHashError`."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNSUPPORTED_ALGORITHM = "UNSUPPORTED_ALGORITHM"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    BACKEND_ERROR = "BACKEND_ERROR"


class AssetHashError(Exception):
    """Base exception for asset hashing and serving failures."""

    __slots__ = ("message", "code", "http_status")

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status


class ConfigurationError(AssetHashError):
    """Raised when a :class:`HashedFileSystem` is built from invalid settings."""

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode = ErrorCode.CONFIGURATION_ERROR,
    ) -> None:
        super().__init__(message, code=code)


class UnsupportedAlgorithmError(ConfigurationError):
    """Raised when a hash algorithm outside the supported set is requested."""

    def __init__(self, algorithm: object) -> None:
        super().__init__(
            f"Unsupported hash algorithm: {algorithm!r}",
            code=ErrorCode.UNSUPPORTED_ALGORITHM,
        )
        self.algorithm = algorithm


class AssetNotFoundError(AssetHashError):
    """Raised when the backing filesystem has nothing at the requested path."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Asset not found: {path}",
            code=ErrorCode.NOT_FOUND,
            http_status=status.HTTP_404_NOT_FOUND,
        )
        self.path = path


class AssetForbiddenError(AssetHashError):
    """Raised when a request targets something that must not be served (directories)."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Asset is not servable: {path}",
            code=ErrorCode.FORBIDDEN,
            http_status=status.HTTP_403_FORBIDDEN,
        )
        self.path = path


class AssetBackendError(AssetHashError):
    """Raised when the backing filesystem fails for a reason other than absence."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"Unable to open asset: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            code=ErrorCode.BACKEND_ERROR,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        self.path = path


__all__ = [
    "AssetBackendError",
    "AssetForbiddenError",
    "AssetHashError",
    "AssetNotFoundError",
    "ConfigurationError",
    "ErrorCode",
    "UnsupportedAlgorithmError",
]
