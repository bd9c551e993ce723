"""Domain errors and failure typing."""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline failures."""

    error_code = "PIPELINE_ERROR"


class ConfigError(PipelineError):
    """Raised for invalid or missing catalog configuration."""

    error_code = "CONFIG_ERROR"


class NetworkError(PipelineError):
    """Raised when a fetch could not be completed."""

    error_code = "NETWORK_ERROR"


class HttpStatusError(NetworkError):
    """Raised when the remote answered with a non-success status."""

    error_code = "HTTP_ERROR"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(PipelineError):
    """Raised when CSV input cannot be read at all."""

    error_code = "PARSE_ERROR"


class CoordinateError(PipelineError):
    """Raised in strict mode for features without numeric coordinates."""

    error_code = "COORDINATE_ERROR"


class FileSystemError(PipelineError):
    """Raised when the cache directory or an artifact cannot be written or read."""

    error_code = "FILESYSTEM_ERROR"
