"""
Error Types

All failures in this package are non-fatal to the pipeline as a whole: the
worst outcome of a bad batch is an empty or partially populated graph.

Hierarchy:
    ArtifactError
    ├── UnresolvedSchemaError - file name matches no known artifact (skip file)
    ├── DecodeError           - malformed Parquet or wrong columns (skip file)
    └── NetworkError          - probe/fetch/upload/reload failure (status only)
"""

from __future__ import annotations


class ArtifactError(Exception):
    """Base class for artifact pipeline errors."""


class UnresolvedSchemaError(ArtifactError):
    """Raised when a file name does not map to any record kind."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unrecognized artifact file name: {file_name}")


class DecodeError(ArtifactError):
    """Raised when a payload cannot be decoded into records of a kind."""

    def __init__(self, message: str, *, file_name: str | None = None) -> None:
        self.file_name = file_name
        if file_name:
            message = f"{file_name}: {message}"
        super().__init__(message)


class NetworkError(ArtifactError):
    """Raised when a backend or artifact-host request fails."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)
