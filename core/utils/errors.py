"""Custom exceptions for core logic."""

from __future__ import annotations

from pathlib import Path


class ConfigError(ValueError):
    """Raised when the specification document or run arguments are malformed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(FileNotFoundError):
    """Raised when a required input path does not exist."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ExtractionError(Exception):
    """Raised when auxiliary text cannot be extracted from a document.

    Recovered by callers: the run continues with empty auxiliary text.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path


class ReadError(Exception):
    """Raised when a single candidate file cannot be read.

    Recovered by callers: the file is scanned as empty content.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path = path
