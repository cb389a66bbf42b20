from __future__ import annotations


class ReviewError(Exception):
    """Base class for errors raised while reviewing a change-set."""


class ConfigurationError(ReviewError):
    """Raised when required configuration (repository, change-set id) is missing or invalid."""


class NotFoundError(ReviewError):
    """Raised when the requested change-set or file content does not exist."""


class AnalysisError(ReviewError):
    """Raised when analysing a single file fails. Callers isolate it to that file."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class AggregateFailure(ReviewError):
    """Raised when aggregation or report building fails; no partial report is produced."""
