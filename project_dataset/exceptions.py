"""Custom exception hierarchy for project-dataset."""


class DatasetError(Exception):
    """Base exception for all project-dataset errors."""


class SourceNotFoundError(DatasetError):
    """Raised when a source or partition file does not exist."""


class ProjectNotFoundError(DatasetError):
    """Raised when a project name does not match any record."""


class MalformedRowError(DatasetError):
    """Raised when a flat row cannot be assembled into a project."""

    def __init__(self, message: str, row_number: int | None = None) -> None:
        super().__init__(message)
        self.row_number = row_number


class DatasetIOError(DatasetError):
    """Raised when reading or writing a dataset file fails."""


class ConfigurationError(DatasetError):
    """Raised when configuration is invalid or missing."""


class InvalidRequestError(DatasetError):
    """Raised when query arguments cannot be interpreted."""
