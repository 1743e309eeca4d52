"""Tagged outcomes returned across the service boundary."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from project_dataset.exceptions import (
    DatasetError,
    DatasetIOError,
    MalformedRowError,
    ProjectNotFoundError,
    SourceNotFoundError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    MALFORMED_ROW = "malformed_row"
    IO_FAILURE = "io_failure"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying its value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying an error kind and a description."""

    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise DatasetError(f"{self.kind.value}: {self.message}")

    @classmethod
    def from_exception(cls, exc: Exception) -> "Failure":
        """Map an exception from the hierarchy to a failure kind."""
        if isinstance(exc, (SourceNotFoundError, ProjectNotFoundError)):
            kind = ErrorKind.NOT_FOUND
        elif isinstance(exc, MalformedRowError):
            kind = ErrorKind.MALFORMED_ROW
        elif isinstance(exc, (DatasetIOError, OSError)):
            kind = ErrorKind.IO_FAILURE
        else:
            # InvalidRequestError and any other dataset error
            kind = ErrorKind.INVALID_REQUEST
        return cls(kind=kind, message=str(exc))


Result = Union[Success[T], Failure]
