"""Tests for custom exception hierarchy."""

from project_dataset.exceptions import (
    ConfigurationError,
    DatasetError,
    DatasetIOError,
    InvalidRequestError,
    MalformedRowError,
    ProjectNotFoundError,
    SourceNotFoundError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_dataset_error_is_exception(self) -> None:
        assert isinstance(DatasetError("test"), Exception)

    def test_subclasses_are_dataset_errors(self) -> None:
        for error_type in (
            SourceNotFoundError,
            ProjectNotFoundError,
            MalformedRowError,
            DatasetIOError,
            ConfigurationError,
            InvalidRequestError,
        ):
            assert isinstance(error_type("test"), DatasetError)

    def test_exception_message(self) -> None:
        err = ProjectNotFoundError("Project 'Parkside' not found")
        assert str(err) == "Project 'Parkside' not found"

    def test_malformed_row_number(self) -> None:
        err = MalformedRowError("bad price", row_number=7)

        assert str(err) == "bad price"
        assert err.row_number == 7

    def test_malformed_row_number_optional(self) -> None:
        assert MalformedRowError("bad").row_number is None
