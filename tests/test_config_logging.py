"""Tests for config and logging."""

import io
import json
import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from project_dataset.config import DatasetConfig, DatasetPaths, SchemaBounds
from project_dataset.exceptions import ConfigurationError
from project_dataset.logging import JsonFormatter, get_logger, setup_logging
from project_dataset.models.enums import DatasetView

ENV_VARS = (
    "PROJECT_DATASET_PATH",
    "PRIMARY_DATASET_PATH",
    "RESALE_DATASET_PATH",
    "MAX_PROPERTY_TYPES",
    "MAX_PROPERTIES_PER_TYPE",
    "MAX_BROCHURES",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture
def clean_env():
    """Environment without any project-dataset variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestSchemaBounds:
    """Tests for SchemaBounds."""

    def test_default_values(self) -> None:
        bounds = SchemaBounds()

        assert bounds.max_property_types == 8
        assert bounds.max_properties_per_type == 30
        assert bounds.max_brochures == 38

    @pytest.mark.parametrize("field", ["max_property_types", "max_properties_per_type", "max_brochures"])
    def test_rejects_non_positive(self, field: str) -> None:
        with pytest.raises(ConfigurationError, match=field):
            SchemaBounds(**{field: 0})

    def test_is_frozen(self) -> None:
        bounds = SchemaBounds()
        with pytest.raises(AttributeError):
            bounds.max_brochures = 1  # type: ignore[misc]


class TestDatasetPaths:
    """Tests for DatasetPaths."""

    def test_default_values(self) -> None:
        paths = DatasetPaths()

        assert paths.combined == Path("data/projects.csv")
        assert paths.primary == Path("data/primary_projects.csv")
        assert paths.resale == Path("data/resale_projects.csv")

    def test_path_for(self) -> None:
        paths = DatasetPaths()

        assert paths.path_for(DatasetView.COMBINED) == paths.combined
        assert paths.path_for(DatasetView.PRIMARY) == paths.primary
        assert paths.path_for(DatasetView.RESALE) == paths.resale

    def test_beside(self) -> None:
        paths = DatasetPaths.beside("/srv/exports/nawy.csv")

        assert paths.combined == Path("/srv/exports/nawy.csv")
        assert paths.primary == Path("/srv/exports/primary_nawy.csv")
        assert paths.resale == Path("/srv/exports/resale_nawy.csv")


class TestDatasetConfig:
    """Tests for DatasetConfig."""

    def test_default_values(self) -> None:
        config = DatasetConfig()

        assert config.paths == DatasetPaths()
        assert config.bounds == SchemaBounds()
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self, clean_env) -> None:
        config = DatasetConfig.from_env()

        assert config.paths == DatasetPaths()
        assert config.bounds == SchemaBounds()
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env) -> None:
        env_vars = {
            "PROJECT_DATASET_PATH": "/data/all.csv",
            "RESALE_DATASET_PATH": "/cache/resale.csv",
            "MAX_PROPERTY_TYPES": "4",
            "MAX_PROPERTIES_PER_TYPE": "10",
            "MAX_BROCHURES": "2",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env_vars):
            config = DatasetConfig.from_env()

        assert config.paths.combined == Path("/data/all.csv")
        assert config.paths.primary == Path("/data/primary_all.csv")
        assert config.paths.resale == Path("/cache/resale.csv")
        assert config.bounds == SchemaBounds(4, 10, 2)
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_blank_bound_uses_default(self, clean_env) -> None:
        with patch.dict(os.environ, {"MAX_BROCHURES": ""}):
            assert DatasetConfig.from_env().bounds.max_brochures == 38

    def test_from_env_invalid_integer(self, clean_env) -> None:
        with patch.dict(os.environ, {"MAX_PROPERTY_TYPES": "eight"}):
            with pytest.raises(ConfigurationError, match="MAX_PROPERTY_TYPES"):
                DatasetConfig.from_env()

    def test_from_env_negative_bound(self, clean_env) -> None:
        with patch.dict(os.environ, {"MAX_BROCHURES": "-1"}):
            with pytest.raises(ConfigurationError):
                DatasetConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger("project_dataset").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("project_dataset").level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Unknown levels fall back to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        assert any(isinstance(h.formatter, JsonFormatter) for h in logging.getLogger().handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_faker_logger_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    @staticmethod
    def _record(level: int = logging.INFO, msg: str = "Loaded %d projects", exc_info=None) -> logging.LogRecord:
        return logging.LogRecord(
            name="project_dataset.loader",
            level=level,
            pathname=__file__,
            lineno=1,
            msg=msg,
            args=(3,) if "%d" in msg else (),
            exc_info=exc_info,
        )

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "project_dataset.loader"
        assert data["message"] == "Loaded 3 projects"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(logging.ERROR, "Error occurred", exc_info)))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_context(self) -> None:
        record = self._record()
        record.view = "resale"
        record.path = Path("data/resale_projects.csv")
        record.count = 3

        data = json.loads(JsonFormatter().format(record))

        assert data["view"] == "resale"
        assert data["path"] == "data/resale_projects.csv"
        assert data["count"] == 3
        assert "row_number" not in data

    def test_logger_extra_reaches_output(self) -> None:
        stream = io.StringIO()
        setup_logging(format_type="json", stream=stream)

        get_logger("project_dataset.assembler").warning("Dropping row %d", 4, extra={"row_number": 4})

        data = json.loads(stream.getvalue().splitlines()[-1])
        assert data["message"] == "Dropping row 4"
        assert data["row_number"] == 4


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        logger = get_logger("test.module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_get_logger_same_instance(self) -> None:
        assert get_logger("test.same") is get_logger("test.same")


class TestPackageInit:
    """Tests for project_dataset __init__.py."""

    def test_version_exported(self) -> None:
        from project_dataset import __version__

        assert isinstance(__version__, str)
