"""Configuration management for project-dataset."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from project_dataset.exceptions import ConfigurationError
from project_dataset.models.enums import DatasetView


@dataclass(frozen=True)
class SchemaBounds:
    """Fixed cardinalities of the flat export's repeated columns.

    These are properties of the export schema, not of the data: a source
    with fewer populated slots still declares every column up to the bound.
    """

    max_property_types: int = 8
    max_properties_per_type: int = 30
    max_brochures: int = 38

    def __post_init__(self) -> None:
        for name in ("max_property_types", "max_properties_per_type", "max_brochures"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")


@dataclass
class DatasetPaths:
    """Backing files of the three dataset views."""

    combined: Path = field(default_factory=lambda: Path("data/projects.csv"))
    primary: Path = field(default_factory=lambda: Path("data/primary_projects.csv"))
    resale: Path = field(default_factory=lambda: Path("data/resale_projects.csv"))

    def path_for(self, view: DatasetView) -> Path:
        """Get the backing file of a view."""
        if view is DatasetView.PRIMARY:
            return self.primary
        if view is DatasetView.RESALE:
            return self.resale
        return self.combined

    @classmethod
    def beside(cls, combined: str | Path) -> "DatasetPaths":
        """Place the partition files next to the combined source."""
        combined = Path(combined)
        return cls(
            combined=combined,
            primary=combined.with_name(f"primary_{combined.name}"),
            resale=combined.with_name(f"resale_{combined.name}"),
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass
class DatasetConfig:
    """Main configuration for project-dataset."""

    paths: DatasetPaths = field(default_factory=DatasetPaths)
    bounds: SchemaBounds = field(default_factory=SchemaBounds)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "DatasetConfig":
        """Create config from environment variables."""
        combined = os.getenv("PROJECT_DATASET_PATH")
        paths = DatasetPaths.beside(combined) if combined else DatasetPaths()
        if os.getenv("PRIMARY_DATASET_PATH"):
            paths.primary = Path(os.environ["PRIMARY_DATASET_PATH"])
        if os.getenv("RESALE_DATASET_PATH"):
            paths.resale = Path(os.environ["RESALE_DATASET_PATH"])

        bounds = SchemaBounds(
            max_property_types=_env_int("MAX_PROPERTY_TYPES", 8),
            max_properties_per_type=_env_int("MAX_PROPERTIES_PER_TYPE", 30),
            max_brochures=_env_int("MAX_BROCHURES", 38),
        )

        return cls(
            paths=paths,
            bounds=bounds,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
