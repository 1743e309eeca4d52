"""Pytest configuration and fixtures."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from project_dataset.config import DatasetConfig, DatasetPaths, SchemaBounds
from project_dataset.schema import build_header
from project_dataset.schema.columns import property_column, property_type_column
from project_dataset.sinks import CsvFileSink

PropertyTypeSpec = tuple[str, Sequence[dict[str, str]]]


def unit(property_id: int, business_type: str, price: int = 3_000_000, area: int = 120, **cells: str) -> dict[str, str]:
    """Cells of one property slot."""
    return {
        "property_id": str(property_id),
        "business_type": business_type,
        "price": str(price),
        "area": str(area),
        **cells,
    }


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def bounds() -> SchemaBounds:
    """Production schema bounds."""
    return SchemaBounds()


@pytest.fixture
def make_row(bounds: SchemaBounds) -> Callable[..., dict[str, str]]:
    """Build a flat row over the canonical header."""

    def _make(
        name: str = "Parkside",
        property_types: Sequence[PropertyTypeSpec] = (),
        counts: dict[str, int] | None = None,
        **scalars: str,
    ) -> dict[str, str]:
        row = {column: "" for column in build_header(bounds)}
        row["name"] = name
        row.update(scalars)
        for column, value in (counts or {}).items():
            row[column] = str(value)
        for i, (type_name, properties) in enumerate(property_types):
            row[property_type_column(i, "name")] = type_name
            row[property_type_column(i, "property_types_count")] = str(len(properties))
            for j, cells in enumerate(properties):
                for field, value in cells.items():
                    row[property_column(i, j, field)] = value
        return row

    return _make


@pytest.fixture
def parkside_row(make_row: Callable[..., dict[str, str]]) -> dict[str, str]:
    """Three developer-sale and two resale apartments."""
    return make_row(
        name="Parkside",
        developer_name="Greenline Developments",
        area_name="New Cairo",
        counts={"business_types.developer_sale": 3, "business_types.resale": 2},
        property_types=[
            (
                "Apartment",
                [
                    unit(1, "developer_sale", price=3_000_000),
                    unit(2, "resale", price=2_500_000),
                    unit(3, "developer_sale", price=3_200_000),
                    unit(4, "resale", price=2_700_000),
                    unit(5, "developer_sale", price=3_400_000),
                ],
            )
        ],
    )


@pytest.fixture
def write_csv(bounds: SchemaBounds) -> Callable[[Path, list[dict[str, str]]], Path]:
    """Write rows under the canonical header."""

    def _write(path: Path, rows: list[dict[str, str]]) -> Path:
        return CsvFileSink().write_rows(path, build_header(bounds), rows)

    return _write


@pytest.fixture
def dataset_config(tmp_path: Path) -> DatasetConfig:
    """Config whose files all live in a temporary directory."""
    return DatasetConfig(paths=DatasetPaths.beside(tmp_path / "projects.csv"))


@pytest.fixture
def make_unit() -> Callable[..., dict[str, str]]:
    """Build the cells of one property slot."""
    return unit
