"""Tests for business-type partitioning."""

from pathlib import Path

import pytest

from project_dataset.assembler import assemble_rows
from project_dataset.config import DatasetPaths, SchemaBounds
from project_dataset.exceptions import SourceNotFoundError
from project_dataset.loader import FlatTable, load_projects, read_table
from project_dataset.models.enums import BusinessType, DatasetView
from project_dataset.partition import ColumnIndex, Partitioner
from project_dataset.schema import build_header


@pytest.fixture
def partitioner(bounds: SchemaBounds) -> Partitioner:
    return Partitioner(bounds)


@pytest.fixture
def combined(make_row, make_unit, parkside_row, bounds: SchemaBounds) -> FlatTable:
    rows = [
        parkside_row,
        make_row(
            name="Lakeview",
            counts={"business_types.developer_sale": 2},
            property_types=[
                ("Villa", [make_unit(10, "developer_sale"), make_unit(11, "developer_sale")]),
                ("Townhouse", [make_unit(12, "developer_sale")]),
            ],
        ),
        make_row(
            name="Old Town",
            counts={"business_types.resale": 1},
            property_types=[("Duplex", [make_unit(20, "resale")])],
        ),
    ]
    return FlatTable(header=build_header(bounds), rows=rows)


def _names(table: FlatTable) -> list[str]:
    return [row["name"] for row in table.rows]


class TestColumnIndex:
    """Tests for header indexing."""

    def test_indexes_rewritten_columns(self, bounds: SchemaBounds) -> None:
        index = ColumnIndex.from_header(build_header(bounds), bounds)

        assert index.business_types == {
            "developer_sale": "business_types.developer_sale",
            "resale": "business_types.resale",
        }
        assert len(index.type_counts) == bounds.max_property_types
        assert len(index.slots) == bounds.max_property_types * bounds.max_properties_per_type
        assert index.slots[(2, 5)]["price"] == "property_types[2].properties[5].price"

    def test_ignores_columns_beyond_bounds(self) -> None:
        small = SchemaBounds(max_property_types=1, max_properties_per_type=1)
        header = [
            "property_types[0].properties[0].business_type",
            "property_types[0].properties[1].business_type",
            "property_types[1].property_types_count",
        ]
        index = ColumnIndex.from_header(header, small)

        assert list(index.slots) == [(0, 0)]
        assert index.type_counts == {}


class TestParksideScenario:
    """Three developer-sale and two resale apartments."""

    def test_primary_row(self, partitioner: Partitioner, combined: FlatTable) -> None:
        row = partitioner.partition(combined, BusinessType.DEVELOPER_SALE).rows[0]

        assert row["name"] == "Parkside"
        assert row["business_types.resale"] == "0"
        assert row["business_types.developer_sale"] == "3"
        assert row["property_types[0].property_types_count"] == "3"
        assert row["property_types[0].properties[1].business_type"] == ""
        assert row["property_types[0].properties[1].price"] == ""

    def test_resale_row(self, partitioner: Partitioner, combined: FlatTable) -> None:
        row = partitioner.partition(combined, BusinessType.RESALE).rows[0]

        assert row["business_types.developer_sale"] == "0"
        assert row["business_types.resale"] == "2"
        assert row["property_types[0].property_types_count"] == "2"

    def test_source_rows_untouched(self, partitioner: Partitioner, combined: FlatTable) -> None:
        partitioner.partition(combined, BusinessType.RESALE)
        assert combined.rows[0]["property_types[0].properties[0].business_type"] == "developer_sale"


class TestPartitionedViews:
    """Purity, counts and coverage of re-decoded views."""

    @pytest.mark.parametrize("target", list(BusinessType))
    def test_purity_and_counts(
        self, partitioner: Partitioner, combined: FlatTable, bounds: SchemaBounds, target: BusinessType
    ) -> None:
        table = partitioner.partition(combined, target)
        projects = assemble_rows(table.rows, bounds).projects

        assert projects
        for project in projects:
            assert project.business_types == (target.value,)
            for property_type in project.property_types:
                assert property_type.property_types_count == len(property_type.properties)
                assert all(p.business_type == target.value for p in property_type.properties)

    def test_coverage(self, partitioner: Partitioner, combined: FlatTable, bounds: SchemaBounds) -> None:
        primary = partitioner.partition(combined, BusinessType.DEVELOPER_SALE)
        resale = partitioner.partition(combined, BusinessType.RESALE)

        assert _names(primary) == ["Parkside", "Lakeview"]
        assert _names(resale) == ["Parkside", "Old Town"]

        primary_ids = {p.property_id for _, p in assemble_rows(primary.rows[:1], bounds).projects[0].iter_properties()}
        resale_ids = {p.property_id for _, p in assemble_rows(resale.rows[:1], bounds).projects[0].iter_properties()}
        assert primary_ids == {1.0, 3.0, 5.0}
        assert resale_ids == {2.0, 4.0}

    def test_header_preserved(self, partitioner: Partitioner, combined: FlatTable) -> None:
        table = partitioner.partition(combined, BusinessType.RESALE)

        assert table.header == combined.header
        assert all(list(row) == combined.header for row in table.rows)

    def test_nested_properties_override_count_columns(
        self, partitioner: Partitioner, make_row, make_unit, bounds: SchemaBounds
    ) -> None:
        row = make_row(
            name="Stale Counts",
            counts={"business_types.resale": 2},
            property_types=[("Villa", [make_unit(1, "developer_sale")])],
        )
        table = FlatTable(header=build_header(bounds), rows=[row])

        assert partitioner.partition(table, BusinessType.RESALE).rows == []
        assert _names(partitioner.partition(table, BusinessType.DEVELOPER_SALE)) == ["Stale Counts"]

    def test_count_columns_used_without_nested_types(
        self, partitioner: Partitioner, make_row, bounds: SchemaBounds
    ) -> None:
        row = make_row(name="Flat Only", counts={"business_types.resale": 4, "business_types.developer_sale": 1})
        table = FlatTable(header=build_header(bounds), rows=[row])

        resale = partitioner.partition(table, BusinessType.RESALE).rows
        assert resale[0]["business_types.resale"] == "4"
        assert resale[0]["business_types.developer_sale"] == "0"

    def test_untyped_slots_cleared(
        self, partitioner: Partitioner, make_row, make_unit, bounds: SchemaBounds
    ) -> None:
        row = make_row(
            property_types=[("Villa", [make_unit(1, "resale"), {"property_id": "2", "price": "100"}])],
        )
        table = partitioner.partition(FlatTable(header=build_header(bounds), rows=[row]), BusinessType.RESALE)
        project = assemble_rows(table.rows, bounds).projects[0]

        assert [p.property_id for _, p in project.iter_properties()] == [1.0]
        assert table.rows[0]["property_types[0].properties[1].price"] == ""

    def test_malformed_rows_skipped(self, partitioner: Partitioner, make_row, bounds: SchemaBounds) -> None:
        good = make_row(name="Good", counts={"business_types.resale": 1})
        table = FlatTable(header=build_header(bounds), rows=[{"name": 5}, good])

        assert _names(partitioner.partition(table, BusinessType.RESALE)) == ["Good"]

    def test_properties_under_unnamed_type_do_not_override_counts(
        self, partitioner: Partitioner, make_row, make_unit, bounds: SchemaBounds
    ) -> None:
        row = make_row(
            name="Orphan Units",
            counts={"business_types.resale": 1},
            property_types=[("", [make_unit(1, "resale", price=100)])],
        )
        table = FlatTable(header=build_header(bounds), rows=[row])

        resale = partitioner.partition(table, BusinessType.RESALE)

        assert resale.rows[0]["business_types.resale"] == "1"
        assert assemble_rows(resale.rows, bounds).projects[0].business_types == ("resale",)
        assert partitioner.partition(table, BusinessType.DEVELOPER_SALE).rows == []

    def test_business_type_case_ignored(
        self, partitioner: Partitioner, make_row, make_unit, bounds: SchemaBounds
    ) -> None:
        row = make_row(
            name="Mixed Case",
            property_types=[("Villa", [make_unit(1, "Resale"), make_unit(2, "DEVELOPER_SALE")])],
        )
        table = FlatTable(header=build_header(bounds), rows=[row])

        resale = partitioner.partition(table, BusinessType.RESALE)
        primary = partitioner.partition(table, BusinessType.DEVELOPER_SALE)

        assert resale.rows[0]["property_types[0].property_types_count"] == "1"
        assert resale.rows[0]["business_types.resale"] == "1"
        resale_units = [p for _, p in assemble_rows(resale.rows, bounds).projects[0].iter_properties()]
        primary_units = [p for _, p in assemble_rows(primary.rows, bounds).projects[0].iter_properties()]
        assert [(p.property_id, p.business_type) for p in resale_units] == [(1.0, "resale")]
        assert [(p.property_id, p.business_type) for p in primary_units] == [(2.0, "developer_sale")]


class TestMaterialize:
    """Tests for writing partition files."""

    def test_missing_source(self, partitioner: Partitioner, tmp_path: Path) -> None:
        with pytest.raises(SourceNotFoundError):
            partitioner.materialize(tmp_path / "absent.csv", BusinessType.RESALE, tmp_path / "out.csv")
        assert not (tmp_path / "out.csv").exists()

    def test_materialize_single(
        self, partitioner: Partitioner, combined: FlatTable, write_csv, tmp_path: Path, bounds: SchemaBounds
    ) -> None:
        source = write_csv(tmp_path / "projects.csv", combined.rows)
        count = partitioner.materialize(source, BusinessType.RESALE, tmp_path / "resale.csv")

        assert count == 2
        assert read_table(tmp_path / "resale.csv").header == combined.header

    def test_materialize_views(
        self, partitioner: Partitioner, combined: FlatTable, write_csv, tmp_path: Path, bounds: SchemaBounds
    ) -> None:
        paths = DatasetPaths.beside(tmp_path / "projects.csv")
        write_csv(paths.combined, combined.rows)

        written = partitioner.materialize_views(paths)

        assert written == {DatasetView.PRIMARY: 2, DatasetView.RESALE: 2}
        primary = load_projects(paths.primary, bounds).projects
        parkside = primary[0]
        assert parkside.name == "Parkside"
        assert parkside.business_types == ("developer_sale",)
        assert parkside.property_types[0].property_types_count == 3.0
