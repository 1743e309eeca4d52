"""Derivation of business-type-pure views from the combined export.

A partition keeps the source header untouched and rewrites cells only:
foreign business-type counts are zeroed, foreign property slots are blanked
and each property type's declared count is recomputed from what survives.
The result is read back through the same assembler as any hand-written file.
"""

from dataclasses import dataclass, field
from pathlib import Path

from project_dataset.assembler import assemble_project
from project_dataset.config import DatasetPaths, SchemaBounds
from project_dataset.exceptions import MalformedRowError
from project_dataset.loader import FlatTable, read_table
from project_dataset.logging import get_logger
from project_dataset.models.enums import BusinessType, DatasetView
from project_dataset.schema.columns import BUSINESS_TYPES, PROPERTIES, PROPERTY_TYPES
from project_dataset.schema.paths import CountDict, IndexedScalar, NestedIndexed, parse_field_path
from project_dataset.sinks.csv_file import CsvFileSink

logger = get_logger(__name__)


@dataclass
class ColumnIndex:
    """Positions of the columns a partition rewrites, taken from a header."""

    business_types: dict[str, str] = field(default_factory=dict)
    type_names: dict[int, str] = field(default_factory=dict)
    type_counts: dict[int, str] = field(default_factory=dict)
    slots: dict[tuple[int, int], dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_header(cls, header: list[str], bounds: SchemaBounds) -> "ColumnIndex":
        index = cls()
        for column in header:
            path = parse_field_path(column)
            if isinstance(path, CountDict) and path.prefix == BUSINESS_TYPES:
                index.business_types[path.key] = column
            elif isinstance(path, IndexedScalar) and path.collection == PROPERTY_TYPES:
                if path.index >= bounds.max_property_types:
                    continue
                if path.field == "name":
                    index.type_names[path.index] = column
                elif path.field == "property_types_count":
                    index.type_counts[path.index] = column
            elif (
                isinstance(path, NestedIndexed)
                and path.outer == PROPERTY_TYPES
                and path.inner == PROPERTIES
                and path.outer_index < bounds.max_property_types
                and path.inner_index < bounds.max_properties_per_type
            ):
                slot = index.slots.setdefault((path.outer_index, path.inner_index), {})
                slot[path.field] = column
        return index


def _cell(row: dict[str, str], column: str | None) -> str:
    if column is None:
        return ""
    return (row.get(column) or "").strip()


class Partitioner:
    """Split the combined export into one file per business type."""

    def __init__(self, bounds: SchemaBounds, sink: CsvFileSink | None = None) -> None:
        self.bounds = bounds
        self.sink = sink or CsvFileSink()

    def partition_row(
        self,
        row: dict[str, str],
        columns: ColumnIndex,
        target: BusinessType,
    ) -> dict[str, str]:
        """Restrict one included row to ``target``."""
        result = dict(row)
        has_nested_types = False
        retained_total = 0

        for (i, _), slot in columns.slots.items():
            business_type = _cell(row, slot.get("business_type")).lower()
            # Slots under an unnamed property type are never decoded.
            if business_type and _cell(row, columns.type_names.get(i)):
                has_nested_types = True
            occupied = bool(_cell(row, slot.get("property_id")) or business_type)
            if occupied and business_type != target.value:
                for column in slot.values():
                    result[column] = ""

        for i, count_column in columns.type_counts.items():
            if not _cell(row, columns.type_names.get(i)):
                continue
            retained = sum(
                1
                for (slot_i, _), slot in columns.slots.items()
                if slot_i == i and _cell(result, slot.get("business_type")).lower() == target.value
            )
            result[count_column] = str(retained)
            retained_total += retained

        for key, column in columns.business_types.items():
            if key != target.value:
                result[column] = "0"
            elif has_nested_types:
                result[column] = str(retained_total)
        return result

    def partition(self, table: FlatTable, target: BusinessType) -> FlatTable:
        """Derive the rows of one business type from a combined table."""
        columns = ColumnIndex.from_header(table.header, self.bounds)
        rows = []
        for row_number, row in enumerate(table.rows, start=1):
            try:
                project = assemble_project(row, self.bounds)
            except MalformedRowError as exc:
                logger.warning(
                    "Skipping row %d while partitioning: %s", row_number, exc, extra={"row_number": row_number}
                )
                continue
            if target.value in project.business_types:
                rows.append(self.partition_row(row, columns, target))
        return FlatTable(header=list(table.header), rows=rows)

    def materialize(self, source: str | Path, target: BusinessType, destination: str | Path) -> int:
        """Write the ``target`` partition of ``source`` to ``destination``."""
        table = self.partition(read_table(source), target)
        path = self.sink.write_rows(destination, table.header, table.rows)
        logger.info("Partitioned %s rows: %d projects -> %s", target.value, len(table.rows), path)
        return len(table.rows)

    def materialize_views(self, paths: DatasetPaths) -> dict[DatasetView, int]:
        """Write both partitioned views of the combined source."""
        source = read_table(paths.combined)
        written = {}
        for view in (DatasetView.PRIMARY, DatasetView.RESALE):
            table = self.partition(source, view.business_type)
            path = self.sink.write_rows(paths.path_for(view), table.header, table.rows)
            written[view] = len(table.rows)
            logger.info(
                "Partitioned %s view: %d projects -> %s",
                view.value,
                len(table.rows),
                path,
                extra={"view": view.value, "path": path, "count": len(table.rows)},
            )
        return written
