"""Encoding of Project records into the flat export layout."""

from typing import Any

from project_dataset.config import SchemaBounds
from project_dataset.models.project import Project, Property
from project_dataset.schema.columns import (
    BOOLEAN_FIELDS,
    BUSINESS_TYPES,
    COUNT_DICT_KEYS,
    FINISHING,
    PROJECT_SCALARS,
    PROPERTY_FIELDS,
    PROPERTY_TYPES_NAMES,
    brochure_column,
    build_header,
    count_column,
    property_column,
    property_type_column,
)


def serialize_value(value: Any) -> str:
    """Serialize a cell value for CSV output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def _count_cells(prefix: str, counts: dict[str, int]) -> dict[str, str]:
    cells = {count_column(prefix, key): "0" for key in COUNT_DICT_KEYS[prefix]}
    for key, count in counts.items():
        cells[count_column(prefix, key)] = str(count)
    return cells


def _business_type_counts(project: Project) -> dict[str, int]:
    counts = {bt: 0 for bt in project.business_types}
    nested = [prop.business_type for _, prop in project.iter_properties() if prop.business_type]
    if not nested:
        return {bt: 1 for bt in project.business_types}
    for business_type in nested:
        counts[business_type] = counts.get(business_type, 0) + 1
    return counts


def property_cells(prop: Property, i: int, j: int) -> dict[str, str]:
    return {property_column(i, j, name): serialize_value(getattr(prop, name)) for name in PROPERTY_FIELDS}


def to_flat_row(project: Project, bounds: SchemaBounds) -> dict[str, str]:
    """Encode a project into one flat row.

    Collections beyond the schema bounds are truncated. Boolean flags that
    are false are written blank, which decodes back to false.
    """
    row = {name: "" for name in build_header(bounds)}
    for name in PROJECT_SCALARS:
        value = getattr(project, name)
        if name in BOOLEAN_FIELDS:
            row[name] = "true" if value else ""
        else:
            row[name] = serialize_value(value)

    type_names = project.property_types_names.split(", ") if project.property_types_names else []
    row.update(_count_cells(PROPERTY_TYPES_NAMES, {name: 1 for name in type_names}))
    row.update(_count_cells(BUSINESS_TYPES, _business_type_counts(project)))
    row.update(_count_cells(FINISHING, {name: 1 for name in project.finishing}))

    for i, brochure in enumerate(project.brochures[: bounds.max_brochures]):
        row[brochure_column(i)] = brochure

    for i, property_type in enumerate(project.property_types[: bounds.max_property_types]):
        row[property_type_column(i, "name")] = property_type.name
        row[property_type_column(i, "property_type_id")] = serialize_value(property_type.property_type_id)
        row[property_type_column(i, "property_types_count")] = serialize_value(property_type.property_types_count)
        for j, prop in enumerate(property_type.properties[: bounds.max_properties_per_type]):
            row.update(property_cells(prop, i, j))
    return row


def extend_header(header: list[str], rows: list[dict[str, str]]) -> list[str]:
    """Append columns that rows carry beyond the header, in first-seen order."""
    extended = list(header)
    known = set(header)
    for row in rows:
        for key in row:
            if key not in known:
                known.add(key)
                extended.append(key)
    return extended
