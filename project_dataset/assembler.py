"""Assembly of flat export rows into Project records.

Each row is first grouped by decoded column path, then walked up to the
configured schema bounds. Property types keep their source slot order, as do
the properties under each of them.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from project_dataset.config import SchemaBounds
from project_dataset.exceptions import MalformedRowError
from project_dataset.logging import get_logger
from project_dataset.models.project import Project, Property, PropertyType
from project_dataset.schema.columns import (
    BOOLEAN_FIELDS,
    BROCHURES,
    BUSINESS_TYPES,
    COUNT_DICT_KEYS,
    FINISHING,
    NUMBER_FIELDS,
    PROPERTIES,
    PROPERTY_BOOLEAN_FIELDS,
    PROPERTY_FIELDS,
    PROPERTY_TEXT_FIELDS,
    PROPERTY_TYPES,
    PROPERTY_TYPES_NAMES,
    TEXT_FIELDS,
)
from project_dataset.schema.paths import CountDict, IndexedScalar, NestedIndexed, parse_field_path

logger = get_logger(__name__)


def parse_number(value: Any) -> float | None:
    """Parse a numeric cell; blank or unparsable text gives ``None``."""
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    return None if math.isnan(parsed) else parsed


def parse_boolean(value: Any) -> bool:
    """Parse a flag cell: only ``"true"`` and ``"1"`` are true."""
    if not value:
        return False
    return value.strip().lower() in ("true", "1")


def parse_text(value: Any) -> str | None:
    if not value:
        return None
    return value.strip() or None


def coalesce(value: float | None, minimum: float | None, maximum: float | None) -> float | None:
    """Resolve a single value from its ``value``, ``min`` and ``max`` cells.

    Precedence is the explicit value, then the minimum, then the maximum.
    Zero is a real value and is never skipped.
    """
    for candidate in (value, minimum, maximum):
        if candidate is not None:
            return candidate
    return None


@dataclass
class DecodedRow:
    """Cells of one row grouped by decoded path."""

    scalars: dict[str, Any] = field(default_factory=dict)
    counts: dict[str, dict[str, Any]] = field(default_factory=dict)
    indexed: dict[str, dict[int, dict[str | None, Any]]] = field(default_factory=dict)
    nested: dict[tuple[str, str], dict[int, dict[int, dict[str, Any]]]] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DecodedRow":
        decoded = cls()
        for key, value in row.items():
            path = parse_field_path(key)
            if isinstance(path, CountDict):
                decoded.counts.setdefault(path.prefix, {})[path.key] = value
            elif isinstance(path, IndexedScalar):
                slots = decoded.indexed.setdefault(path.collection, {})
                slots.setdefault(path.index, {})[path.field] = value
            elif isinstance(path, NestedIndexed):
                outer = decoded.nested.setdefault((path.outer, path.inner), {})
                outer.setdefault(path.outer_index, {}).setdefault(path.inner_index, {})[path.field] = value
            else:
                decoded.scalars[path.name] = value
        return decoded

    def slot(self, collection: str, index: int) -> dict[str | None, Any]:
        return self.indexed.get(collection, {}).get(index, {})

    def nested_slot(self, outer: str, inner: str, i: int, j: int) -> dict[str, Any]:
        return self.nested.get((outer, inner), {}).get(i, {}).get(j, {})


def present_keys(counts: Mapping[str, Any], prefix: str) -> tuple[str, ...]:
    """Keys of a count dictionary whose count is positive.

    Known keys come first in canonical order, unknown keys follow in column
    order.
    """
    known = COUNT_DICT_KEYS.get(prefix, ())
    ordered = [key for key in known if key in counts]
    ordered.extend(key for key in counts if key not in known)
    present = []
    for key in ordered:
        count = parse_number(counts[key])
        if count is not None and count > 0:
            present.append(key)
    return tuple(present)


def _order_business_types(found: Iterable[str]) -> tuple[str, ...]:
    found = list(dict.fromkeys(found))
    known = COUNT_DICT_KEYS[BUSINESS_TYPES]
    return tuple([bt for bt in known if bt in found] + [bt for bt in found if bt not in known])


def assemble_property(cells: Mapping[str, Any]) -> Property | None:
    """Build one property from its slot, or ``None`` for an empty slot."""
    if not (parse_text(cells.get("property_id")) or parse_text(cells.get("business_type"))):
        return None

    values: dict[str, Any] = {}
    for name in PROPERTY_FIELDS:
        raw = cells.get(name)
        if name in PROPERTY_TEXT_FIELDS:
            values[name] = parse_text(raw)
        elif name in PROPERTY_BOOLEAN_FIELDS:
            values[name] = parse_boolean(raw)
        else:
            values[name] = parse_number(raw)

    if values["business_type"]:
        values["business_type"] = values["business_type"].lower()
    values["price"] = coalesce(values["price"], values["min_price"], values["max_price"])
    values["area"] = coalesce(values["area"], values["min_area"], values["max_area"])

    prop = Property(**values)
    return prop if prop.has_identifying_data else None


def assemble_property_types(decoded: DecodedRow, bounds: SchemaBounds) -> list[PropertyType]:
    property_types = []
    for i in range(bounds.max_property_types):
        slot = decoded.slot(PROPERTY_TYPES, i)
        name = parse_text(slot.get("name"))
        if name is None:
            continue

        properties = []
        for j in range(bounds.max_properties_per_type):
            prop = assemble_property(decoded.nested_slot(PROPERTY_TYPES, PROPERTIES, i, j))
            if prop is not None:
                properties.append(prop)

        property_types.append(
            PropertyType(
                name=name,
                property_type_id=parse_number(slot.get("property_type_id")),
                property_types_count=parse_number(slot.get("property_types_count")),
                properties=properties,
            )
        )
    return property_types


def derive_business_types(
    declared: tuple[str, ...],
    property_types: list[PropertyType],
    project_name: str | None = None,
) -> tuple[str, ...]:
    """Business types of a project.

    Nested properties decide whenever any of them carries a business type;
    the declared count columns are only used when none does. Disagreement
    between the two is logged.
    """
    nested = _order_business_types(
        prop.business_type
        for property_type in property_types
        for prop in property_type.properties
        if prop.business_type
    )
    if not nested:
        return declared
    if declared and set(declared) != set(nested):
        logger.warning(
            "Business types of %r disagree: count columns %s, nested properties %s",
            project_name,
            list(declared),
            list(nested),
            extra={"project": project_name},
        )
    return nested


def assemble_project(row: Mapping[str, Any], bounds: SchemaBounds) -> Project:
    """Build one project from a flat row.

    Raises
    ------
    MalformedRowError
        If any cell cannot be interpreted. No partial project is returned.
    """
    try:
        decoded = DecodedRow.from_row(row)
        scalars = decoded.scalars

        values: dict[str, Any] = {}
        for name in TEXT_FIELDS:
            values[name] = parse_text(scalars.get(name))
        for name in NUMBER_FIELDS:
            values[name] = parse_number(scalars.get(name))
        for name in BOOLEAN_FIELDS:
            values[name] = parse_boolean(scalars.get(name))

        brochures = []
        for i in range(bounds.max_brochures):
            brochure = parse_text(decoded.slot(BROCHURES, i).get(None))
            if brochure is not None:
                brochures.append(brochure)

        type_names = present_keys(decoded.counts.get(PROPERTY_TYPES_NAMES, {}), PROPERTY_TYPES_NAMES)
        property_types = assemble_property_types(decoded, bounds)

        return Project(
            **values,
            business_types=derive_business_types(
                present_keys(decoded.counts.get(BUSINESS_TYPES, {}), BUSINESS_TYPES),
                property_types,
                values["name"],
            ),
            finishing=present_keys(decoded.counts.get(FINISHING, {}), FINISHING),
            property_types_names=", ".join(type_names) if type_names else None,
            brochures=brochures,
            property_types=property_types,
        )
    except Exception as exc:
        raise MalformedRowError(f"Cannot assemble project row: {exc}") from exc


@dataclass
class AssemblyReport:
    """Projects assembled from a row set, and the rows that were dropped."""

    projects: list[Project] = field(default_factory=list)
    dropped: list[MalformedRowError] = field(default_factory=list)


def assemble_rows(rows: Iterable[Mapping[str, Any]], bounds: SchemaBounds) -> AssemblyReport:
    """Assemble every row, isolating malformed ones."""
    report = AssemblyReport()
    for row_number, row in enumerate(rows, start=1):
        try:
            report.projects.append(assemble_project(row, bounds))
        except MalformedRowError as exc:
            exc.row_number = row_number
            logger.warning("Dropping row %d: %s", row_number, exc, extra={"row_number": row_number})
            report.dropped.append(exc)
    return report
