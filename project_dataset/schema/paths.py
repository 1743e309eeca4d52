"""Parsing of flat column names into structured field paths.

The export flattens nested records into column names such as::

    name                                      -> Scalar
    business_types.resale                     -> CountDict
    bruchure[12]                              -> IndexedScalar (no field)
    property_types[3].name                    -> IndexedScalar
    property_types[3].properties[7].price     -> NestedIndexed

Parsing is purely syntactic. Indices are not checked against any bound;
callers iterate up to their own configured limits. Any key that does not fit
one of the shapes above decodes to ``Scalar(key)``.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Union

_SEGMENT = re.compile(r"^([^\[\]]+)(?:\[(\d+)\])?$")


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class CountDict:
    prefix: str
    key: str


@dataclass(frozen=True)
class IndexedScalar:
    collection: str
    index: int
    field: str | None = None


@dataclass(frozen=True)
class NestedIndexed:
    outer: str
    outer_index: int
    inner: str
    inner_index: int
    field: str


FieldPath = Union[Scalar, CountDict, IndexedScalar, NestedIndexed]


def _split(key: str) -> list[tuple[str, int | None]] | None:
    segments = []
    for part in key.split("."):
        match = _SEGMENT.match(part)
        if match is None:
            return None
        name, index = match.groups()
        segments.append((name, int(index) if index is not None else None))
    return segments


@lru_cache(maxsize=16384)
def parse_field_path(key: str) -> FieldPath:
    """Decode one flat column name."""
    segments = _split(key)
    if segments is None:
        return Scalar(key)

    if len(segments) == 1:
        name, index = segments[0]
        if index is None:
            return Scalar(name)
        return IndexedScalar(name, index)

    if len(segments) == 2:
        (first, first_index), (second, second_index) = segments
        if second_index is not None:
            return Scalar(key)
        if first_index is None:
            return CountDict(first, second)
        return IndexedScalar(first, first_index, second)

    if len(segments) == 3:
        (outer, outer_index), (inner, inner_index), (field, field_index) = segments
        if outer_index is not None and inner_index is not None and field_index is None:
            return NestedIndexed(outer, outer_index, inner, inner_index, field)

    return Scalar(key)


def format_field_path(path: FieldPath) -> str:
    """Render a field path back into its flat column name."""
    if isinstance(path, Scalar):
        return path.name
    if isinstance(path, CountDict):
        return f"{path.prefix}.{path.key}"
    if isinstance(path, IndexedScalar):
        base = f"{path.collection}[{path.index}]"
        return base if path.field is None else f"{base}.{path.field}"
    return f"{path.outer}[{path.outer_index}].{path.inner}[{path.inner_index}].{path.field}"
