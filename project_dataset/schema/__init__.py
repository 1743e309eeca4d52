"""Flat column schema: path decoding and the canonical header."""

from project_dataset.schema.columns import build_header
from project_dataset.schema.paths import (
    CountDict,
    FieldPath,
    IndexedScalar,
    NestedIndexed,
    Scalar,
    format_field_path,
    parse_field_path,
)

__all__ = [
    "CountDict",
    "FieldPath",
    "IndexedScalar",
    "NestedIndexed",
    "Scalar",
    "build_header",
    "format_field_path",
    "parse_field_path",
]
