"""Output sinks for flat project exports."""

from project_dataset.sinks.csv_file import CsvFileSink
from project_dataset.sinks.serialization import extend_header, serialize_value, to_flat_row

__all__ = ["CsvFileSink", "extend_header", "serialize_value", "to_flat_row"]
