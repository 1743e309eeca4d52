"""Reading flat project exports from disk."""

from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from project_dataset.assembler import AssemblyReport, assemble_rows
from project_dataset.config import SchemaBounds
from project_dataset.exceptions import DatasetIOError, SourceNotFoundError
from project_dataset.logging import get_logger

logger = get_logger(__name__)


@dataclass
class FlatTable:
    """Header and rows of a flat export, every cell as text."""

    header: list[str]
    rows: list[dict[str, str]]


def read_table(path: str | Path) -> FlatTable:
    """Read a CSV export without any type inference.

    Raises
    ------
    SourceNotFoundError
        If the file does not exist.
    DatasetIOError
        If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Dataset file not found at: %s", path, extra={"path": path})
        raise SourceNotFoundError(f"Dataset file not found: {path}")

    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, na_filter=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DatasetIOError(f"Cannot read dataset {path}: {exc}") from exc

    return FlatTable(header=list(frame.columns), rows=frame.to_dict(orient="records"))


def load_projects(path: str | Path, bounds: SchemaBounds) -> AssemblyReport:
    """Read an export and assemble its projects."""
    table = read_table(path)
    report = assemble_rows(table.rows, bounds)
    logger.info(
        "Loaded %d projects from %s (%d rows dropped)",
        len(report.projects),
        path,
        len(report.dropped),
        extra={"path": path, "count": len(report.projects)},
    )
    return report
