"""CSV file sink for writing flat project exports."""

import os
import tempfile
from pathlib import Path

import pandas as pd

from project_dataset.exceptions import DatasetIOError
from project_dataset.logging import get_logger

logger = get_logger(__name__)


class CsvFileSink:
    """Write flat rows to CSV files, replacing the destination atomically."""

    def __init__(self, output_dir: str | Path | None = None) -> None:
        """Initialize CSV file sink.

        Parameters
        ----------
        output_dir : str | Path | None
            Directory that relative destinations are resolved against.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self._counts: dict[str, int] = {}

    def resolve(self, destination: str | Path) -> Path:
        destination = Path(destination)
        if self.output_dir is not None and not destination.is_absolute():
            return self.output_dir / destination
        return destination

    def write_rows(
        self,
        destination: str | Path,
        header: list[str],
        rows: list[dict[str, str]],
    ) -> Path:
        """Write rows under exactly ``header``, missing cells blank.

        The rows go to a temporary file in the destination directory which
        then replaces the destination, so a failed write never leaves a
        half-written file behind.
        """
        path = self.resolve(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        frame = pd.DataFrame([[row.get(column, "") for column in header] for row in rows], columns=header)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                frame.to_csv(f, index=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise DatasetIOError(f"Cannot write dataset {path}: {exc}") from exc
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self._counts[str(path)] = len(rows)
        logger.info("Wrote %d rows to %s", len(rows), path)
        return path

    def summary(self) -> dict[str, int]:
        """Return row counts per written file."""
        return dict(self._counts)
