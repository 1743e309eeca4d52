#!/usr/bin/env python3
"""Generate a synthetic combined project export.

The file uses the same flat column layout as the production export, so it
can be partitioned and loaded like the real thing.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from project_dataset.config import DatasetConfig
from project_dataset.generators import ProjectGenerator
from project_dataset.logging import get_logger, setup_logging
from project_dataset.schema import build_header
from project_dataset.sinks import CsvFileSink, extend_header, to_flat_row

logger = get_logger(__name__)


def main() -> None:
    config = DatasetConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate a sample project export")
    parser.add_argument("--projects", type=int, default=50, help="Number of projects")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=Path, default=config.paths.combined, help="Destination CSV")
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    generator = ProjectGenerator(seed=args.seed, bounds=config.bounds)
    rows = [to_flat_row(project, config.bounds) for project in generator.generate_many(args.projects)]
    header = extend_header(build_header(config.bounds), rows)

    path = CsvFileSink().write_rows(args.output, header, rows)
    logger.info("Sample export with %d projects written to %s", len(rows), path)


if __name__ == "__main__":
    main()
