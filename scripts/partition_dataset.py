#!/usr/bin/env python3
"""Split the combined project export into primary and resale files.

Paths default to the environment configuration (PROJECT_DATASET_PATH,
PRIMARY_DATASET_PATH, RESALE_DATASET_PATH).
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from project_dataset.config import DatasetConfig, DatasetPaths
from project_dataset.exceptions import DatasetError
from project_dataset.logging import get_logger, setup_logging
from project_dataset.partition import Partitioner

logger = get_logger(__name__)


def main() -> int:
    config = DatasetConfig.from_env()

    parser = argparse.ArgumentParser(description="Partition the combined export by business type")
    parser.add_argument("--source", type=Path, default=None, help="Combined export CSV")
    parser.add_argument("--primary", type=Path, default=None, help="Primary (developer_sale) output")
    parser.add_argument("--resale", type=Path, default=None, help="Resale output")
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    paths = DatasetPaths.beside(args.source) if args.source else config.paths
    if args.primary:
        paths.primary = args.primary
    if args.resale:
        paths.resale = args.resale

    try:
        written = Partitioner(config.bounds).materialize_views(paths)
    except DatasetError as exc:
        logger.error("Partitioning failed: %s", exc)
        return 1

    for view, count in written.items():
        logger.info("%s: %d projects -> %s", view.value, count, paths.path_for(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
