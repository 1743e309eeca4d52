"""Process-wide cache of the loaded dataset views."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from project_dataset.assembler import AssemblyReport
from project_dataset.config import DatasetConfig, SchemaBounds
from project_dataset.loader import load_projects
from project_dataset.logging import get_logger
from project_dataset.models.enums import DatasetView
from project_dataset.models.project import Project
from project_dataset.partition import Partitioner

logger = get_logger(__name__)

Loader = Callable[[Path, SchemaBounds], AssemblyReport]


class LoadState(str, Enum):
    UNLOADED = "UNLOADED"
    LOADING = "LOADING"
    LOADED = "LOADED"


@dataclass
class ViewSlot:
    """Load state of one view, guarded by its own lock."""

    view: DatasetView
    state: LoadState = LoadState.UNLOADED
    projects: tuple[Project, ...] = ()
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class DatasetCache:
    """Lazily loads each view at most once for the life of the process.

    Concurrent callers asking for the same unloaded view block on that
    view's lock; exactly one of them loads and all observe its result. A
    failed load leaves the view unloaded so that a later call can retry.
    There is no reload: a new process picks up changed files.
    """

    def __init__(
        self,
        config: DatasetConfig,
        partitioner: Partitioner | None = None,
        loader: Loader = load_projects,
    ) -> None:
        self.config = config
        self.partitioner = partitioner or Partitioner(config.bounds)
        self._loader = loader
        self._slots = {view: ViewSlot(view) for view in DatasetView}
        self._partition_lock = threading.Lock()

    def path_for(self, view: DatasetView) -> Path:
        return self.config.paths.path_for(view)

    def is_loaded(self, view: DatasetView) -> bool:
        return self._slots[view].state is LoadState.LOADED

    def state(self, view: DatasetView) -> LoadState:
        return self._slots[view].state

    def count(self, view: DatasetView) -> int:
        return len(self._slots[view].projects)

    def get_or_load(self, view: DatasetView) -> tuple[Project, ...]:
        """Return the projects of a view, loading it on first use."""
        slot = self._slots[view]
        if slot.state is LoadState.LOADED:
            return slot.projects

        with slot.lock:
            if slot.state is LoadState.LOADED:
                return slot.projects
            slot.state = LoadState.LOADING
            try:
                if view is not DatasetView.COMBINED:
                    self._ensure_partitions(view)
                report = self._loader(self.path_for(view), self.config.bounds)
            except BaseException:
                slot.state = LoadState.UNLOADED
                raise
            slot.projects = tuple(report.projects)
            slot.state = LoadState.LOADED
            logger.info(
                "Dataset view %s loaded with %d projects",
                view.value,
                len(slot.projects),
                extra={"view": view.value, "count": len(slot.projects)},
            )
            return slot.projects

    def _ensure_partitions(self, view: DatasetView) -> None:
        # Both partition files come from one pass, so primary and resale
        # loads share a single guard.
        with self._partition_lock:
            if self.path_for(view).exists():
                return
            logger.info(
                "Partition file for %s view missing, materializing from %s",
                view.value,
                self.config.paths.combined,
                extra={"view": view.value},
            )
            self.partitioner.materialize_views(self.config.paths)

    def summary(self) -> dict[str, int]:
        """Return loaded project counts per view."""
        return {view.value: len(slot.projects) for view, slot in self._slots.items()}
