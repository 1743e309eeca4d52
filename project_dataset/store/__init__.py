"""In-memory holders for loaded dataset views."""

from project_dataset.store.cache import DatasetCache, LoadState, ViewSlot

__all__ = ["DatasetCache", "LoadState", "ViewSlot"]
