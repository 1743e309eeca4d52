"""Query-layer entry points returning tagged results.

Every method loads its view on first use through the shared cache and turns
dataset errors into :class:`~project_dataset.results.Failure` values, so
callers never see an exception from a missing file or an unknown project.
"""

from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, TypeVar

from project_dataset.config import DatasetConfig
from project_dataset.exceptions import DatasetError
from project_dataset.logging import get_logger
from project_dataset.models.enums import DatasetView
from project_dataset.models.listing import (
    DatasetStatus,
    ListingPage,
    MarketInsights,
    ProjectPage,
    PropertyTypeSummary,
)
from project_dataset.models.project import Project
from project_dataset.query import (
    ProjectFilters,
    PropertyFilters,
    compare_projects,
    find_project,
    list_properties,
    market_insights,
    search_projects,
    similar_projects,
    summarize_property_types,
)
from project_dataset.results import Failure, Result, Success
from project_dataset.store.cache import DatasetCache

logger = get_logger(__name__)

T = TypeVar("T")


class DatasetService:
    """Facade over the dataset cache and the query functions."""

    def __init__(self, config: DatasetConfig | None = None, cache: DatasetCache | None = None) -> None:
        self.config = config or (cache.config if cache is not None else DatasetConfig.from_env())
        self.cache = cache or DatasetCache(self.config)

    def _run(self, operation: str, view: DatasetView, query: Callable[[Sequence[Project]], T]) -> Result[T]:
        try:
            return Success(query(self.cache.get_or_load(view)))
        except (DatasetError, OSError) as exc:
            logger.error("Error in %s (%s view): %s", operation, view.value, exc)
            return Failure.from_exception(exc)

    def load(self, view: DatasetView = DatasetView.COMBINED) -> Result[int]:
        """Load a view if needed and report its project count."""
        return self._run("load", view, len)

    def status(self, view: DatasetView = DatasetView.COMBINED) -> DatasetStatus:
        path = self.cache.path_for(view)
        return DatasetStatus(
            view=view,
            loaded=self.cache.is_loaded(view),
            count=self.cache.count(view),
            path=str(path),
            file_exists=path.exists(),
        )

    def all_projects(self, view: DatasetView = DatasetView.COMBINED) -> Result[list[Project]]:
        return self._run("all_projects", view, list)

    def get_project(self, name: str, view: DatasetView = DatasetView.COMBINED) -> Result[Project]:
        return self._run("get_project", view, lambda projects: find_project(projects, name))

    def search(
        self,
        query: str = "",
        filters: ProjectFilters | dict[str, Any] | None = None,
        view: DatasetView = DatasetView.COMBINED,
    ) -> Result[ProjectPage]:
        return self._run(
            "search",
            view,
            lambda projects: search_projects(projects, query, ProjectFilters.coerce(filters)),
        )

    def similar(self, name: str, limit: int = 3, view: DatasetView = DatasetView.COMBINED) -> Result[list[Project]]:
        return self._run("similar", view, lambda projects: similar_projects(projects, name, limit))

    def compare(self, names: Sequence[str], view: DatasetView = DatasetView.COMBINED) -> Result[list[Project]]:
        return self._run("compare", view, lambda projects: compare_projects(projects, names))

    def properties(
        self,
        project_name: str | None = None,
        property_type: str | None = None,
        business_type: str | None = None,
        filters: PropertyFilters | dict[str, Any] | None = None,
        view: DatasetView = DatasetView.COMBINED,
        today: date | None = None,
    ) -> Result[ListingPage]:
        return self._run(
            "properties",
            view,
            lambda projects: list_properties(
                projects,
                project_name=project_name,
                property_type=property_type,
                business_type=business_type,
                filters=PropertyFilters.coerce(filters),
                today=today,
            ),
        )

    def property_types(
        self, project_name: str, view: DatasetView = DatasetView.COMBINED
    ) -> Result[list[PropertyTypeSummary]]:
        return self._run("property_types", view, lambda projects: summarize_property_types(projects, project_name))

    def insights(self, view: DatasetView = DatasetView.COMBINED) -> Result[MarketInsights]:
        return self._run("insights", view, market_insights)
