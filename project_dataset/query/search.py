"""Project lookup and search."""

from collections.abc import Sequence

from project_dataset.exceptions import ProjectNotFoundError
from project_dataset.models.listing import ProjectPage
from project_dataset.models.project import Project
from project_dataset.query.filters import ProjectFilters

SEARCHED_FIELDS = ("name", "developer_name", "area_name", "business_type")


def find_project(projects: Sequence[Project], name: str) -> Project:
    """Case-insensitive exact match on name; the first match wins."""
    wanted = name.lower()
    for project in projects:
        if project.name is not None and project.name.lower() == wanted:
            return project
    raise ProjectNotFoundError(f"Project '{name}' not found")


def matches_text(project: Project, text: str) -> bool:
    term = text.lower()
    return any(term in (getattr(project, name) or "").lower() for name in SEARCHED_FIELDS)


def search_projects(
    projects: Sequence[Project],
    query: str = "",
    filters: ProjectFilters | None = None,
) -> ProjectPage:
    """Filter projects by free text and structured filters, keeping input order."""
    filters = filters or ProjectFilters()
    found = [
        project
        for project in projects
        if (not query or matches_text(project, query)) and filters.matches(project)
    ]
    return ProjectPage(projects=found, total=len(projects))


def compare_projects(projects: Sequence[Project], names: Sequence[str]) -> list[Project]:
    """Projects found for the given names, in request order; unknown names are skipped."""
    found = []
    for name in names:
        try:
            found.append(find_project(projects, name))
        except ProjectNotFoundError:
            continue
    if not found:
        raise ProjectNotFoundError("No valid projects found")
    return found
