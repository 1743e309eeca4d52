"""Read-only queries over loaded projects."""

from project_dataset.query.filters import ProjectFilters, PropertyFilters
from project_dataset.query.insights import market_insights
from project_dataset.query.properties import is_deliverable, list_properties, summarize_property_types
from project_dataset.query.search import compare_projects, find_project, search_projects
from project_dataset.query.similarity import similar_projects, similarity_score

__all__ = [
    "ProjectFilters",
    "PropertyFilters",
    "compare_projects",
    "find_project",
    "is_deliverable",
    "list_properties",
    "market_insights",
    "search_projects",
    "similar_projects",
    "similarity_score",
    "summarize_property_types",
]
