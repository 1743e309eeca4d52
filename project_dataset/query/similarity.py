"""Similarity ranking between projects."""

from collections.abc import Sequence

from project_dataset.models.project import Project
from project_dataset.query.search import find_project

PRICE_WEIGHT = 30
AREA_WEIGHT = 25
LOCATION_WEIGHT = 25
DEVELOPER_WEIGHT = 20

MAX_PRICE_DIFF = 0.3
MAX_AREA_DIFF = 0.5


def _relative_term(reference: float | None, other: float | None, weight: float, max_diff: float) -> float:
    if not reference or not other:
        return 0.0
    diff = abs(reference - other) / abs(reference)
    return weight * (1 - diff) if diff <= max_diff else 0.0


def similarity_score(target: Project, candidate: Project) -> float:
    """Weighted similarity in ``[0, 100]``, relative to ``target``.

    Each term counts only when both projects carry its attribute.
    """
    score = _relative_term(target.min_price, candidate.min_price, PRICE_WEIGHT, MAX_PRICE_DIFF)
    score += _relative_term(target.min_area, candidate.min_area, AREA_WEIGHT, MAX_AREA_DIFF)
    if target.area_name and candidate.area_name and target.area_name == candidate.area_name:
        score += LOCATION_WEIGHT
    if target.developer_name and candidate.developer_name and target.developer_name == candidate.developer_name:
        score += DEVELOPER_WEIGHT
    return score


def similar_projects(projects: Sequence[Project], name: str, limit: int = 3) -> list[Project]:
    """Top ``limit`` projects by descending score; ties keep dataset order."""
    target = find_project(projects, name)
    candidates = [project for project in projects if project is not target]
    ranked = sorted(candidates, key=lambda project: -similarity_score(target, project))
    return ranked[:limit]
