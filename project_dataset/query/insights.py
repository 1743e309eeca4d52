"""Market-level aggregates over a view."""

from collections.abc import Sequence

from project_dataset.exceptions import ProjectNotFoundError
from project_dataset.models.listing import MarketInsights, PriceStats
from project_dataset.models.project import Project


def market_insights(projects: Sequence[Project]) -> MarketInsights:
    """Summarize prices, locations, developers and financing across projects."""
    if not projects:
        raise ProjectNotFoundError("No projects available")

    midpoints = [
        (p.min_price + p.max_price) / 2
        for p in projects
        if p.min_price is not None and p.max_price is not None
    ]
    price_range = None
    if midpoints:
        price_range = PriceStats(
            min=min(midpoints),
            max=max(midpoints),
            avg=sum(midpoints) / len(midpoints),
        )

    return MarketInsights(
        total_projects=len(projects),
        price_range=price_range,
        areas=list(dict.fromkeys(p.area_name for p in projects if p.area_name)),
        developers=list(dict.fromkeys(p.developer_name for p in projects if p.developer_name)),
        financing_available=sum(1 for p in projects if p.financing_eligibility),
    )
