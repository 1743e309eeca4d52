"""Domain models for the project dataset."""

from project_dataset.models.enums import BusinessType, DatasetView, Finishing
from project_dataset.models.listing import (
    DatasetStatus,
    ListingPage,
    MarketInsights,
    PriceStats,
    ProjectPage,
    PropertyListing,
    PropertyTypeSummary,
    ValueRange,
)
from project_dataset.models.project import Project, Property, PropertyType

__all__ = [
    "BusinessType",
    "DatasetStatus",
    "DatasetView",
    "Finishing",
    "ListingPage",
    "MarketInsights",
    "PriceStats",
    "Project",
    "ProjectPage",
    "Property",
    "PropertyListing",
    "PropertyType",
    "PropertyTypeSummary",
    "ValueRange",
]
