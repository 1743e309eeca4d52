"""Shapes returned by the query layer."""

from dataclasses import dataclass, field

from project_dataset.models.enums import DatasetView
from project_dataset.models.project import Project, Property


@dataclass
class PropertyListing:
    """A property flattened out of its project with denormalized context."""

    property: Property
    project_name: str | None
    project_developer: str | None
    project_area: str | None
    property_type_name: str | None


@dataclass
class ValueRange:
    min: float | None = None
    max: float | None = None


@dataclass
class PropertyTypeSummary:
    """Per-property-type breakdown of one project."""

    name: str
    properties_count: int
    business_types: list[str] = field(default_factory=list)
    price_range: ValueRange = field(default_factory=ValueRange)
    area_range: ValueRange = field(default_factory=ValueRange)


@dataclass
class ProjectPage:
    """Projects matching a search, with the size of the searched view."""

    projects: list[Project]
    total: int

    @property
    def count(self) -> int:
        return len(self.projects)


@dataclass
class ListingPage:
    """Property listings matching a query, with the unfiltered listing count."""

    listings: list[PropertyListing]
    total: int

    @property
    def count(self) -> int:
        return len(self.listings)


@dataclass
class PriceStats:
    min: float
    max: float
    avg: float


@dataclass
class MarketInsights:
    """Aggregate figures over a whole view."""

    total_projects: int
    price_range: PriceStats | None
    areas: list[str]
    developers: list[str]
    financing_available: int


@dataclass
class DatasetStatus:
    """Load state of one view and its backing file."""

    view: DatasetView
    loaded: bool
    count: int
    path: str
    file_exists: bool

    @property
    def message(self) -> str:
        if self.loaded:
            return "Dataset already loaded"
        if self.file_exists:
            return "Dataset file exists but not loaded"
        return "Dataset file not found"
