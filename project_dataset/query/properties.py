"""Property listing and per-type aggregation."""

from collections.abc import Iterator, Sequence
from datetime import date

import pandas as pd

from project_dataset.models.listing import ListingPage, PropertyListing, PropertyTypeSummary, ValueRange
from project_dataset.models.project import Project, Property
from project_dataset.query.filters import PropertyFilters
from project_dataset.query.search import find_project

UNKNOWN_TYPE = "Unknown"


def parse_delivery_date(value: str | None) -> date | None:
    """Parse a delivery-date cell; unparsable text gives ``None``."""
    if not value:
        return None
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def is_deliverable(prop: Property, today: date) -> bool:
    """Whether a property's delivery window has not fully passed.

    A property with no delivery bounds is ready or undated and is kept. A
    bound that cannot be parsed never counts as today-or-later.
    """
    bounds = (prop.min_delivery_date, prop.max_delivery_date)
    if not any(bounds):
        return True
    for raw in bounds:
        parsed = parse_delivery_date(raw)
        if parsed is not None and parsed >= today:
            return True
    return False


def project_summary_property(project: Project) -> Property:
    """Stand-in listing for a project that has no property types."""
    return Property(
        business_type=project.business_type,
        price=project.min_price,
        area=project.min_area,
        min_bedrooms=project.min_bedrooms,
        min_bathrooms=project.min_bathrooms,
        finishing=", ".join(project.finishing) or None,
        delivery_date=project.min_delivery_date,
        financing_available=project.financing_eligibility,
        down_payment=project.min_down_payment,
        installments=project.min_installments,
    )


def iter_listings(project: Project) -> Iterator[PropertyListing]:
    context = dict(
        project_name=project.name,
        project_developer=project.developer_name,
        project_area=project.area_name,
    )
    if not project.property_types:
        yield PropertyListing(
            property=project_summary_property(project),
            property_type_name=project.property_types_names or UNKNOWN_TYPE,
            **context,
        )
        return
    for property_type, prop in project.iter_properties():
        yield PropertyListing(property=prop, property_type_name=property_type.name, **context)


def _type_matches(listing: PropertyListing, property_type: str) -> bool:
    # Listings without a real type name cannot be classified and pass through.
    if not listing.property_type_name or listing.property_type_name == UNKNOWN_TYPE:
        return True
    return property_type.lower() in listing.property_type_name.lower()


def list_properties(
    projects: Sequence[Project],
    project_name: str | None = None,
    property_type: str | None = None,
    business_type: str | None = None,
    filters: PropertyFilters | None = None,
    today: date | None = None,
) -> ListingPage:
    """Flatten properties with their project context and filter them.

    Filters apply in order: property type name, business type, delivery
    date, then the structured filters.

    Raises
    ------
    ProjectNotFoundError
        If ``project_name`` does not match a project.
    """
    scope = [find_project(projects, project_name)] if project_name else projects
    listings = [listing for project in scope for listing in iter_listings(project)]
    total = len(listings)

    if property_type:
        listings = [listing for listing in listings if _type_matches(listing, property_type)]

    if business_type:
        wanted = business_type.lower()
        listings = [
            listing
            for listing in listings
            if (listing.property.business_type or "").lower() == wanted
        ]

    today = today or date.today()
    listings = [listing for listing in listings if is_deliverable(listing.property, today)]

    if filters is not None:
        listings = [listing for listing in listings if filters.matches(listing.property)]

    return ListingPage(listings=listings, total=total)


def _value_range(values: list[float]) -> ValueRange:
    if not values:
        return ValueRange()
    return ValueRange(min=min(values), max=max(values))


def summarize_property_types(projects: Sequence[Project], project_name: str) -> list[PropertyTypeSummary]:
    """Per-property-type breakdown of one project.

    Raises
    ------
    ProjectNotFoundError
        If ``project_name`` does not match a project.
    """
    project = find_project(projects, project_name)

    if not project.property_types:
        if not project.property_types_names:
            return []
        return [
            PropertyTypeSummary(
                name=project.property_types_names,
                properties_count=1,
                business_types=[project.business_type] if project.business_type else [],
                price_range=ValueRange(min=project.min_price, max=project.max_price),
                area_range=ValueRange(min=project.min_area, max=project.max_area),
            )
        ]

    summaries = []
    for property_type in project.property_types:
        properties = property_type.properties
        summaries.append(
            PropertyTypeSummary(
                name=property_type.name,
                properties_count=len(properties),
                business_types=list(dict.fromkeys(p.business_type for p in properties if p.business_type)),
                price_range=_value_range([p.price for p in properties if p.price is not None]),
                area_range=_value_range([p.area for p in properties if p.area is not None]),
            )
        )
    return summaries
