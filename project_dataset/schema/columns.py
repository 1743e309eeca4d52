"""Column vocabulary of the flat project export."""

from project_dataset.config import SchemaBounds
from project_dataset.schema.paths import (
    CountDict,
    IndexedScalar,
    NestedIndexed,
    Scalar,
    format_field_path,
)

PROPERTY_TYPES = "property_types"
PROPERTIES = "properties"
BROCHURES = "bruchure"  # sic, as spelled by the export

BUSINESS_TYPES = "business_types"
FINISHING = "finishing"
PROPERTY_TYPES_NAMES = "property_types_names"

# Known keys per count dictionary, in canonical order.
COUNT_DICT_KEYS: dict[str, tuple[str, ...]] = {
    BUSINESS_TYPES: ("developer_sale", "resale"),
    FINISHING: ("not_finished", "finished", "semi_finished"),
    PROPERTY_TYPES_NAMES: (
        "Villa",
        "Penthouse",
        "Apartment",
        "Duplex",
        "Studio",
        "Townhouse",
        "Twinhouse",
        "Loft",
        "Office",
    ),
}

TEXT_FIELDS = (
    "_id",
    "name",
    "area_id",
    "developer_id",
    "last_update",
    "developer_name",
    "area_name",
    "business_type",
    "min_delivery_date",
    "max_delivery_date",
    "last_scraped",
    "s3_upload_date",
)

NUMBER_FIELDS = (
    "min_price",
    "max_price",
    "min_area",
    "max_area",
    "min_land_area",
    "max_land_area",
    "min_garden_area",
    "max_garden_area",
    "min_bedrooms",
    "max_bedrooms",
    "min_bathrooms",
    "max_bathrooms",
    "min_installments",
    "max_installments",
    "min_down_payment",
    "max_down_payment",
)

BOOLEAN_FIELDS = (
    "inventory_public",
    "on_hold",
    "financing_eligibility",
    "compounds_scraped",
    "properties_scraped",
)

PROJECT_SCALARS = (
    "_id",
    "name",
    "area_id",
    "developer_id",
    "inventory_public",
    "on_hold",
    "last_update",
    "developer_name",
    "area_name",
    *NUMBER_FIELDS[:12],
    "business_type",
    "min_delivery_date",
    "max_delivery_date",
    "financing_eligibility",
    *NUMBER_FIELDS[12:],
    "last_scraped",
    "s3_upload_date",
    "compounds_scraped",
    "properties_scraped",
)

PROPERTY_TYPE_FIELDS = ("name", "property_type_id", "property_types_count")

PROPERTY_TEXT_FIELDS = (
    "business_type",
    "finishing",
    "delivery_date",
    "min_delivery_date",
    "max_delivery_date",
)

PROPERTY_BOOLEAN_FIELDS = ("financing_available",)

PROPERTY_FIELDS = (
    "property_id",
    "business_type",
    "price",
    "min_price",
    "max_price",
    "area",
    "min_area",
    "max_area",
    "min_bedrooms",
    "max_bedrooms",
    "min_bathrooms",
    "max_bathrooms",
    "finishing",
    "delivery_date",
    "min_delivery_date",
    "max_delivery_date",
    "financing_available",
    "down_payment",
    "min_down_payment",
    "max_down_payment",
    "installments",
    "min_installments",
    "max_installments",
)


def count_column(prefix: str, key: str) -> str:
    return format_field_path(CountDict(prefix, key))


def brochure_column(index: int) -> str:
    return format_field_path(IndexedScalar(BROCHURES, index))


def property_type_column(i: int, field: str) -> str:
    return format_field_path(IndexedScalar(PROPERTY_TYPES, i, field))


def property_column(i: int, j: int, field: str) -> str:
    return format_field_path(NestedIndexed(PROPERTY_TYPES, i, PROPERTIES, j, field))


def build_header(bounds: SchemaBounds) -> list[str]:
    """Return the canonical column set for the given bounds."""
    header = [format_field_path(Scalar(name)) for name in PROJECT_SCALARS]
    for prefix, keys in COUNT_DICT_KEYS.items():
        header.extend(count_column(prefix, key) for key in keys)
    header.extend(brochure_column(i) for i in range(bounds.max_brochures))
    for i in range(bounds.max_property_types):
        header.extend(property_type_column(i, field) for field in PROPERTY_TYPE_FIELDS)
        for j in range(bounds.max_properties_per_type):
            header.extend(property_column(i, j, field) for field in PROPERTY_FIELDS)
    return header
