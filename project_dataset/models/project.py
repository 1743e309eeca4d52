"""Project, property type and property records."""

from dataclasses import dataclass, field


@dataclass
class Property:
    """One unit listing under a property type.

    ``price`` and ``area`` are already resolved through the
    ``value -> min -> max`` fallback at assembly time.
    """

    property_id: float | None = None
    business_type: str | None = None  # developer_sale | resale
    price: float | None = None
    min_price: float | None = None
    max_price: float | None = None
    area: float | None = None
    min_area: float | None = None
    max_area: float | None = None
    min_bedrooms: float | None = None
    max_bedrooms: float | None = None
    min_bathrooms: float | None = None
    max_bathrooms: float | None = None
    finishing: str | None = None
    delivery_date: str | None = None
    min_delivery_date: str | None = None
    max_delivery_date: str | None = None
    financing_available: bool = False
    down_payment: float | None = None
    min_down_payment: float | None = None
    max_down_payment: float | None = None
    installments: float | None = None
    min_installments: float | None = None
    max_installments: float | None = None

    @property
    def bedrooms(self) -> float | None:
        return self.min_bedrooms if self.min_bedrooms is not None else self.max_bedrooms

    @property
    def has_identifying_data(self) -> bool:
        return self.business_type is not None or self.price is not None or self.area is not None


@dataclass
class PropertyType:
    """Category of units within a project.

    ``property_types_count`` is the count declared by the source and is not
    guaranteed to match ``len(properties)``.
    """

    name: str
    property_type_id: float | None = None
    property_types_count: float | None = None
    properties: list[Property] = field(default_factory=list)


@dataclass
class Project:
    """One real-estate development."""

    name: str | None = None
    _id: str | None = None
    area_id: str | None = None
    developer_id: str | None = None
    inventory_public: bool = False
    on_hold: bool = False
    last_update: str | None = None
    developer_name: str | None = None
    area_name: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_area: float | None = None
    max_area: float | None = None
    min_land_area: float | None = None
    max_land_area: float | None = None
    min_garden_area: float | None = None
    max_garden_area: float | None = None
    min_bedrooms: float | None = None
    max_bedrooms: float | None = None
    min_bathrooms: float | None = None
    max_bathrooms: float | None = None
    business_type: str | None = None  # legacy single value
    business_types: tuple[str, ...] = ()
    finishing: tuple[str, ...] = ()
    property_types_names: str | None = None
    min_delivery_date: str | None = None
    max_delivery_date: str | None = None
    financing_eligibility: bool = False
    min_installments: float | None = None
    max_installments: float | None = None
    min_down_payment: float | None = None
    max_down_payment: float | None = None
    brochures: list[str] = field(default_factory=list)
    property_types: list[PropertyType] = field(default_factory=list)
    last_scraped: str | None = None
    s3_upload_date: str | None = None
    compounds_scraped: bool = False
    properties_scraped: bool = False

    @property
    def price_range(self) -> tuple[float | None, float | None]:
        return (self.min_price, self.max_price)

    @property
    def area_range(self) -> tuple[float | None, float | None]:
        return (self.min_area, self.max_area)

    @property
    def delivery_range(self) -> tuple[str | None, str | None]:
        return (self.min_delivery_date, self.max_delivery_date)

    def iter_properties(self):
        """Yield ``(property_type, property)`` pairs in source order."""
        for property_type in self.property_types:
            for prop in property_type.properties:
                yield property_type, prop
