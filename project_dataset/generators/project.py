"""Project generator for sample exports."""

from datetime import timedelta
from typing import Iterator

from project_dataset.config import SchemaBounds
from project_dataset.generators.base import BaseGenerator
from project_dataset.models.enums import BusinessType, Finishing
from project_dataset.models.project import Project, Property, PropertyType
from project_dataset.schema.columns import BUSINESS_TYPES, COUNT_DICT_KEYS, PROPERTY_TYPES_NAMES


class ProjectGenerator(BaseGenerator):
    """Generate synthetic projects with nested property types and properties.

    Generated projects are canonical: summary fields agree with the nested
    properties and collections fit the schema bounds, so they survive an
    encode/decode cycle unchanged.
    """

    PROJECT_SUFFIXES = ("Heights", "Gardens", "Residence", "Park", "Bay", "Hills", "Square")

    def __init__(
        self,
        seed: int | None = None,
        bounds: SchemaBounds | None = None,
        max_types: int = 3,
        max_properties: int = 6,
    ) -> None:
        super().__init__(seed)
        self.bounds = bounds or SchemaBounds()
        self.max_types = min(max_types, self.bounds.max_property_types)
        self.max_properties = min(max_properties, self.bounds.max_properties_per_type)
        self._next_property_id = 1

    def generate_property(self, business_type: BusinessType, base_price: int) -> Property:
        """Generate one unit listing around ``base_price``."""
        min_price = float(base_price + self.fake.random_int(0, 50) * 10_000)
        max_price = min_price + float(self.fake.random_int(0, 20) * 10_000)
        min_area = float(self.fake.random_int(60, 250))
        bedrooms = float(self.fake.random_int(1, 5))
        delivery = self.date_offset(-365, 1460)
        financing = business_type is BusinessType.DEVELOPER_SALE and self.fake.boolean()

        prop = Property(
            property_id=float(self._next_property_id),
            business_type=business_type.value,
            price=min_price,
            min_price=min_price,
            max_price=max_price,
            area=min_area,
            min_area=min_area,
            max_area=min_area + float(self.fake.random_int(0, 40)),
            min_bedrooms=bedrooms,
            max_bedrooms=bedrooms,
            min_bathrooms=float(self.fake.random_int(1, int(bedrooms))),
            max_bathrooms=bedrooms,
            finishing=self.fake.random_element([f.value for f in Finishing]),
            min_delivery_date=delivery.isoformat(),
            max_delivery_date=(delivery + timedelta(days=180)).isoformat(),
            financing_available=financing,
            down_payment=float(self.fake.random_element([5, 10, 15, 20])) if financing else None,
            installments=float(self.fake.random_element([4, 6, 8, 10])) if financing else None,
        )
        self._next_property_id += 1
        return prop

    def generate(self) -> Project:
        """Generate a project.

        Returns
        -------
        Project
            Generated project.
        """
        base_price = self.fake.random_int(20, 200) * 100_000
        type_names = self.fake.random_sample(
            COUNT_DICT_KEYS[PROPERTY_TYPES_NAMES],
            length=self.fake.random_int(1, self.max_types),
        )
        business_types = self.fake.random_element(
            [(BusinessType.DEVELOPER_SALE,), (BusinessType.RESALE,), tuple(BusinessType)]
        )

        property_types = []
        for index, type_name in enumerate(sorted(type_names, key=COUNT_DICT_KEYS[PROPERTY_TYPES_NAMES].index)):
            properties = [
                self.generate_property(self.fake.random_element(business_types), base_price)
                for _ in range(self.fake.random_int(1, self.max_properties))
            ]
            property_types.append(
                PropertyType(
                    name=type_name,
                    property_type_id=float(index + 1),
                    property_types_count=float(len(properties)),
                    properties=properties,
                )
            )

        units = [prop for pt in property_types for prop in pt.properties]
        present = {prop.business_type for prop in units}
        finishing = {prop.finishing for prop in units}
        financing = any(prop.financing_available for prop in units)
        slug = self.fake.unique.slug()

        return Project(
            name=f"{self.fake.unique.last_name()} {self.fake.random_element(self.PROJECT_SUFFIXES)}",
            _id=self.fake.uuid4(),
            developer_name=self.fake.company(),
            area_name=self.fake.city(),
            inventory_public=self.fake.boolean(),
            min_price=min(p.price for p in units),
            max_price=max(p.max_price for p in units),
            min_area=min(p.area for p in units),
            max_area=max(p.max_area for p in units),
            min_bedrooms=min(p.min_bedrooms for p in units),
            max_bedrooms=max(p.max_bedrooms for p in units),
            business_types=tuple(bt for bt in COUNT_DICT_KEYS[BUSINESS_TYPES] if bt in present),
            finishing=tuple(f.value for f in Finishing if f.value in finishing),
            property_types_names=", ".join(pt.name for pt in property_types),
            financing_eligibility=financing,
            brochures=[
                f"https://brochures.example.com/{slug}/{i}.pdf"
                for i in range(self.fake.random_int(0, 3))
            ],
            property_types=property_types,
        )

    def generate_many(self, count: int) -> Iterator[Project]:
        for _ in range(count):
            yield self.generate()
