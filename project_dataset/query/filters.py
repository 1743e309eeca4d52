"""Structured filters accepted by the query layer."""

from dataclasses import dataclass, fields
from typing import Any, get_args

from project_dataset.assembler import parse_number
from project_dataset.exceptions import InvalidRequestError

FALSE_FLAGS = ("false", "0")
TRUE_FLAGS = ("true", "1")


def _coerce(name: str, kind: type, value: Any) -> Any:
    """Coerce one request value, as sent by a form or JSON body, to a field type."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if kind is bool:
        if isinstance(value, bool):
            return value
        flag = str(value).strip().lower()
        if flag in TRUE_FLAGS or flag in FALSE_FLAGS:
            return flag in TRUE_FLAGS
    elif kind in (int, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = float(value)
        elif isinstance(value, str):
            parsed = parse_number(value.strip())
        else:
            parsed = None
        if parsed is not None:
            return parsed
    else:
        return str(value).strip()
    raise InvalidRequestError(f"Invalid value for {name}: {value!r}")


class _FromDict:
    @classmethod
    def from_dict(cls, data: dict[str, Any] | None):
        """Build filters from a mapping, ignoring unknown keys.

        Raises
        ------
        InvalidRequestError
            If a known key carries a value that does not fit its field.
        """
        if not data:
            return cls()
        values = {}
        for f in fields(cls):
            if f.name in data:
                kind = next(arg for arg in get_args(f.type) if arg is not type(None))
                values[f.name] = _coerce(f.name, kind, data[f.name])
        return cls(**values)

    @classmethod
    def coerce(cls, filters: Any):
        """Pass filter objects through; build them from mappings."""
        if isinstance(filters, cls):
            return filters
        return cls.from_dict(filters)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass
class ProjectFilters(_FromDict):
    """Project-level search filters, combined with logical AND."""

    price_min: float | None = None
    price_max: float | None = None
    bedrooms: int | None = None  # must fit within the project's bedroom range
    area_name: str | None = None
    developer_name: str | None = None
    financing_eligibility: bool | None = None

    def matches(self, project) -> bool:
        if self.price_min is not None and (project.min_price is None or project.min_price < self.price_min):
            return False
        if self.price_max is not None and (project.max_price is None or project.max_price > self.price_max):
            return False
        if self.bedrooms is not None:
            if project.min_bedrooms is None or project.max_bedrooms is None:
                return False
            if not project.min_bedrooms <= self.bedrooms <= project.max_bedrooms:
                return False
        if self.area_name and self.area_name.lower() not in (project.area_name or "").lower():
            return False
        if self.developer_name and self.developer_name.lower() not in (project.developer_name or "").lower():
            return False
        if self.financing_eligibility is not None and project.financing_eligibility != self.financing_eligibility:
            return False
        return True


@dataclass
class PropertyFilters(_FromDict):
    """Property-level filters applied after the delivery-date check."""

    price_min: float | None = None
    price_max: float | None = None
    bedrooms: int | None = None
    area_min: float | None = None
    area_max: float | None = None
    finishing: str | None = None
    financing_available: bool | None = None

    def matches(self, prop) -> bool:
        if self.price_min is not None and (prop.price is None or prop.price < self.price_min):
            return False
        if self.price_max is not None and (prop.price is None or prop.price > self.price_max):
            return False
        if self.bedrooms is not None and prop.bedrooms != self.bedrooms:
            return False
        if self.area_min is not None and (prop.area is None or prop.area < self.area_min):
            return False
        if self.area_max is not None and (prop.area is None or prop.area > self.area_max):
            return False
        if self.finishing and self.finishing.lower() not in (prop.finishing or "").lower():
            return False
        if self.financing_available is not None and prop.financing_available != self.financing_available:
            return False
        return True
