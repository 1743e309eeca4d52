"""Enumeration types for the project dataset."""

from enum import Enum


class BusinessType(str, Enum):
    DEVELOPER_SALE = "developer_sale"
    RESALE = "resale"


class Finishing(str, Enum):
    NOT_FINISHED = "not_finished"
    FINISHED = "finished"
    SEMI_FINISHED = "semi_finished"


class DatasetView(str, Enum):
    """Named views held by the dataset cache."""

    PRIMARY = "primary"
    RESALE = "resale"
    COMBINED = "combined"

    @property
    def business_type(self) -> BusinessType | None:
        """Business type a partitioned view is restricted to."""
        if self is DatasetView.PRIMARY:
            return BusinessType.DEVELOPER_SALE
        if self is DatasetView.RESALE:
            return BusinessType.RESALE
        return None
