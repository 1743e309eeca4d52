"""Base generator class for synthetic exports."""

from __future__ import annotations

from abc import ABC
from datetime import date, timedelta

from faker import Faker


class BaseGenerator(ABC):
    """Base class for sample-data generators.

    Holds a seeded Faker instance so that two generators built with the same
    seed produce the same records.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def date_offset(self, min_days: int, max_days: int, anchor: date | None = None) -> date:
        """Random date between ``min_days`` and ``max_days`` from ``anchor`` (today)."""
        anchor = anchor or date.today()
        return anchor + timedelta(days=self.fake.random_int(min_days, max_days))
