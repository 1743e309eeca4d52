"""Decode, partition and query flat real-estate project exports."""

from project_dataset.config import DatasetConfig, DatasetPaths, SchemaBounds
from project_dataset.models.enums import BusinessType, DatasetView
from project_dataset.results import ErrorKind, Failure, Result, Success
from project_dataset.service import DatasetService

__all__ = [
    "BusinessType",
    "DatasetConfig",
    "DatasetPaths",
    "DatasetService",
    "DatasetView",
    "ErrorKind",
    "Failure",
    "Result",
    "SchemaBounds",
    "Success",
]

__version__ = "0.1.0"
