"""Synthetic export generators."""

from project_dataset.generators.base import BaseGenerator
from project_dataset.generators.project import ProjectGenerator

__all__ = ["BaseGenerator", "ProjectGenerator"]
