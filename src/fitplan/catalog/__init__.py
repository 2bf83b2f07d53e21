"""Static exercise and recipe catalog.

Templates are immutable and shared by every request; plans snapshot or
reference them at creation time.
"""

from __future__ import annotations

from fitplan.catalog.models import ExerciseTemplate, RecipeTemplate
from fitplan.catalog.provider import CatalogProvider, StaticCatalog, get_catalog

__all__ = [
    "CatalogProvider",
    "ExerciseTemplate",
    "RecipeTemplate",
    "StaticCatalog",
    "get_catalog",
]
