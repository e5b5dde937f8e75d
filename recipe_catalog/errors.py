"""
Error types raised by the recipe catalog.
Route handlers translate them into JSON responses:
RecipeValidationError -> 400, RecipeNotFound -> 404, StorageError -> 500.
"""

from typing import List, Optional


class RecipeCatalogError(Exception):
    """Base class for catalog errors."""


class RecipeValidationError(RecipeCatalogError):
    """Missing or malformed recipe field(s)."""

    def __init__(self, problems: List[dict]) -> None:
        self.problems = problems
        details = ", ".join(f"{p['field']}: {p['message']}" for p in problems)
        super().__init__(f"Recipe validation failed: {details}")


class RecipeNotFound(RecipeCatalogError):
    def __init__(self, recipe_id: Optional[str] = None) -> None:
        self.recipe_id = recipe_id
        super().__init__("Recipe not found")


class StorageError(RecipeCatalogError):
    """Database or filesystem failure."""
