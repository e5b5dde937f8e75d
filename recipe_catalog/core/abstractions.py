"""
Abstractions for recipe persistence and image storage.
Enables component swapping and testability via dependency injection.
"""

from pathlib import Path
from typing import List, Optional, Protocol

from recipe_catalog.models import Recipe, RecipeCreate


class RecipeRepository(Protocol):
    """Abstract interface for recipe data access."""

    def get_all_recipes(self) -> List[Recipe]:
        """Return all recipes in storage order."""
        ...

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by ID."""
        ...

    def create_recipe(self, recipe_data: RecipeCreate) -> Recipe:
        """Create a new recipe with a fresh id and upload date."""
        ...

    def update_recipe(self, recipe_id: str, changes: dict) -> Optional[Recipe]:
        """Overwrite the given fields. Returns None if the id is unknown."""
        ...

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe. Returns False if the id is unknown."""
        ...

    def clear(self) -> None:
        ...


class FileStore(Protocol):
    """Abstract interface for storing uploaded images."""

    directory: Path

    def save(self, data: bytes, filename: str) -> str:
        """Persist bytes and return the stored filename."""
        ...

    def url_for(self, stored_name: str) -> str:
        """URL path at which a stored file is served."""
        ...
