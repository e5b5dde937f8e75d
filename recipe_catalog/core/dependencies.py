"""
FastAPI dependency injection providers.
Use Depends(get_recipe_storage), etc. in route handlers.

Handlers never touch module globals: the repository and file store live in
an AppContext attached to ``app.state.context`` by the application factory.
"""

from dataclasses import dataclass

from fastapi import Request

from recipe_catalog.core.abstractions import FileStore, RecipeRepository
from recipe_catalog.core.config import Settings
from recipe_catalog.services.files import ImageStore
from recipe_catalog.services.storage import RecipeStorage


@dataclass
class AppContext:
    recipes: RecipeRepository
    images: FileStore


def build_context(settings: Settings) -> AppContext:
    """Open the configured database and upload directory."""
    return AppContext(
        recipes=RecipeStorage(db_path=settings.database_path),
        images=ImageStore(settings.upload_dir),
    )


def get_context(request: Request) -> AppContext:
    """Provide the AppContext. Used as Depends(get_context)."""
    return request.app.state.context


def get_recipe_storage(request: Request) -> RecipeRepository:
    """Provide RecipeRepository. Used as Depends(get_recipe_storage)."""
    return get_context(request).recipes


def get_image_store(request: Request) -> FileStore:
    """Provide FileStore. Used as Depends(get_image_store)."""
    return get_context(request).images
