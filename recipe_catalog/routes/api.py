import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from recipe_catalog.core.abstractions import FileStore, RecipeRepository
from recipe_catalog.core.dependencies import get_image_store, get_recipe_storage
from recipe_catalog.errors import RecipeNotFound, RecipeValidationError, StorageError
from recipe_catalog.models import Recipe
from recipe_catalog.services.metrics import (
    aggregate_metrics,
    finish_request_metrics,
    start_request_metrics,
)
from recipe_catalog.services.prometheus_metrics import record_recipe_request
from recipe_catalog.validation import parse_draft, validate_new_recipe, validate_recipe_changes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# Multipart field carrying the optional recipe image
IMAGE_FIELD = "image"


def _recipe_to_response(recipe: Recipe) -> dict[str, Any]:
    """Convert Recipe to API response dict using the client field names."""
    return recipe.model_dump(mode="json", by_alias=True)


def _respond(operation: str, status_code: int, content: Any) -> JSONResponse:
    record_recipe_request(operation, status_code)
    return JSONResponse(status_code=status_code, content=content)


def _error(operation: str, status_code: int, message: str) -> JSONResponse:
    if status_code >= 500:
        logger.error("%s failed: %s", operation, message)
    else:
        logger.info("%s rejected (%d): %s", operation, status_code, message)
    return _respond(operation, status_code, {"message": message})


async def _read_body(request: Request) -> tuple[dict, Optional[UploadFile]]:
    """
    Read recipe fields from a JSON, urlencoded or multipart body.

    Returns:
        Tuple of (plain text fields, uploaded image or None).
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise RecipeValidationError([{"field": "body", "message": "Invalid JSON"}]) from e
        if not isinstance(body, dict):
            raise RecipeValidationError(
                [{"field": "body", "message": "Body must be a JSON object"}]
            )
        return body, None

    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    upload = form.get(IMAGE_FIELD)
    if isinstance(upload, UploadFile) and upload.filename:
        return fields, upload
    return fields, None


async def _store_upload(upload: UploadFile, images: FileStore) -> str:
    """Write an uploaded image and return the path it is served at."""
    data = await upload.read()
    stored_name = images.save(data, upload.filename)
    return images.url_for(stored_name)


@router.post("/recipes", status_code=201)
async def create_recipe(
    request: Request,
    storage: RecipeRepository = Depends(get_recipe_storage),
    images: FileStore = Depends(get_image_store),
):
    """Create a new recipe, with an optional image upload"""
    start_request_metrics()
    try:
        fields, upload = await _read_body(request)
        recipe_data = validate_new_recipe(parse_draft(fields))
        if upload is not None:
            recipe_data.image = await _store_upload(upload, images)
        new_recipe = storage.create_recipe(recipe_data)
    except RecipeValidationError as e:
        return _error("create", 400, str(e))
    except StorageError as e:
        return _error("create", 500, str(e))
    finally:
        finish_request_metrics()
    logger.info("Created recipe %s", new_recipe.id)
    return _respond("create", 201, _recipe_to_response(new_recipe))


@router.get("/recipes")
def get_recipes(
    storage: RecipeRepository = Depends(get_recipe_storage),
):
    """Get all recipes"""
    start_request_metrics()
    try:
        recipes = storage.get_all_recipes()
    except StorageError as e:
        return _error("list", 500, str(e))
    finally:
        finish_request_metrics()
    return _respond("list", 200, [_recipe_to_response(r) for r in recipes])


@router.put("/recipes/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    request: Request,
    storage: RecipeRepository = Depends(get_recipe_storage),
    images: FileStore = Depends(get_image_store),
):
    """Update the supplied fields of an existing recipe; replace its image if one is uploaded"""
    start_request_metrics()
    try:
        fields, upload = await _read_body(request)
        changes = validate_recipe_changes(parse_draft(fields))
        if upload is not None:
            changes["image"] = await _store_upload(upload, images)
        updated_recipe = storage.update_recipe(recipe_id, changes)
        if updated_recipe is None:
            raise RecipeNotFound(recipe_id)
    except RecipeNotFound as e:
        return _error("update", 404, str(e))
    except RecipeValidationError as e:
        return _error("update", 400, str(e))
    except StorageError as e:
        return _error("update", 500, str(e))
    finally:
        finish_request_metrics()
    return _respond("update", 200, _recipe_to_response(updated_recipe))


@router.delete("/recipes/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    storage: RecipeRepository = Depends(get_recipe_storage),
):
    """Delete a recipe"""
    start_request_metrics()
    try:
        if not storage.delete_recipe(recipe_id):
            raise RecipeNotFound(recipe_id)
    except RecipeNotFound as e:
        return _error("delete", 404, str(e))
    except StorageError as e:
        return _error("delete", 500, str(e))
    finally:
        finish_request_metrics()
    logger.info("Deleted recipe %s", recipe_id)
    return _respond("delete", 200, {"message": "Recipe deleted"})


@router.get("/metrics")
def get_metrics():
    """Return aggregate storage and upload timings."""
    return aggregate_metrics.to_dict()
