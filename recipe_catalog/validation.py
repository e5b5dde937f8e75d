"""
Recipe validation: turns raw request fields into validated models.

Used by the API handlers and the validate_recipes CLI script.
"""

from typing import Any, Mapping, Type

from pydantic import BaseModel, ValidationError

from recipe_catalog.errors import RecipeValidationError
from recipe_catalog.models import REQUIRED_FIELDS, RecipeCreate, RecipeDraft, RecipeUpdate


def _wire_name(model: Type[BaseModel], loc: tuple) -> str:
    """Map a pydantic error location to the field name clients use."""
    if not loc:
        return "body"
    key = str(loc[0])
    field = model.model_fields.get(key)
    if field is not None and field.alias:
        return field.alias
    return key


def _problems(model: Type[BaseModel], error: ValidationError) -> list[dict]:
    return [
        {"field": _wire_name(model, tuple(err["loc"])), "message": err["msg"]}
        for err in error.errors()
    ]


def parse_draft(data: Mapping[str, Any]) -> RecipeDraft:
    """Collect known recipe fields from a request body."""
    try:
        return RecipeDraft.model_validate(dict(data))
    except ValidationError as e:
        raise RecipeValidationError(_problems(RecipeDraft, e)) from e


def validate_new_recipe(draft: RecipeDraft) -> RecipeCreate:
    """Validate a draft for creation. Every required field must be present."""
    try:
        return RecipeCreate.model_validate(draft.supplied())
    except ValidationError as e:
        raise RecipeValidationError(_problems(RecipeCreate, e)) from e


def validate_recipe_changes(draft: RecipeDraft) -> dict:
    """
    Validate a draft for a partial update.

    Returns:
        Dict of the supplied fields only, keyed by attribute name and
        coerced to their stored types.
    """
    supplied = draft.supplied()
    try:
        changes = RecipeUpdate.model_validate(supplied)
    except ValidationError as e:
        raise RecipeValidationError(_problems(RecipeUpdate, e)) from e

    nulls = [name for name in REQUIRED_FIELDS if name in supplied and supplied[name] is None]
    if nulls:
        raise RecipeValidationError(
            [
                {"field": _wire_name(RecipeUpdate, (name,)), "message": "Field may not be null"}
                for name in nulls
            ]
        )

    return changes.model_dump(exclude_unset=True)


def validate_recipe_document(document: Any) -> tuple[RecipeCreate | None, list[dict]]:
    """
    Validate a single stored-format recipe document (as in an export file).

    Returns:
        Tuple of (RecipeCreate instance or None, list of problem dicts).
    """
    if not isinstance(document, dict):
        return None, [
            {
                "field": "body",
                "message": f"Each item must be an object, got {type(document).__name__}",
            }
        ]

    try:
        return RecipeCreate.model_validate(document), []
    except ValidationError as e:
        return None, _problems(RecipeCreate, e)
