"""
Tests for the SQLite recipe storage.
"""

from datetime import timedelta

import pytest

from recipe_catalog.errors import StorageError
from recipe_catalog.models import RecipeCreate


def _recipe_create(**overrides) -> RecipeCreate:
    data = {
        "name": "Dal Tadka",
        "ingredients": "lentils, ghee, cumin",
        "instructions": "Cook lentils. Temper spices. Combine.",
        "difficulty": "Medium",
        "servings": 4,
        "cook_time": 30,
        "prep_time": 10,
        "category": "Main",
    }
    data.update(overrides)
    return RecipeCreate(**data)


def test_create_assigns_id_and_upload_date(storage):
    recipe = storage.create_recipe(_recipe_create())
    assert recipe.id
    assert recipe.upload_date is not None
    assert storage.get_recipe(recipe.id) == recipe


def test_ids_are_unique(storage):
    first = storage.create_recipe(_recipe_create())
    second = storage.create_recipe(_recipe_create())
    assert first.id != second.id


def test_get_all_returns_storage_order(storage):
    names = ["First", "Second", "Third"]
    for name in names:
        storage.create_recipe(_recipe_create(name=name))
    assert [r.name for r in storage.get_all_recipes()] == names


def test_get_recipe_unknown_returns_none(storage):
    assert storage.get_recipe("missing") is None


def test_update_overwrites_only_given_fields(storage):
    recipe = storage.create_recipe(_recipe_create(description="Plain"))
    updated = storage.update_recipe(recipe.id, {"difficulty": "Hard", "image": "/uploads/1-dal.png"})
    assert updated.difficulty == "Hard"
    assert updated.image == "/uploads/1-dal.png"
    assert updated.description == "Plain"
    assert updated.upload_date == recipe.upload_date
    assert storage.get_recipe(recipe.id) == updated


def test_update_with_no_changes_returns_recipe(storage):
    recipe = storage.create_recipe(_recipe_create())
    assert storage.update_recipe(recipe.id, {}) == recipe


def test_update_unknown_returns_none(storage):
    assert storage.update_recipe("missing", {"status": "draft"}) is None


def test_delete(storage):
    recipe = storage.create_recipe(_recipe_create())
    assert storage.delete_recipe(recipe.id) is True
    assert storage.delete_recipe(recipe.id) is False
    assert storage.get_all_recipes() == []


def test_clear(storage):
    storage.create_recipe(_recipe_create())
    storage.create_recipe(_recipe_create())
    storage.clear()
    assert storage.get_all_recipes() == []


def test_update_of_recipe_deleted_after_read_returns_none(storage, monkeypatch):
    recipe = storage.create_recipe(_recipe_create())
    storage.delete_recipe(recipe.id)
    monkeypatch.setattr(storage, "get_recipe", lambda recipe_id: recipe)
    assert storage.update_recipe(recipe.id, {"status": "draft"}) is None


def test_upload_date_is_timezone_aware(storage):
    recipe = storage.create_recipe(_recipe_create())
    assert recipe.upload_date.utcoffset() == timedelta(0)
    assert storage.get_recipe(recipe.id).upload_date == recipe.upload_date


def test_out_of_range_integer_becomes_storage_error(storage):
    with pytest.raises(StorageError):
        storage._execute("SELECT ?", (10**20,))


def test_database_errors_become_storage_errors(storage):
    storage.close()
    with pytest.raises(StorageError):
        storage.get_all_recipes()


def test_file_backed_database_persists(tmp_path):
    from recipe_catalog.services.storage import RecipeStorage

    db_path = str(tmp_path / "recipes.db")
    first = RecipeStorage(db_path)
    recipe = first.create_recipe(_recipe_create())
    first.close()

    second = RecipeStorage(db_path)
    try:
        assert second.get_recipe(recipe.id) == recipe
    finally:
        second.close()
