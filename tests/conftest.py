"""
Test fixtures for Recipe Catalog tests.
Each test gets its own application context: an in-memory database and a
temporary upload directory.
"""

import pytest
from fastapi.testclient import TestClient

from recipe_catalog.core.config import Settings
from recipe_catalog.core.dependencies import AppContext
from recipe_catalog.main import create_app
from recipe_catalog.services.files import ImageStore
from recipe_catalog.services.metrics import aggregate_metrics
from recipe_catalog.services.storage import RecipeStorage


@pytest.fixture
def storage():
    """Fresh in-memory RecipeStorage instance for each test."""
    recipe_storage = RecipeStorage()
    yield recipe_storage
    recipe_storage.close()


@pytest.fixture
def images(tmp_path):
    """ImageStore writing into a per-test directory."""
    return ImageStore(tmp_path / "uploads")


@pytest.fixture
def make_client(images):
    """Build a test client around any repository/file store pair."""

    def _make(recipes, file_store=None):
        file_store = file_store or images
        settings = Settings(database_path=":memory:", upload_dir=str(images.directory))
        context = AppContext(recipes=recipes, images=file_store)
        return TestClient(create_app(settings, context=context))

    return _make


@pytest.fixture
def client(make_client, storage):
    """Test client backed by the per-test storage and upload directory."""
    return make_client(storage)


@pytest.fixture(autouse=True)
def reset_aggregate_metrics():
    """Reset aggregate metrics before each test for consistent assertions."""
    aggregate_metrics.reset()
    yield


@pytest.fixture
def sample_recipe_data():
    """Sample recipe form fields, as the catalog front end submits them"""
    return {
        "recipeName": "Masala Chai",
        "description": "Spiced milk tea",
        "ingredients": "water, milk, black tea, ginger, cardamom, sugar",
        "instructions": "Boil water with spices. Add tea and milk. Simmer and strain.",
        "difficulty": "Easy",
        "servings": "2",
        "cookTime": "10",
        "prepTime": "5",
        "youtubeLink": "https://www.youtube.com/watch?v=example",
        "language": "English",
        "category": "Beverage",
        "status": "published",
    }
