"""
Recipe storage implementations.
SQLite-backed persistence with in-memory support for testing.
"""

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from recipe_catalog.errors import StorageError
from recipe_catalog.models import Recipe, RecipeCreate
from recipe_catalog.services.metrics import timed_storage

logger = logging.getLogger(__name__)

# Column order shared by every SELECT/INSERT below
COLUMNS = (
    "id",
    "name",
    "description",
    "ingredients",
    "instructions",
    "difficulty",
    "servings",
    "cook_time",
    "prep_time",
    "youtube_link",
    "language",
    "category",
    "status",
    "image",
    "upload_date",
)

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM recipes"


def _init_schema(conn: sqlite3.Connection) -> None:
    """Create recipes table if not exists."""
    conn.execute("""
        CREATE TABLE IF NOT EXISTS recipes (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT,
            ingredients TEXT NOT NULL,
            instructions TEXT NOT NULL,
            difficulty TEXT NOT NULL,
            servings INTEGER NOT NULL,
            cook_time REAL NOT NULL,
            prep_time REAL NOT NULL,
            youtube_link TEXT,
            language TEXT,
            category TEXT NOT NULL,
            status TEXT,
            image TEXT,
            upload_date TEXT NOT NULL
        )
    """)
    conn.commit()


def _recipe_from_row(row: tuple) -> Recipe:
    """Build Recipe from DB row."""
    data = dict(zip(COLUMNS, row))
    data["upload_date"] = datetime.fromisoformat(data["upload_date"])
    return Recipe.model_validate(data)


def _recipe_to_row(recipe: Recipe) -> tuple:
    """Convert Recipe to DB row tuple."""
    data = recipe.model_dump()
    data["upload_date"] = recipe.upload_date.isoformat()
    return tuple(data[column] for column in COLUMNS)


class RecipeStorage:
    """SQLite-backed recipe storage implementing RecipeRepository."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path or ":memory:"
        try:
            self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
            _init_schema(self._conn)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open recipe database {self._db_path}: {e}") from e
        logger.info("Recipe database ready at %s", self._db_path)

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            with timed_storage():
                cur = self._conn.execute(sql, params)
                self._conn.commit()
        except (sqlite3.Error, OverflowError) as e:
            logger.error("Recipe query failed: %s", e)
            raise StorageError(str(e)) from e
        return cur

    def clear(self) -> None:
        """Remove every recipe."""
        self._execute("DELETE FROM recipes")

    def close(self) -> None:
        self._conn.close()

    def get_all_recipes(self) -> List[Recipe]:
        cur = self._execute(_SELECT)
        return [_recipe_from_row(tuple(r)) for r in cur.fetchall()]

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        cur = self._execute(f"{_SELECT} WHERE id = ?", (recipe_id,))
        row = cur.fetchone()
        if row is None:
            return None
        return _recipe_from_row(tuple(row))

    def create_recipe(self, recipe_data: RecipeCreate) -> Recipe:
        recipe = Recipe(**recipe_data.model_dump())
        placeholders = ", ".join("?" for _ in COLUMNS)
        self._execute(
            f"INSERT INTO recipes ({', '.join(COLUMNS)}) VALUES ({placeholders})",
            _recipe_to_row(recipe),
        )
        logger.debug("Created recipe %s", recipe.id)
        return recipe

    def update_recipe(self, recipe_id: str, changes: dict) -> Optional[Recipe]:
        existing = self.get_recipe(recipe_id)
        if existing is None:
            return None
        recipe_dict = existing.model_dump()
        recipe_dict.update(changes)
        recipe = Recipe(**recipe_dict)
        if not changes:
            return recipe
        assignments = ", ".join(f"{column}=?" for column in changes)
        values = tuple(getattr(recipe, column) for column in changes)
        cur = self._execute(
            f"UPDATE recipes SET {assignments} WHERE id=?",
            values + (recipe_id,),
        )
        if cur.rowcount == 0:
            # Deleted after it was read
            return None
        logger.debug("Updated recipe %s fields %s", recipe_id, sorted(changes))
        return recipe

    def delete_recipe(self, recipe_id: str) -> bool:
        cur = self._execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
        return cur.rowcount > 0
