#!/usr/bin/env python3
"""
Validation script for recipe documents.

Checks JSON files containing arrays of recipe documents (as returned by
GET /api/recipes) against the recipe creation schema. Use for CI checks or
before loading a backup into a fresh database.

Usage:
    python scripts/validate_recipes.py backup.json
    python scripts/validate_recipes.py path/to/recipes.json [more.json ...]

Exit codes:
    0 - All recipes pass validation
    1 - Validation failed (schema errors or invalid JSON)
"""

import json
import sys
from pathlib import Path

from recipe_catalog.validation import validate_recipe_document


def validate_recipes_file(file_path: Path) -> tuple[list[dict], list[str]]:
    """
    Validate a JSON file of recipe documents.

    Returns:
        Tuple of (validation_errors, error_messages).
        validation_errors: list of error dicts with index, recipe id/name and field problems
        error_messages: human-readable messages for stdout
    """
    errors: list[dict] = []
    messages: list[str] = []

    if not file_path.exists():
        messages.append(f"Error: File not found: {file_path}")
        return [{"file": str(file_path), "error": "File not found"}], messages

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as e:
        messages.append(f"Error: Cannot read file: {e}")
        return [{"file": str(file_path), "error": str(e)}], messages

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        messages.append(f"Error: Invalid JSON at line {e.lineno}: {e.msg}")
        return [{"file": str(file_path), "error": f"Invalid JSON: {e.msg}"}], messages

    if not isinstance(data, list):
        messages.append("Error: Root must be a JSON array of recipes")
        return [{"file": str(file_path), "error": "Root must be an array"}], messages

    for i, item in enumerate(data):
        recipe, problems = validate_recipe_document(item)
        if problems:
            recipe_id = item.get("id", "?") if isinstance(item, dict) else "?"
            name = (
                item.get("recipeName", "<no name>")
                if isinstance(item, dict)
                else "<no name>"
            )
            details = [f"  - {p['field']}: {p['message']}" for p in problems]
            messages.append(
                f"Recipe at index {i} (id={recipe_id}, recipeName={name!r}):\n"
                + "\n".join(details)
            )
            errors.append({"index": i, "id": recipe_id, "recipeName": name, "errors": problems})

    return errors, messages


def main() -> int:
    """Run validation on given file(s)."""
    if len(sys.argv) < 2:
        print(__doc__, file=sys.stderr)
        return 1

    all_errors: list[dict] = []
    all_messages: list[str] = []

    for arg in sys.argv[1:]:
        errs, msgs = validate_recipes_file(Path(arg))
        all_errors.extend(errs)
        all_messages.extend(msgs)

    for msg in all_messages:
        print(msg)

    if all_errors:
        print("\nValidation failed.", file=sys.stderr)
        return 1

    print("All recipes passed schema validation.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
