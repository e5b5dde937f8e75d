"""
Tests for the recipe document validation script.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SCRIPT_PATH = PROJECT_ROOT / "scripts" / "validate_recipes.py"

VALID_RECIPE = {
    "id": "0f6c0c3b9d2e4f2a8f0b5a3c1d2e3f40",
    "recipeName": "Banana Bread",
    "ingredients": "bananas, flour, butter, sugar, eggs",
    "instructions": "Mash, mix, bake for an hour.",
    "difficulty": "Easy",
    "servings": 8,
    "cookTime": 60,
    "prepTime": 15,
    "category": "Baking",
    "image": None,
    "uploadDate": "2024-01-01T00:00:00",
}


def run_validate(args: list[str]) -> tuple[int, str, str]:
    """Run validate_recipes.py and return (exit_code, stdout, stderr)."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(PROJECT_ROOT), env.get("PYTHONPATH")) if p
    )
    result = subprocess.run(
        [sys.executable, str(SCRIPT_PATH)] + args,
        capture_output=True,
        text=True,
        cwd=str(PROJECT_ROOT),
        env=env,
    )
    return result.returncode, result.stdout, result.stderr


def test_validate_valid_file(tmp_path):
    good_file = tmp_path / "recipes.json"
    good_file.write_text(json.dumps([VALID_RECIPE]))
    exit_code, stdout, _ = run_validate([str(good_file)])
    assert exit_code == 0
    assert "passed schema validation" in stdout


def test_validate_invalid_json(tmp_path):
    """Validation script fails for invalid JSON"""
    bad_file = tmp_path / "bad.json"
    bad_file.write_text("{ invalid json")
    exit_code, stdout, _ = run_validate([str(bad_file)])
    assert exit_code == 1
    assert "Invalid JSON" in stdout


def test_validate_not_array(tmp_path):
    """Validation script fails when root is not an array"""
    bad_file = tmp_path / "object.json"
    bad_file.write_text('{"key": "value"}')
    exit_code, stdout, _ = run_validate([str(bad_file)])
    assert exit_code == 1
    assert "array" in stdout.lower()


def test_validate_missing_required_field(tmp_path):
    """Validation script fails for a recipe without ingredients"""
    invalid = {k: v for k, v in VALID_RECIPE.items() if k != "ingredients"}
    bad_file = tmp_path / "invalid.json"
    bad_file.write_text(json.dumps([VALID_RECIPE, invalid]))
    exit_code, stdout, _ = run_validate([str(bad_file)])
    assert exit_code == 1
    assert "index 1" in stdout
    assert "ingredients" in stdout


def test_validate_missing_file(tmp_path):
    exit_code, stdout, _ = run_validate([str(tmp_path / "nope.json")])
    assert exit_code == 1
    assert "File not found" in stdout
