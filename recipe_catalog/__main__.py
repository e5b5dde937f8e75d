from recipe_catalog.main import run

run()
