"""ASGI entrypoint for the recipe carbs bot."""

from recipe_carbs.api.app import create_app
from recipe_carbs.containers import build_container

app = create_app(build_container())
