"""Ingredient extraction from recipe text using LLMs."""

import csv
import io
import logging
import math
from dataclasses import dataclass, field
from typing import Protocol

import httpx
import openai

from recipe_carbs.domain.errors import (
    EmptyRecipe,
    MalformedResponse,
    TextServiceFailure,
)
from recipe_carbs.domain.ingredients import NOT_APPLICABLE, Ingredient

NO_INGREDIENTS = "NO_INGREDIENTS"
NO_QUANTITY = "NO_QUANTITY"

INGREDIENTS_PROMPT = f"""I will give you a dish recipe.
Provide a list of ingredients of this dish.
If you found zero ingredients or the text is unrelated to recipes,
respond with "{NO_INGREDIENTS}" text only.
Try to provide a generic name for every ingredient in the generic_name field.
A generic name is the name without any brands.
Convert every possible measurement to grams.
Return CSV data: one header line, then one line per ingredient with the fields
name, generic_name, quantity_grams, original_quantity, original_quantity_unit.
name is the original input name of the ingredient.
generic_name is the generic name of the ingredient.
quantity_grams is the amount of the ingredient in grams.
If unable to calculate it, use the "{NO_QUANTITY}" value.
original_quantity is the amount of the ingredient in the original units.
original_quantity_unit is the original unit if it is different from grams.
original_quantity and original_quantity_unit are filled only
if the ingredient was converted to grams."""

_MIN_FIELDS = 4
_MAX_FIELDS = 5

_logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Interface for LLM text completion."""

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        temperature: float,
        top_p: float,
        max_tokens: int,
        system_prompt: str,
        user_text: str,
    ) -> str | None:
        """Return the generated text for a system prompt and user text."""


@dataclass
class IngredientExtractor:
    """Service that asks an LLM for recipe ingredients and parses the CSV reply."""

    client: TextGenerationClient
    model: str
    temperature: float = 0.5
    top_p: float = 1.0
    max_tokens: int = 1000
    logger: logging.Logger = field(default=_logger)

    async def extract(self, recipe_text: str) -> list[Ingredient]:
        """Return merged ingredients for a recipe text."""
        self.logger.info("Extracting ingredients from %s characters", len(recipe_text))
        try:
            content = await self.client.complete(
                model=self.model,
                temperature=self.temperature,
                top_p=self.top_p,
                max_tokens=self.max_tokens,
                system_prompt=INGREDIENTS_PROMPT,
                user_text=recipe_text,
            )
        except (openai.OpenAIError, httpx.HTTPError) as exc:
            raise TextServiceFailure(f"Text generation failed: {exc}") from exc

        if not content or not content.strip():
            raise MalformedResponse("Text generation returned an empty response")
        self.logger.info("Text generation response: %s", content)
        if content.strip() == NO_INGREDIENTS:
            raise EmptyRecipe("No ingredients found in recipe")

        ingredients = merge_ingredients(
            parse_ingredient_rows(content, logger=self.logger), logger=self.logger
        )
        if not ingredients:
            raise EmptyRecipe("No ingredient rows could be parsed")
        return ingredients


def parse_ingredient_rows(
    content: str, logger: logging.Logger = _logger
) -> list[Ingredient]:
    """Parse CSV ingredient rows, skipping the header and malformed rows."""
    reader = csv.reader(
        io.StringIO(_strip_code_fence(content)), skipinitialspace=True
    )
    try:
        next(reader)
    except (StopIteration, csv.Error) as exc:
        raise MalformedResponse("Failed to read CSV header") from exc

    ingredients: list[Ingredient] = []
    while True:
        try:
            row = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            logger.warning("Failed to parse ingredient row, skipping: %s", exc)
            continue
        ingredient = _row_to_ingredient([value.strip() for value in row], logger)
        if ingredient is not None:
            ingredients.append(ingredient)
    return ingredients


def merge_ingredients(
    ingredients: list[Ingredient], logger: logging.Logger = _logger
) -> list[Ingredient]:
    """Merge ingredients sharing a canonical name by summing their grams."""
    groups: dict[str, list[Ingredient]] = {}
    for ingredient in ingredients:
        groups.setdefault(ingredient.canonical_name, []).append(ingredient)

    merged: list[Ingredient] = []
    for name, group in groups.items():
        if len(group) == 1:
            merged.append(group[0])
            continue
        logger.info("Found %s entries for %s, merging", len(group), name)
        first = group[0]
        merged.append(
            Ingredient(
                name=first.name,
                generic_name=first.generic_name,
                quantity_grams=sum(item.quantity_grams for item in group),
                original_quantity=NOT_APPLICABLE,
                original_quantity_unit=NOT_APPLICABLE,
            )
        )
    return merged


def _row_to_ingredient(row: list[str], logger: logging.Logger) -> Ingredient | None:
    """Build an ingredient from CSV fields, or None when the row is unusable."""
    if not _MIN_FIELDS <= len(row) <= _MAX_FIELDS:
        if any(row):
            logger.warning("Unexpected ingredient row shape, skipping: %s", row)
        return None
    name, generic_name, raw_grams, original_quantity = row[:_MIN_FIELDS]
    if not name and not generic_name:
        logger.warning("Ingredient row without a name, skipping: %s", row)
        return None
    original_unit = row[_MIN_FIELDS] if len(row) == _MAX_FIELDS else ""
    return Ingredient(
        name=name or generic_name,
        generic_name=generic_name,
        quantity_grams=_parse_grams(raw_grams, logger),
        original_quantity=original_quantity,
        original_quantity_unit=original_unit,
    )


def _parse_grams(raw: str, logger: logging.Logger) -> float:
    """Parse a gram quantity, defaulting to 0 for unknown values."""
    try:
        grams = float(raw)
    except ValueError:
        logger.warning("Failed to parse grams from %r, using 0", raw)
        return 0.0
    if not math.isfinite(grams) or grams < 0:
        logger.warning("Invalid grams value %r, using 0", raw)
        return 0.0
    return grams


def _strip_code_fence(content: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    lines = content.strip().splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
    return "\n".join(lines)
