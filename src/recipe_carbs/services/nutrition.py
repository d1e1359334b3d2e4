"""Nutrition lookup service integrating Nutritionix."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx
from pydantic import ValidationError

from recipe_carbs.adapters.nutritionix_client import NutritionixClient
from recipe_carbs.domain.errors import (
    IngredientCountMismatch,
    MalformedResponse,
    NoIngredients,
    NutritionServiceFailure,
)
from recipe_carbs.domain.ingredients import Ingredient
from recipe_carbs.domain.nutrition import NutritionSummary, RecipeResult
from recipe_carbs.domain.nutritionix import NutritionixNutrientsResponse

QUERY_SEPARATOR = ", "

_logger = logging.getLogger(__name__)


@dataclass
class NutritionLookup:
    """Service computing weighted carbohydrates for recipe ingredients."""

    nutritionix_client: NutritionixClient
    logger: logging.Logger = field(default=_logger)

    async def lookup(self, ingredients: list[Ingredient]) -> RecipeResult:
        """Query nutrition facts for all ingredients and aggregate the carbs."""
        if not ingredients:
            raise NoIngredients("Nutrition lookup requires at least one ingredient")

        query = build_query(ingredients)
        self.logger.info("Nutritionix query: %s", query)
        payload = await self._fetch(query)
        try:
            response = NutritionixNutrientsResponse.model_validate(payload)
        except ValidationError as exc:
            raise MalformedResponse(f"Unexpected Nutritionix payload: {exc}") from exc

        if len(response.foods) != len(ingredients):
            raise IngredientCountMismatch(len(ingredients), len(response.foods))

        summaries: dict[str, NutritionSummary] = {}
        for ingredient, food in zip(ingredients, response.foods, strict=True):
            weight = ingredient.quantity_grams
            carbs = weight * food.carbs_per_gram
            existing = summaries.get(food.food_name)
            if existing is not None:
                self.logger.warning(
                    "Ingredient %s matched food %s twice, combining entries",
                    ingredient.canonical_name,
                    food.food_name,
                )
                weight += existing.weight_grams
                carbs += existing.carbs_grams
            summaries[food.food_name] = NutritionSummary(
                weight_grams=weight, carbs_grams=carbs
            )

        total = NutritionSummary(
            weight_grams=sum(item.weight_grams for item in summaries.values()),
            carbs_grams=sum(item.carbs_grams for item in summaries.values()),
        )
        self.logger.info(
            "Recipe totals: weight=%.2f carbs=%.2f foods=%s",
            total.weight_grams,
            total.carbs_grams,
            len(summaries),
        )
        return RecipeResult(total=total, ingredients=MappingProxyType(summaries))

    async def _fetch(self, query: str) -> dict[str, object]:
        """Call Nutritionix, translating transport and decoding errors."""
        try:
            return await self.nutritionix_client.natural_nutrients(query)
        except httpx.HTTPError as exc:
            self.logger.warning(
                "Nutritionix request failed (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            raise NutritionServiceFailure(
                f"Nutritionix request failed: {exc}"
            ) from exc
        except ValueError as exc:
            raise MalformedResponse("Nutritionix returned invalid JSON") from exc


def build_query(ingredients: list[Ingredient]) -> str:
    """Join canonical ingredient names into one natural language query."""
    return QUERY_SEPARATOR.join(
        ingredient.canonical_name for ingredient in ingredients
    )


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
