"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionSummary:
    """Weight and carbohydrates for an ingredient or a whole recipe."""

    weight_grams: float
    carbs_grams: float


@dataclass(frozen=True)
class RecipeResult:
    """Per-food summaries with recipe totals."""

    total: NutritionSummary
    ingredients: Mapping[str, NutritionSummary]
