"""Pydantic models for Nutritionix natural nutrients payloads."""

from pydantic import BaseModel, ConfigDict


class NutritionixFood(BaseModel):
    """Single food matched by Nutritionix."""

    model_config = ConfigDict(extra="ignore")

    food_name: str
    brand_name: str | None = None
    serving_qty: float | None = None
    serving_unit: str | None = None
    serving_weight_grams: float | None = None
    nf_calories: float | None = None
    nf_total_carbohydrate: float | None = None

    @property
    def carbs_per_gram(self) -> float:
        """Return serving carbs divided by serving weight, 0 when undefined."""
        if not self.serving_weight_grams or self.serving_weight_grams <= 0:
            return 0.0
        if self.nf_total_carbohydrate is None:
            return 0.0
        return max(self.nf_total_carbohydrate, 0.0) / self.serving_weight_grams


class NutritionixNutrientsResponse(BaseModel):
    """Response of the natural nutrients endpoint."""

    model_config = ConfigDict(extra="ignore")

    foods: list[NutritionixFood]
