"""Recipe analysis orchestration."""

import logging
from dataclasses import dataclass, field

from recipe_carbs.domain.errors import AnalysisFailed
from recipe_carbs.services.extraction import IngredientExtractor
from recipe_carbs.services.formatting import format_report
from recipe_carbs.services.nutrition import NutritionLookup

_logger = logging.getLogger(__name__)


@dataclass
class RecipeAnalysisService:
    """Runs extraction, nutrition lookup and formatting for one recipe."""

    extractor: IngredientExtractor
    nutrition_lookup: NutritionLookup
    logger: logging.Logger = field(default=_logger)

    async def analyze(self, recipe_text: str) -> str:
        """Return a formatted carbs report or raise AnalysisFailed."""
        try:
            ingredients = await self.extractor.extract(recipe_text)
            result = await self.nutrition_lookup.lookup(ingredients)
            return format_report(result)
        except Exception as exc:
            self.logger.exception(
                "Recipe analysis failed",
                extra={"recipe_length": len(recipe_text)},
            )
            raise AnalysisFailed("Recipe analysis failed") from exc
