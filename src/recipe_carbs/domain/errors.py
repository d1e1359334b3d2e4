"""Error taxonomy for recipe analysis."""


class RecipeAnalysisError(Exception):
    """Base class for failures while analyzing a recipe."""


class EmptyRecipe(RecipeAnalysisError):
    """The text generation service found no ingredients in the recipe."""


class MalformedResponse(RecipeAnalysisError):
    """An upstream service returned a body that could not be parsed."""


class TextServiceFailure(RecipeAnalysisError):
    """The text generation service call failed."""


class NutritionServiceFailure(RecipeAnalysisError):
    """The nutrition facts service call failed."""


class NoIngredients(RecipeAnalysisError):
    """Nutrition lookup was requested for an empty ingredient list."""


class IngredientCountMismatch(RecipeAnalysisError):
    """The nutrition service returned a different number of foods than requested."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Expected {expected} foods from the nutrition service, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class AnalysisFailed(RecipeAnalysisError):
    """Opaque failure surfaced to the chat layer."""
