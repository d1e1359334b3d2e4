"""Ingredient domain models."""

from dataclasses import dataclass

NOT_APPLICABLE = "-"


@dataclass(frozen=True)
class Ingredient:
    """Single ingredient parsed from a recipe."""

    name: str
    generic_name: str
    quantity_grams: float
    original_quantity: str = ""
    original_quantity_unit: str = ""

    @property
    def canonical_name(self) -> str:
        """Return the generic name, falling back to the original name."""
        return self.generic_name or self.name
