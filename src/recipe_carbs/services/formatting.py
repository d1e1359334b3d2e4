"""Telegram MarkdownV2 rendering of recipe results."""

from recipe_carbs.domain.nutrition import RecipeResult

PARSE_MODE = "MarkdownV2"

_RESERVED = frozenset("\\_*[]()~`>#+-=|{}.!")


def format_report(result: RecipeResult) -> str:
    """Render per-food and total weight/carbs as a MarkdownV2 message."""
    lines = ["Ingredients:"]
    for name, info in result.ingredients.items():
        lines.append(
            f" · {escape_markdown(name)}: {format_number(info.weight_grams)} grams, "
            f"{format_number(info.carbs_grams)} carbs"
        )
    lines.extend(["", ""])
    lines.append(f" Total weight: {format_number(result.total.weight_grams)}")
    lines.append(f" Total carbs: {format_number(result.total.carbs_grams)}")
    return "\n".join(lines)


def format_number(value: float) -> str:
    """Format a number with two decimals, escaped for MarkdownV2."""
    return escape_markdown(f"{value:.2f}")


def escape_markdown(text: str) -> str:
    """Escape MarkdownV2 reserved characters with a backslash."""
    return "".join(f"\\{char}" if char in _RESERVED else char for char in text)
