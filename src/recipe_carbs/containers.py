"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from recipe_carbs.adapters.nutritionix_client import HttpxNutritionixClient
from recipe_carbs.adapters.openai_text_client import OpenAITextClient
from recipe_carbs.adapters.telegram_client import (
    HttpxTelegramClient,
    TelegramClient,
)
from recipe_carbs.config import Settings
from recipe_carbs.services.analysis import RecipeAnalysisService
from recipe_carbs.services.commands import (
    HelpCommandHandler,
    RecipeMessageHandler,
    StartCommandHandler,
)
from recipe_carbs.services.dispatch import AnalysisDispatcher
from recipe_carbs.services.extraction import IngredientExtractor
from recipe_carbs.services.nutrition import NutritionLookup


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    telegram_client: TelegramClient
    analysis_service: RecipeAnalysisService
    dispatcher: AnalysisDispatcher
    start_command_handler: StartCommandHandler
    help_command_handler: HelpCommandHandler
    recipe_message_handler: RecipeMessageHandler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    telegram_client = HttpxTelegramClient.create(resolved_settings.telegram_bot_token)
    openai_client = OpenAITextClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    nutritionix_client = HttpxNutritionixClient.create(
        app_id=resolved_settings.nutritionix_app_id,
        api_key=resolved_settings.nutritionix_api_key,
        base_url=resolved_settings.nutritionix_base_url,
        timeout_seconds=resolved_settings.http_timeout_seconds,
    )
    extractor = IngredientExtractor(
        client=openai_client,
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        top_p=resolved_settings.openai_top_p,
        max_tokens=resolved_settings.openai_max_tokens,
    )
    analysis_service = RecipeAnalysisService(
        extractor=extractor,
        nutrition_lookup=NutritionLookup(nutritionix_client=nutritionix_client),
    )
    dispatcher = AnalysisDispatcher(
        analysis_service=analysis_service, telegram_client=telegram_client
    )
    recipe_handler = RecipeMessageHandler(
        telegram_client=telegram_client,
        dispatcher=dispatcher,
        min_recipe_length=resolved_settings.min_recipe_length,
    )

    async def close_resources() -> None:
        await dispatcher.aclose()
        await telegram_client.close()
        await openai_client.close()
        await nutritionix_client.close()

    return AppContainer(
        settings=resolved_settings,
        telegram_client=telegram_client,
        analysis_service=analysis_service,
        dispatcher=dispatcher,
        start_command_handler=StartCommandHandler(telegram_client),
        help_command_handler=HelpCommandHandler(telegram_client),
        recipe_message_handler=recipe_handler,
        close_resources=close_resources,
    )
