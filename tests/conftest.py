"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from recipe_carbs.adapters.nutritionix_client import NutritionixClient
from recipe_carbs.adapters.telegram_client import TelegramClient
from recipe_carbs.config import Settings
from recipe_carbs.containers import AppContainer
from recipe_carbs.services.analysis import RecipeAnalysisService
from recipe_carbs.services.commands import (
    HelpCommandHandler,
    RecipeMessageHandler,
    StartCommandHandler,
)
from recipe_carbs.services.dispatch import AnalysisDispatcher
from recipe_carbs.services.extraction import IngredientExtractor, TextGenerationClient
from recipe_carbs.services.nutrition import NutritionLookup

EGGS_AND_FLOUR_CSV = (
    "name,generic_name,quantity_grams,original_quantity,original_quantity_unit\n"
    "egg,egg,120,2,pcs\n"
    "flour,flour,100,100,g\n"
)

EGGS_AND_FLOUR_FOODS: dict[str, object] = {
    "foods": [
        {
            "food_name": "egg",
            "serving_qty": 1,
            "serving_unit": "large",
            "serving_weight_grams": 50,
            "nf_total_carbohydrate": 5,
        },
        {
            "food_name": "flour",
            "serving_qty": 1,
            "serving_unit": "cup",
            "serving_weight_grams": 100,
            "nf_total_carbohydrate": 75,
        },
    ]
}


@dataclass
class FakeTelegramClient(TelegramClient):
    """Fake Telegram client that records messages."""

    messages: list[tuple[int, str]] = field(default_factory=list)
    parse_modes: list[str | None] = field(default_factory=list)
    commands: list[dict[str, str]] | None = None
    menu_button: dict[str, object] | None = None

    async def send_message(
        self, chat_id: int, text: str, parse_mode: str | None = None
    ) -> None:
        self.messages.append((chat_id, text))
        self.parse_modes.append(parse_mode)

    async def set_my_commands(self, commands: list[dict[str, str]]) -> None:
        self.commands = commands

    async def set_chat_menu_button(
        self, menu_button: dict[str, object] | None = None
    ) -> None:
        self.menu_button = menu_button


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text generation client returning a fixed reply."""

    content: str | None = EGGS_AND_FLOUR_CSV
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

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
        self.prompts.append(user_text)
        if self.error is not None:
            raise self.error
        return self.content


@dataclass
class FakeNutritionixClient(NutritionixClient):
    """Fake Nutritionix client with an in-memory response."""

    payload: dict[str, object] = field(
        default_factory=lambda: dict(EGGS_AND_FLOUR_FOODS)
    )
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def natural_nutrients(self, query: str) -> dict[str, object]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        telegram_bot_token="test-token",
        openai_api_key="openai-key",
        nutritionix_app_id="app-id",
        nutritionix_api_key="nutritionix-key",
    )


@pytest.fixture
def telegram_client() -> FakeTelegramClient:
    return FakeTelegramClient()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def nutritionix_client() -> FakeNutritionixClient:
    return FakeNutritionixClient()


@pytest.fixture
def analysis_service(
    settings: Settings,
    text_client: FakeTextClient,
    nutritionix_client: FakeNutritionixClient,
) -> RecipeAnalysisService:
    return RecipeAnalysisService(
        extractor=IngredientExtractor(client=text_client, model=settings.openai_model),
        nutrition_lookup=NutritionLookup(nutritionix_client=nutritionix_client),
    )


@pytest.fixture
def container(
    settings: Settings,
    telegram_client: FakeTelegramClient,
    analysis_service: RecipeAnalysisService,
) -> AppContainer:
    dispatcher = AnalysisDispatcher(
        analysis_service=analysis_service, telegram_client=telegram_client
    )

    async def close_resources() -> None:
        await dispatcher.aclose()

    return AppContainer(
        settings=settings,
        telegram_client=telegram_client,
        analysis_service=analysis_service,
        dispatcher=dispatcher,
        start_command_handler=StartCommandHandler(telegram_client),
        help_command_handler=HelpCommandHandler(telegram_client),
        recipe_message_handler=RecipeMessageHandler(
            telegram_client=telegram_client,
            dispatcher=dispatcher,
            min_recipe_length=settings.min_recipe_length,
        ),
        close_resources=close_resources,
    )
