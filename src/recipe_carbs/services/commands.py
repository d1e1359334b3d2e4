"""Command and message handlers for Telegram updates."""

import logging
from dataclasses import dataclass, field

from recipe_carbs.adapters.telegram_client import TelegramClient
from recipe_carbs.services.dispatch import AnalysisDispatcher

GREETING_MESSAGE = "Hello! Send me a recipe text."
HELP_MESSAGE = (
    "Send me a recipe as plain text, for example "
    "\"2 eggs and 100g flour\". I will list every ingredient with its weight "
    "and carbohydrates and sum up the totals."
)
TOO_SHORT_MESSAGE = (
    "This doesn't look like a recipe, try again and provide more data"
)
ACKNOWLEDGEMENT_MESSAGE = "Analyzing the recipe! Will come back with the result soon."

_logger = logging.getLogger(__name__)


@dataclass
class StartCommandHandler:
    """Handle the /start Telegram command."""

    telegram_client: TelegramClient

    async def handle(self, chat_id: int) -> None:
        """Send a welcome message."""
        await self.telegram_client.send_message(chat_id=chat_id, text=GREETING_MESSAGE)


@dataclass
class HelpCommandHandler:
    """Handle the /help Telegram command and unknown commands."""

    telegram_client: TelegramClient

    async def handle(self, chat_id: int) -> None:
        """Send usage instructions."""
        await self.telegram_client.send_message(chat_id=chat_id, text=HELP_MESSAGE)


@dataclass
class RecipeMessageHandler:
    """Validate recipe text, acknowledge it and start the analysis."""

    telegram_client: TelegramClient
    dispatcher: AnalysisDispatcher
    min_recipe_length: int = 10
    logger: logging.Logger = field(default=_logger)

    async def handle(self, chat_id: int, text: str) -> bool:
        """Return True when an analysis was scheduled for the text."""
        if len(text) < self.min_recipe_length:
            await self.telegram_client.send_message(
                chat_id=chat_id, text=TOO_SHORT_MESSAGE
            )
            return False
        try:
            await self.telegram_client.send_message(
                chat_id=chat_id, text=ACKNOWLEDGEMENT_MESSAGE
            )
        except Exception:
            self.logger.exception(
                "Failed to acknowledge recipe", extra={"chat_id": chat_id}
            )
            return False
        self.dispatcher.submit(chat_id, text)
        return True
