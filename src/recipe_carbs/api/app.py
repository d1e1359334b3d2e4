"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from recipe_carbs.api.telegram_models import TelegramUpdate
from recipe_carbs.app_logging import configure_logging
from recipe_carbs.containers import AppContainer
from recipe_carbs.telegram_commands import CHAT_MENU_BUTTON, telegram_commands


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.telegram_client.set_my_commands(
                telegram_commands()
            )
            await app.state.container.telegram_client.set_chat_menu_button(
                CHAT_MENU_BUTTON
            )
        except Exception:
            logger.exception("Failed to sync Telegram bot commands")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/telegram/webhook")
    async def telegram_webhook(
        update: TelegramUpdate, request: Request
    ) -> dict[str, str]:
        """Handle Telegram webhook updates."""
        state_container: AppContainer = request.app.state.container
        message = update.message
        if not message or not message.text:
            return {"status": "ok"}

        command = _parse_command(message.text)
        if command == "start":
            await state_container.start_command_handler.handle(message.chat.id)
        elif command is not None:
            await state_container.help_command_handler.handle(message.chat.id)
        else:
            await state_container.recipe_message_handler.handle(
                message.chat.id, message.text
            )
        return {"status": "ok"}

    return app


def _parse_command(text: str) -> str | None:
    """Return the bot command name for texts like /start or /help@bot."""
    if not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0][1:]
    return head.split("@", maxsplit=1)[0].lower() or None
