"""Background execution of recipe analyses."""

import asyncio
import logging
from dataclasses import dataclass, field

from recipe_carbs.adapters.telegram_client import TelegramClient
from recipe_carbs.services.analysis import RecipeAnalysisService
from recipe_carbs.services.formatting import PARSE_MODE

FAILURE_MESSAGE = "Sorry, can't analyze it."

_logger = logging.getLogger(__name__)


@dataclass
class AnalysisDispatcher:
    """Runs one supervised task per recipe and delivers the outcome to the chat.

    Pending tasks are tracked so they can be awaited on shutdown. Every failure
    inside a task is logged and turned into the failure message.
    """

    analysis_service: RecipeAnalysisService
    telegram_client: TelegramClient
    logger: logging.Logger = field(default=_logger)
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False)

    def submit(self, chat_id: int, recipe_text: str) -> asyncio.Task[None]:
        """Schedule an analysis for the chat and return its task."""
        task = asyncio.create_task(
            self._run(chat_id, recipe_text), name=f"recipe-analysis:{chat_id}"
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        """Number of analyses still running."""
        return len(self._tasks)

    async def aclose(self) -> None:
        """Wait for all pending analyses to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _run(self, chat_id: int, recipe_text: str) -> None:
        try:
            report = await self.analysis_service.analyze(recipe_text)
            await self.telegram_client.send_message(
                chat_id=chat_id, text=report, parse_mode=PARSE_MODE
            )
        except Exception:
            self.logger.warning(
                "Analysis or delivery failed for chat %s", chat_id, exc_info=True
            )
            await self._send(chat_id, FAILURE_MESSAGE)

    async def _send(self, chat_id: int, text: str) -> None:
        try:
            await self.telegram_client.send_message(chat_id=chat_id, text=text)
        except Exception:
            self.logger.exception(
                "Failed to send failure message", extra={"chat_id": chat_id}
            )
