"""Tests for chat handlers and background dispatch."""

import asyncio

from recipe_carbs.services.analysis import RecipeAnalysisService
from recipe_carbs.services.commands import (
    ACKNOWLEDGEMENT_MESSAGE,
    GREETING_MESSAGE,
    TOO_SHORT_MESSAGE,
    RecipeMessageHandler,
    StartCommandHandler,
)
from recipe_carbs.services.dispatch import FAILURE_MESSAGE, AnalysisDispatcher
from tests.conftest import FakeNutritionixClient, FakeTelegramClient


def _handler(
    analysis_service: RecipeAnalysisService, telegram_client: FakeTelegramClient
) -> RecipeMessageHandler:
    dispatcher = AnalysisDispatcher(
        analysis_service=analysis_service, telegram_client=telegram_client
    )
    return RecipeMessageHandler(telegram_client=telegram_client, dispatcher=dispatcher)


def test_start_sends_greeting(telegram_client: FakeTelegramClient) -> None:
    asyncio.run(StartCommandHandler(telegram_client).handle(chat_id=5))

    assert telegram_client.messages == [(5, GREETING_MESSAGE)]


def test_short_text_is_rejected(
    analysis_service: RecipeAnalysisService, telegram_client: FakeTelegramClient
) -> None:
    handler = _handler(analysis_service, telegram_client)

    scheduled = asyncio.run(handler.handle(chat_id=1, text="eggs"))

    assert scheduled is False
    assert telegram_client.messages == [(1, TOO_SHORT_MESSAGE)]


def test_recipe_is_acknowledged_then_reported(
    analysis_service: RecipeAnalysisService, telegram_client: FakeTelegramClient
) -> None:
    handler = _handler(analysis_service, telegram_client)

    async def scenario() -> bool:
        scheduled = await handler.handle(chat_id=7, text="2 eggs and 100g flour")
        await handler.dispatcher.aclose()
        return scheduled

    assert asyncio.run(scenario()) is True
    assert telegram_client.messages[0] == (7, ACKNOWLEDGEMENT_MESSAGE)
    chat_id, report = telegram_client.messages[1]
    assert chat_id == 7
    assert "Total carbs: 87\\.00" in report
    assert telegram_client.parse_modes == [None, "MarkdownV2"]
    assert handler.dispatcher.pending == 0


def test_failed_analysis_sends_apology(
    analysis_service: RecipeAnalysisService,
    telegram_client: FakeTelegramClient,
    nutritionix_client: FakeNutritionixClient,
) -> None:
    nutritionix_client.payload = {"foods": []}
    handler = _handler(analysis_service, telegram_client)

    async def scenario() -> None:
        await handler.handle(chat_id=9, text="2 eggs and 100g flour")
        await handler.dispatcher.aclose()

    asyncio.run(scenario())

    assert telegram_client.messages[-1] == (9, FAILURE_MESSAGE)


def test_dispatch_task_never_raises(
    analysis_service: RecipeAnalysisService, telegram_client: FakeTelegramClient
) -> None:
    dispatcher = AnalysisDispatcher(
        analysis_service=analysis_service, telegram_client=telegram_client
    )
    analysis_service.nutrition_lookup.nutritionix_client = FakeNutritionixClient(
        error=RuntimeError("unexpected")
    )

    async def scenario() -> None:
        task = dispatcher.submit(3, "2 eggs and 100g flour")
        await task

    asyncio.run(scenario())

    assert telegram_client.messages == [(3, FAILURE_MESSAGE)]


class _MarkdownRejectingTelegramClient(FakeTelegramClient):
    """Telegram client that fails on MarkdownV2 messages."""

    async def send_message(
        self, chat_id: int, text: str, parse_mode: str | None = None
    ) -> None:
        if parse_mode == "MarkdownV2":
            raise RuntimeError("400 Bad Request: can't parse entities")
        await super().send_message(chat_id, text, parse_mode)


def test_report_delivery_failure_sends_apology(
    analysis_service: RecipeAnalysisService,
) -> None:
    telegram_client = _MarkdownRejectingTelegramClient()
    dispatcher = AnalysisDispatcher(
        analysis_service=analysis_service, telegram_client=telegram_client
    )

    async def scenario() -> None:
        await dispatcher.submit(1, "2 eggs and 100g flour")

    asyncio.run(scenario())

    assert telegram_client.messages == [(1, FAILURE_MESSAGE)]
    assert telegram_client.parse_modes == [None]
