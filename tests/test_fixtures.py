"""
Test fixtures and helpers for Capital Quiz tests.
"""
import asyncio
import functools
from typing import Callable, List
from unittest.mock import Mock

from capital_quiz.config_manager import ConfigManager
from capital_quiz.display import QuizDisplay
from capital_quiz.image_resolver import ImageResolver
from capital_quiz.models import Difficulty, Mistake, Question


class TestFixtures:
    """Centralized test fixtures for all test modules."""

    EASY_ANSWERS = ["Paris", "Berlin", "Rome", "Madrid", "Washington D.C."]

    @staticmethod
    def create_easy_questions() -> List[Question]:
        """The EASY tier as it should be served."""
        return [
            Question("France", "Paris"),
            Question("Allemagne", "Berlin"),
            Question("Italie", "Rome"),
            Question("Espagne", "Madrid"),
            Question("États-Unis", "Washington D.C."),
        ]

    @staticmethod
    def create_easy_mistakes() -> List[Mistake]:
        return [Mistake(q.country, q.capital) for q in TestFixtures.create_easy_questions()]

    @staticmethod
    def create_mock_display() -> Mock:
        return Mock(spec=QuizDisplay)

    @staticmethod
    def create_mock_image_resolver() -> Mock:
        resolver = Mock(spec=ImageResolver)
        resolver.resolve.return_value = None
        return resolver

    @staticmethod
    def create_fast_config(countdown_seconds: int = 3, tick_interval: float = 0.001) -> ConfigManager:
        """Config whose countdown expires within milliseconds."""
        config = ConfigManager()
        config.set_countdown_seconds(countdown_seconds)
        config.set_tick_interval(tick_interval)
        return config

    @staticmethod
    def create_slow_config() -> ConfigManager:
        """Config whose countdown never expires during a test."""
        config = ConfigManager()
        config.set_countdown_seconds(ConfigManager.MAX_COUNTDOWN_SECONDS)
        config.set_tick_interval(ConfigManager.MAX_TICK_INTERVAL)
        return config


class AsyncTestHelpers:
    """Helpers for testing async code."""

    @staticmethod
    async def run_with_timeout(coro, timeout: float = 5.0):
        """Run coroutine with timeout."""
        return await asyncio.wait_for(coro, timeout=timeout)

    @staticmethod
    async def wait_for_condition(condition: Callable[[], bool], timeout: float = 5.0, interval: float = 0.005):
        """Poll until condition() is true, failing the test after timeout seconds."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not condition():
            if loop.time() > deadline:
                raise AssertionError(f"Condition not met within {timeout}s")
            await asyncio.sleep(interval)


def async_test(coro):
    """Decorator to run async test methods."""
    @functools.wraps(coro)
    def wrapper(self):
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        try:
            loop.run_until_complete(coro(self))
        finally:
            loop.close()
            asyncio.set_event_loop(None)
    return wrapper


ALL_DIFFICULTIES = list(Difficulty)
