"""
Terminal front end for the Capital Quiz.
Reads player input from a text stream and forwards it to the QuizController.
"""
import asyncio
import logging
import sys
import threading
from typing import Any, Dict, Optional, TextIO, Tuple

from .config_manager import ConfigManager
from .display import ConsoleDisplay, QuizDisplay
from .models import Difficulty, Screen
from .quiz_controller import QuizController, QuizControllerError

logger = logging.getLogger(__name__)

# A line of input together with the question that was on screen when it arrived
InputItem = Optional[Tuple[str, Optional[int]]]


class QuizApp:
    """Plays the quiz over a line-based input stream."""

    QUIT_COMMAND = "/quit"
    RESTART_COMMAND = "/restart"

    def __init__(
        self,
        config_manager: ConfigManager,
        display: Optional[QuizDisplay] = None,
        input_stream: Optional[TextIO] = None
    ):
        self.config_manager = config_manager
        self.display = display or ConsoleDisplay()
        self.input_stream = input_stream or sys.stdin
        self.controller = QuizController(self.display, config_manager)

    async def handle_line(self, line: str, question_number: Optional[int] = None) -> bool:
        """
        Handle one line of player input.

        Args:
            line: Raw input line
            question_number: Question on screen when the line was typed

        Returns:
            False when the player asked to quit, True otherwise
        """
        command = line.strip().lower()
        if command == self.QUIT_COMMAND:
            return False
        if command == self.RESTART_COMMAND:
            await self.controller.restart()
            return True

        screen = self.controller.screen
        if screen == Screen.WELCOME:
            self.controller.open_difficulty_select()
        elif screen == Screen.DIFFICULTY_SELECT:
            difficulty = Difficulty.parse(line)
            if difficulty is None:
                logger.info(f"Unknown difficulty: {line.strip()!r}")
                self.display.show_difficulty_select(list(Difficulty))
            else:
                self.controller.start_quiz(difficulty)
        elif self.controller.session is None or self.controller.session.is_game_over:
            await self.controller.restart()
        else:
            await self.controller.submit_answer(line.rstrip("\r\n"), question_number)
        return True

    async def run(self) -> None:
        """Run until the input ends or the player quits."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        reader = threading.Thread(
            target=self._read_input,
            args=(loop, queue),
            name="quiz-input-reader",
            daemon=True
        )

        self.controller.show_welcome()
        reader.start()
        try:
            while True:
                item = await queue.get()
                if item is None:
                    logger.info("Input closed")
                    break
                line, question_number = item
                try:
                    keep_running = await self.handle_line(line, question_number)
                except QuizControllerError as e:
                    logger.warning(f"Input ignored: {e}")
                    continue
                if not keep_running:
                    logger.info("Player quit")
                    break
        finally:
            await self.controller.shutdown()

    def _read_input(self, loop: asyncio.AbstractEventLoop, queue: asyncio.Queue) -> None:
        try:
            for line in self.input_stream:
                loop.call_soon_threadsafe(self._enqueue, queue, line)
            loop.call_soon_threadsafe(self._enqueue, queue, None)
        except RuntimeError:
            # Event loop already closed
            pass

    def _enqueue(self, queue: asyncio.Queue, line: Optional[str]) -> None:
        if line is None:
            queue.put_nowait(None)
            return
        session = self.controller.session
        question_number = None
        if session is not None and not session.is_game_over:
            question_number = session.question_number
        queue.put_nowait((line, question_number))


async def run_app(config: Optional[Dict[str, Any]] = None) -> None:
    """Build the quiz from configuration and play it on the terminal."""
    config = config or {}
    config_manager = ConfigManager()
    for error in config_manager.load_from_dict(config.get('quiz', {})):
        logger.warning(f"Configuration value ignored: {error}")

    app = QuizApp(config_manager)
    await app.run()
