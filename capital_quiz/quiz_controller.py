"""
Quiz controller for the Capital Quiz.
Drives navigation between screens and runs one play-through at a time.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from .config_manager import ConfigManager
from .display import QuizDisplay
from .image_resolver import ImageResolver
from .models import AnswerOutcome, Difficulty, QuizSettings, QuizSummary, Screen
from .quiz_engine import QuizEngine
from .quiz_session import QuizSession


class QuizControllerError(Exception):
    """Base exception for quiz controller errors."""
    pass


class SessionNotFoundError(QuizControllerError):
    """Raised when an operation needs a play-through but none is running."""
    pass


class InvalidScreenStateError(QuizControllerError):
    """Raised when an action is not available on the current screen."""
    pass


class QuizController:
    """
    Root controller of the quiz.

    Owns the current screen, the session of the play-through in progress
    and the countdown driving it. A submitted answer and an expired
    countdown both resolve the current question through the session, which
    accepts only the first of them.
    """

    def __init__(
        self,
        display: QuizDisplay,
        config_manager: ConfigManager,
        image_resolver: Optional[ImageResolver] = None
    ):
        """
        Initialize the quiz controller.

        Args:
            display: Collaborator that renders the quiz
            config_manager: Source of countdown and image settings
            image_resolver: Country image lookup, built from settings if None
        """
        self.logger = logging.getLogger(__name__)
        self.display = display
        self.config_manager = config_manager

        settings = config_manager.get_quiz_settings()
        self.image_resolver = image_resolver or ImageResolver(settings.image_directory)
        self.quiz_engine = QuizEngine(settings.tick_interval)

        self._screen = Screen.WELCOME
        self._session: Optional[QuizSession] = None
        self._settings: QuizSettings = settings

        self.logger.info("QuizController initialized")

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def session(self) -> Optional[QuizSession]:
        return self._session

    def show_welcome(self) -> None:
        """Show the welcome screen; only valid before the first play-through."""
        if self._screen != Screen.WELCOME:
            raise InvalidScreenStateError(f"Cannot show welcome from {self._screen.value}")
        self.display.show_welcome()

    def open_difficulty_select(self) -> None:
        """Leave the welcome screen for difficulty selection."""
        if self._screen != Screen.WELCOME:
            raise InvalidScreenStateError(
                f"Difficulty selection opens from the welcome screen, not {self._screen.value}"
            )
        self._set_screen(Screen.DIFFICULTY_SELECT)
        self.display.show_difficulty_select(list(Difficulty))

    def start_quiz(self, difficulty: Difficulty) -> QuizSession:
        """
        Start a new play-through and present its first question.

        Must be called from a running event loop: the countdown is an
        asyncio task.

        Args:
            difficulty: Difficulty tier to play

        Returns:
            The new session

        Raises:
            InvalidScreenStateError: If a play-through is already on screen
        """
        if self._screen == Screen.PLAYING:
            raise InvalidScreenStateError("A quiz is already running; restart it first")

        self._settings = self.config_manager.get_quiz_settings()
        self.quiz_engine.tick_interval = self._settings.tick_interval

        self._session = QuizSession(difficulty)
        self._set_screen(Screen.PLAYING)
        self.logger.info(f"Started {difficulty.value} quiz")
        self._present_current_question()
        return self._session

    async def submit_answer(self, text: str, question_number: Optional[int] = None) -> Optional[AnswerOutcome]:
        """
        Submit an answer for the current question.

        Args:
            text: Answer as typed; any string is accepted
            question_number: 1-based question the answer was typed for. When
                given and no longer current, the answer is stale and ignored.

        Returns:
            The outcome, or None if the answer was stale or the question had
            already timed out

        Raises:
            InvalidScreenStateError: If no question is on screen
        """
        session = self._require_running_session()

        if question_number is not None and question_number != session.question_number:
            self.logger.warning(
                f"Ignoring stale answer for question {question_number}, "
                f"question {session.question_number} is current",
                extra={
                    'event_type': 'stale_answer_ignored',
                    'submitted_for': question_number,
                    'current_question': session.question_number,
                    'timestamp': time.time()
                }
            )
            return None

        # Resolve before any await so a pending timeout cannot also claim this question
        outcome = session.resolve_answer(text)
        if outcome is None:
            return None

        await self.quiz_engine.cancel_timer()
        self.display.show_feedback(outcome, session.score)
        self._advance(session)
        return outcome

    async def restart(self) -> None:
        """Discard the current play-through and return to difficulty selection."""
        await self.quiz_engine.cancel_timer()
        if self._session is not None:
            self.logger.info(
                f"Discarding {self._session.difficulty.value} quiz at question "
                f"{self._session.question_number}/{self._session.total_questions}"
            )
        self._session = None
        self._set_screen(Screen.DIFFICULTY_SELECT)
        self.display.show_difficulty_select(list(Difficulty))

    async def shutdown(self) -> None:
        """Stop any countdown and drop the current play-through."""
        timer_cancelled = await self.quiz_engine.cancel_timer()
        self._session = None
        self.logger.info(f"QuizController shut down, timer cancelled: {timer_cancelled}")

    def get_summary(self) -> QuizSummary:
        """
        Get the results of the current play-through.

        Raises:
            SessionNotFoundError: If no play-through has been started
        """
        if self._session is None:
            raise SessionNotFoundError("No quiz has been started")
        return self._session.summary()

    def get_session_progress(self) -> Optional[Dict[str, Any]]:
        """
        Get progress information for the current play-through.

        Returns:
            Dictionary with progress info, None if no play-through exists
        """
        session = self._session
        if session is None:
            return None

        return {
            'difficulty': session.difficulty.value,
            'current_question': session.question_number,
            'total_questions': session.total_questions,
            'score': session.score,
            'mistakes': len(session.mistakes),
            'is_game_over': session.is_game_over,
            'timer': self.quiz_engine.get_timer_status()
        }

    def validate_session_state(self) -> Dict[str, Any]:
        """
        Validate the play-through state and return diagnostic information.

        Returns:
            Dictionary with validation results and session state info
        """
        session = self._session
        issues: List[str] = []

        if self._screen == Screen.PLAYING and session is None:
            issues.append("Playing screen shown without a session")
        elif self._screen != Screen.PLAYING and session is not None:
            issues.append(f"Session kept on {self._screen.value} screen")

        if session is not None:
            if not 0 <= session.current_index < session.total_questions:
                issues.append("Current question index out of range")
            if session.score > session.resolved_count:
                issues.append("Score exceeds resolved questions")
            if session.score + len(session.mistakes) != session.resolved_count:
                issues.append("Score and mistakes do not add up to resolved questions")

        return {
            'valid': len(issues) == 0,
            'screen': self._screen.value,
            'issues': issues,
            'session_info': self.get_session_progress()
        }

    def _require_running_session(self) -> QuizSession:
        if self._screen != Screen.PLAYING or self._session is None:
            raise InvalidScreenStateError(f"No question on screen ({self._screen.value})")
        if self._session.is_game_over:
            raise InvalidScreenStateError("The quiz is over")
        return self._session

    def _set_screen(self, screen: Screen) -> None:
        if screen != self._screen:
            self.logger.debug(f"Screen {self._screen.value} -> {screen.value}")
        self._screen = screen

    def _present_current_question(self) -> None:
        session = self._session
        question = session.current_question()
        question_index = session.current_index

        image_path = self.image_resolver.resolve(question.country)
        self.display.show_question(
            question,
            session.question_number,
            session.total_questions,
            image_path
        )

        async def on_tick(remaining: int) -> None:
            if not self._is_current(session, question_index):
                return
            # The countdown must keep running even if the display fails
            try:
                self.display.show_remaining(remaining)
            except Exception as e:
                self.logger.error(
                    f"Failed to show remaining time for question {question_index + 1}: {e}",
                    exc_info=True,
                    extra={
                        'event_type': 'display_error',
                        'operation': 'show_remaining',
                        'timestamp': time.time()
                    }
                )

        async def on_expire() -> None:
            await self._handle_timeout(session, question_index)

        self.quiz_engine.start_question_timer(
            f"question {session.question_number}/{session.total_questions}",
            self._settings.countdown_seconds,
            on_tick,
            on_expire
        )

    async def _handle_timeout(self, session: QuizSession, question_index: int) -> None:
        if not self._is_current(session, question_index):
            self.logger.debug(f"Ignoring expired countdown for question {question_index + 1}")
            return

        outcome = session.resolve_timeout()
        if outcome is None:
            # The player answered first
            return

        self.logger.info(
            f"Question {session.question_number} timed out",
            extra={
                'event_type': 'question_timed_out',
                'country': outcome.question.country,
                'question_number': session.question_number,
                'timestamp': time.time()
            }
        )
        self.display.show_time_up(outcome.question)
        self._advance(session)

    def _is_current(self, session: QuizSession, question_index: int) -> bool:
        return (
            self._session is session
            and not session.is_game_over
            and session.current_index == question_index
        )

    def _advance(self, session: QuizSession) -> None:
        if session.advance():
            self._present_current_question()
        else:
            self.display.show_summary(session.summary())
