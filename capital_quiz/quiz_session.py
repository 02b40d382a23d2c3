"""
Quiz session state for a single play-through.
Tracks the current question, score, and mistakes for one difficulty tier.
"""
import logging
import time
from typing import List, Optional

from .models import AnswerOutcome, Difficulty, Mistake, Question, QuizSummary
from .question_bank import questions_for


logger = logging.getLogger(__name__)


class QuizSessionError(Exception):
    """Base exception for quiz session errors."""
    pass


class OutOfRangeError(QuizSessionError, IndexError):
    """Raised when the current question is requested after the quiz has ended."""
    pass


def answer_matches(candidate: str, capital: str) -> bool:
    """Compare an answer to a capital, ignoring surrounding whitespace and case."""
    return candidate.strip().lower() == capital.lower()


class QuizSession:
    """
    Progress of one play-through.

    The question list is fixed when the session is created. The session
    moves from in-progress to finished exactly once, through advance(),
    and a finished session is never reused: a new play-through gets a new
    instance.
    """

    def __init__(self, difficulty: Difficulty):
        """
        Initialize a session for a difficulty tier.

        Args:
            difficulty: Tier whose questions this session plays through
        """
        self.difficulty = difficulty
        self.questions: List[Question] = questions_for(difficulty)
        self.current_index = 0
        self.score = 0
        self.mistakes: List[Mistake] = []
        self.is_game_over = False

        # Per-question resolution state, reset on every advance
        self._resolved = False
        self._resolved_count = 0

        logger.info(
            f"Quiz session created: difficulty={difficulty.value}, questions={len(self.questions)}",
            extra={
                'event_type': 'session_created',
                'difficulty': difficulty.value,
                'question_count': len(self.questions),
                'timestamp': time.time()
            }
        )

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def question_number(self) -> int:
        """1-based number of the current question."""
        return self.current_index + 1

    @property
    def is_resolved(self) -> bool:
        """Whether the current question has already been answered or timed out."""
        return self._resolved

    @property
    def resolved_count(self) -> int:
        return self._resolved_count

    def current_question(self) -> Question:
        """
        Get the question being played.

        Raises:
            OutOfRangeError: If the session has already finished
        """
        if self.is_game_over:
            raise OutOfRangeError(
                f"No current question: the {self.difficulty.value} quiz is over"
            )
        return self.questions[self.current_index]

    def check_answer(self, candidate: str) -> bool:
        """
        Check an answer against the current capital.

        A correct answer scores one point and resolves the question, unless
        the question was already scored or recorded as missed. A wrong
        answer leaves the question open so the caller can record the
        mistake.

        Args:
            candidate: Free-text answer as typed by the user

        Returns:
            True if the answer matches the current capital
        """
        question = self.current_question()
        is_correct = answer_matches(candidate, question.capital)
        if is_correct:
            if self._resolved:
                self._log_already_resolved("check_answer")
            else:
                self.score += 1
                self._settle()
        return is_correct

    def record_mistake(self) -> bool:
        """
        Record the current question as missed.

        Returns:
            False if the question was already scored or missed
        """
        question = self.current_question()
        if self._resolved:
            self._log_already_resolved("record_mistake")
            return False
        self.mistakes.append(Mistake(question.country, question.capital))
        self._settle()
        logger.debug(f"Mistake recorded for {question.country}")
        return True

    def resolve_answer(self, candidate: str) -> Optional[AnswerOutcome]:
        """
        Resolve the current question with a submitted answer.

        Returns:
            The outcome, or None if the question was already resolved
        """
        question = self.current_question()
        if self._resolved:
            self._log_already_resolved("answer")
            return None
        is_correct = self.check_answer(candidate)
        if not is_correct:
            self.record_mistake()
        return AnswerOutcome(question=question, answer=candidate, is_correct=is_correct)

    def resolve_timeout(self) -> Optional[AnswerOutcome]:
        """
        Resolve the current question as a miss because time ran out.

        Returns:
            The outcome, or None if the question was already scored or missed
        """
        question = self.current_question()
        if not self.record_mistake():
            return None
        return AnswerOutcome(question=question, answer=None, is_correct=False, timed_out=True)

    def _settle(self) -> None:
        self._resolved = True
        self._resolved_count += 1

    def _log_already_resolved(self, source: str) -> None:
        logger.warning(
            f"Question {self.question_number} already resolved, ignoring {source}",
            extra={
                'event_type': 'question_already_resolved',
                'question_number': self.question_number,
                'source': source,
                'timestamp': time.time()
            }
        )

    def advance(self) -> bool:
        """
        Move to the next question.

        Returns:
            True if another question is available, False once the quiz is over
        """
        if self.is_game_over:
            return False

        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            self._resolved = False
            logger.debug(f"Advanced to question {self.question_number}/{self.total_questions}")
            return True

        self.is_game_over = True
        logger.info(
            f"Quiz session finished: score {self.score}/{self.total_questions}",
            extra={
                'event_type': 'session_finished',
                'difficulty': self.difficulty.value,
                'score': self.score,
                'mistake_count': len(self.mistakes),
                'timestamp': time.time()
            }
        )
        return False

    def summary(self) -> QuizSummary:
        """Snapshot of the score and mistakes so far."""
        return QuizSummary(
            difficulty=self.difficulty,
            score=self.score,
            total=self.total_questions,
            mistakes=list(self.mistakes)
        )
