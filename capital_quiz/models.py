"""
Core data models for the Capital Quiz.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional

# Tier names as shown on the French console
FRENCH_DIFFICULTY_NAMES = {"facile": "easy", "moyen": "medium", "difficile": "hard"}


class Difficulty(Enum):
    """Difficulty tier, each backed by a fixed list of questions."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, text: str) -> Optional["Difficulty"]:
        """
        Parse a difficulty from user input.

        Accepts the tier name (English or French) in any case or its 1-based position
        ("1" for EASY, "2" for MEDIUM, "3" for HARD).

        Returns:
            The matching Difficulty, or None if the text names no tier
        """
        value = text.strip().lower()
        value = FRENCH_DIFFICULTY_NAMES.get(value, value)
        members = list(cls)
        if value.isdigit() and 1 <= int(value) <= len(members):
            return members[int(value) - 1]
        for member in members:
            if member.value == value:
                return member
        return None


class Screen(Enum):
    """Navigation states of the quiz application."""
    WELCOME = "welcome"
    DIFFICULTY_SELECT = "difficulty_select"
    PLAYING = "playing"


@dataclass(frozen=True)
class Question:
    """A country and the capital expected as its answer."""
    country: str
    capital: str


class Mistake(NamedTuple):
    """A missed question, recorded with its expected capital."""
    country: str
    capital: str


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of resolving a single question."""
    question: Question
    answer: Optional[str]
    is_correct: bool
    timed_out: bool = False


@dataclass(frozen=True)
class QuizSummary:
    """Final results of a play-through."""
    difficulty: Difficulty
    score: int
    total: int
    mistakes: List[Mistake] = field(default_factory=list)


@dataclass
class QuizSettings:
    """Runtime settings for a play-through."""
    countdown_seconds: int = 10
    tick_interval: float = 1.0
    image_directory: str = "./images/"
