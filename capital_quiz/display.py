"""
Display collaborators for the Capital Quiz.
The controller talks to a QuizDisplay; ConsoleDisplay renders to a terminal.
"""
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .models import AnswerOutcome, Difficulty, Question, QuizSummary


class QuizDisplay(ABC):
    """Everything the quiz needs to show to the player."""

    @abstractmethod
    def show_welcome(self) -> None:
        """Show the welcome screen."""

    @abstractmethod
    def show_difficulty_select(self, difficulties: Iterable[Difficulty]) -> None:
        """Show the difficulty choices."""

    @abstractmethod
    def show_question(
        self,
        question: Question,
        number: int,
        total: int,
        image_path: Optional[Path]
    ) -> None:
        """Show a new question; image_path is None when no picture exists."""

    @abstractmethod
    def show_remaining(self, seconds: int) -> None:
        """Show the countdown value for the current question."""

    @abstractmethod
    def show_feedback(self, outcome: AnswerOutcome, score: int) -> None:
        """Show whether a submitted answer was right, with the running score."""

    @abstractmethod
    def show_time_up(self, question: Question) -> None:
        """Show that the current question timed out."""

    @abstractmethod
    def show_summary(self, summary: QuizSummary) -> None:
        """Show the end-of-quiz results."""


class ConsoleDisplay(QuizDisplay):
    """Plain-text display for a terminal."""

    # Countdown values worth printing; the rest would flood the prompt
    ANNOUNCED_SECONDS = (10, 5, 3, 2, 1)

    DIFFICULTY_LABELS = {
        Difficulty.EASY: "🌟 Facile",
        Difficulty.MEDIUM: "⭐ Moyen",
        Difficulty.HARD: "🔥 Difficile",
    }

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stdout

    def _write(self, text: str = "") -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def show_welcome(self) -> None:
        self._write("🌍 Bienvenue au Quiz des Capitales du Monde 🌍")
        self._write("Testez vos connaissances en géographie tout en vous amusant !")
        self._write("Appuyez sur Entrée pour commencer, /quit pour quitter.")

    def show_difficulty_select(self, difficulties: Iterable[Difficulty]) -> None:
        self._write()
        self._write("👋 Choisissez une difficulté :")
        for position, difficulty in enumerate(difficulties, start=1):
            self._write(f"  {position}. {self.DIFFICULTY_LABELS[difficulty]}")

    def show_question(
        self,
        question: Question,
        number: int,
        total: int,
        image_path: Optional[Path]
    ) -> None:
        self._write()
        self._write(f"🎯 Question {number}/{total}")
        if image_path is not None:
            self._write(f"🖼️  {image_path}")
        else:
            self._write("🖼️  [image non disponible]")
        self._write(f"🌍 Quelle est la capitale de {question.country} ?")

    def show_remaining(self, seconds: int) -> None:
        if seconds in self.ANNOUNCED_SECONDS:
            self._write(f"⏳ Temps restant : {seconds} seconde{'s' if seconds != 1 else ''}")

    def show_feedback(self, outcome: AnswerOutcome, score: int) -> None:
        if outcome.is_correct:
            self._write(f"✅ Bonne réponse ! Score : {score}")
        else:
            self._write(f"❌ Réponse incorrecte, c'était {outcome.question.capital}. Score : {score}")

    def show_time_up(self, question: Question) -> None:
        self._write(f"⏱️ Temps écoulé ! La capitale de {question.country} est {question.capital}.")

    def show_summary(self, summary: QuizSummary) -> None:
        self._write()
        self._write("🎉 Jeu terminé ! 🎉")
        self._write(f"Score : {summary.score} / {summary.total}")
        if not summary.mistakes:
            self._write("🎉 Toutes vos réponses étaient correctes ! 🎉")
        else:
            self._write("🔴 Réponses incorrectes ou non répondues :")
            for mistake in summary.mistakes:
                self._write(f"  • {mistake.country} : {mistake.capital}")
        self._write("Appuyez sur Entrée pour rejouer, /quit pour quitter.")
