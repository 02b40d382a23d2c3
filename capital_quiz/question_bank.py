"""
Fixed question sets for each difficulty tier.
"""
from typing import Dict, List

from .models import Difficulty, Question


QUESTION_BANK: Dict[Difficulty, List[Question]] = {
    Difficulty.EASY: [
        Question("France", "Paris"),
        Question("Allemagne", "Berlin"),
        Question("Italie", "Rome"),
        Question("Espagne", "Madrid"),
        Question("États-Unis", "Washington D.C."),
    ],
    Difficulty.MEDIUM: [
        Question("Brésil", "Brasília"),
        Question("Canada", "Ottawa"),
        Question("Australie", "Canberra"),
        Question("Inde", "New Delhi"),
        Question("Japon", "Tokyo"),
    ],
    Difficulty.HARD: [
        Question("Mongolie", "Oulan-Bator"),
        Question("Bhoutan", "Thimphou"),
        Question("Malawi", "Lilongwe"),
        Question("Fidji", "Suva"),
        Question("Suriname", "Paramaribo"),
    ],
}


def questions_for(difficulty: Difficulty) -> List[Question]:
    """
    Get the ordered questions for a difficulty tier.

    Args:
        difficulty: Difficulty tier to play

    Returns:
        New list holding the tier's questions in their fixed order
    """
    return list(QUESTION_BANK[difficulty])
