"""Daily adaptive quiz: static bank plus optional generated items."""
from .quiz_bank import QUIZ_BANK, QuizItem
from .selector import DEFAULT_ELO, generate_quiz, parse_elo, parse_quiz_item, pick_static, select_quiz

__all__ = [
    "QUIZ_BANK",
    "QuizItem",
    "DEFAULT_ELO",
    "generate_quiz",
    "parse_elo",
    "parse_quiz_item",
    "pick_static",
    "select_quiz",
]
