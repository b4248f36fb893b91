"""Repository layer for database operations."""

from quizapp.repositories.quiz import QuizRepository
from quizapp.repositories.quiz_result import QuizResultRepository
from quizapp.repositories.user_answer import SubmittedAnswer, UserAnswerRepository

__all__ = [
    "QuizRepository",
    "QuizResultRepository",
    "SubmittedAnswer",
    "UserAnswerRepository",
]
