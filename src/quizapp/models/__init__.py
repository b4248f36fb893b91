"""Database models package."""

from quizapp.models.base import Base
from quizapp.models.question import AnswerOption, Question, QuestionType
from quizapp.models.quiz import Quiz
from quizapp.models.quiz_result import QuizResult
from quizapp.models.user_answer import AnswerCorrectness, UserAnswer

__all__ = [
    "AnswerCorrectness",
    "AnswerOption",
    "Base",
    "Question",
    "QuestionType",
    "Quiz",
    "QuizResult",
    "UserAnswer",
]
