"""Service layer for business logic."""

from quizapp.services.access_code import AccessCodeGenerator
from quizapp.services.quiz_authoring import QuizAuthoringService
from quizapp.services.quiz_session import QuizSessionService
from quizapp.services.scoring import ScoringEngine

__all__ = [
    "AccessCodeGenerator",
    "QuizAuthoringService",
    "QuizSessionService",
    "ScoringEngine",
]
