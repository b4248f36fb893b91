"""Pydantic schemas for QuizApp API."""

from quizapp.schemas.answer import AnswerResponse, AnswerSubmissionRequest
from quizapp.schemas.common import (
    AckResponse,
    ErrorResponse,
    ErrorResponseWithDetails,
    HealthResponse,
)
from quizapp.schemas.quiz import QuizAuthorResponse, QuizCreateRequest, QuizResponse
from quizapp.schemas.result import QuizResultResponse
from quizapp.schemas.session import SessionResponse

__all__ = [
    "AckResponse",
    "AnswerResponse",
    "AnswerSubmissionRequest",
    "ErrorResponse",
    "ErrorResponseWithDetails",
    "HealthResponse",
    "QuizAuthorResponse",
    "QuizCreateRequest",
    "QuizResponse",
    "QuizResultResponse",
    "SessionResponse",
]
