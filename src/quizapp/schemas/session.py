"""Pydantic schemas for the quiz-taking session view."""

from datetime import datetime

from pydantic import BaseModel, Field

from quizapp.schemas.answer import AnswerResponse
from quizapp.schemas.result import QuizResultResponse


class SessionResponse(BaseModel):
    """A user's progress on a quiz, derived from stored answers and result."""

    user_id: str
    access_code: str
    started_at: datetime
    last_updated_at: datetime
    is_completed: bool = Field(..., description="Whether a result has been stored")
    answers: list[AnswerResponse] = Field(default_factory=list)
    results: QuizResultResponse | None = None

    model_config = {"from_attributes": True}
