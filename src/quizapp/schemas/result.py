"""Pydantic schemas for quiz results."""

from datetime import datetime

from pydantic import BaseModel, Field

from quizapp.models.question import QuestionType


class OptionResultResponse(BaseModel):
    """Option state shown on the results page."""

    id: int
    text: str
    is_correct: bool
    is_selected: bool

    model_config = {"from_attributes": True}


class QuestionResultResponse(BaseModel):
    """Outcome of one question."""

    id: int = Field(..., description="Question ID")
    text: str = Field(..., description="Question text")
    type: QuestionType = Field(..., description="Question type")
    is_correct: bool = Field(..., description="Whether the answer was correct")
    options: list[OptionResultResponse] | None = Field(
        None, description="Option states for multiple-choice questions"
    )
    user_answer: str | None = Field(None, description="Submitted free-text answer")
    correct_text: str | None = Field(None, description="Canonical free-text answer")

    model_config = {"from_attributes": True}


class QuizResultResponse(BaseModel):
    """Finalized result of a user on a quiz."""

    quiz_id: int = Field(..., description="Quiz ID")
    title: str = Field(..., description="Quiz title")
    total_questions: int = Field(..., ge=0)
    correct_answers: int = Field(..., ge=0)
    score_percentage: float = Field(..., ge=0.0, le=100.0)
    completed_at: datetime = Field(..., description="Finalization timestamp")
    questions: list[QuestionResultResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}
