"""Pydantic schemas for quiz authoring and public quiz views."""

from datetime import datetime

from pydantic import BaseModel, Field

from quizapp.models.question import QuestionType


class OptionCreate(BaseModel):
    """An answer option of a multiple-choice question being authored."""

    text: str = Field(..., min_length=1, description="Option text")
    is_correct: bool = Field(False, description="Whether selecting it is required")
    order: int = Field(0, ge=0, description="Display position, 0 for list order")


class QuestionCreate(BaseModel):
    """A question being authored."""

    text: str = Field(..., min_length=1, description="Question text")
    type: QuestionType = Field(..., description="Question type")
    order: int = Field(0, ge=0, description="Display position, 0 for list order")
    options: list[OptionCreate] | None = Field(
        None, description="Options, required for multiple-choice questions"
    )
    correct_text: str | None = Field(
        None, description="Canonical answer, required for free-text questions"
    )


class QuizCreateRequest(BaseModel):
    """Request model for creating or replacing a quiz."""

    title: str = Field(..., min_length=1, max_length=100, description="Quiz title")
    description: str | None = Field(None, description="Optional description")
    questions: list[QuestionCreate] = Field(
        default_factory=list,
        description="Questions in display order",
    )


class OptionResponse(BaseModel):
    """Public view of an answer option, without its correctness."""

    id: int = Field(..., description="Option ID")
    text: str = Field(..., description="Option text")
    order: int = Field(..., description="Display position")

    model_config = {"from_attributes": True}


class QuestionResponse(BaseModel):
    """Public view of a question."""

    id: int = Field(..., description="Question ID")
    text: str = Field(..., description="Question text")
    type: QuestionType = Field(..., description="Question type")
    order: int = Field(..., description="Display position")
    options: list[OptionResponse] = Field(
        default_factory=list,
        description="Options of a multiple-choice question",
    )

    model_config = {"from_attributes": True}


class QuizResponse(BaseModel):
    """Public view of a quiz as shown to the people taking it."""

    id: int = Field(..., description="Quiz ID")
    title: str = Field(..., description="Quiz title")
    description: str | None = Field(None, description="Quiz description")
    access_code: str = Field(..., description="Public access code")
    created_at: datetime = Field(..., description="Creation timestamp")
    questions: list[QuestionResponse] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class AuthorOptionResponse(OptionResponse):
    """Author view of an option, including its correctness."""

    is_correct: bool = Field(..., description="Whether the option is correct")


class AuthorQuestionResponse(QuestionResponse):
    """Author view of a question, including the answer key."""

    options: list[AuthorOptionResponse] = Field(default_factory=list)
    correct_text: str | None = Field(None, description="Canonical free-text answer")


class QuizAuthorResponse(QuizResponse):
    """Author view of a quiz returned by create and update."""

    questions: list[AuthorQuestionResponse] = Field(default_factory=list)
