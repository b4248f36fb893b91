"""Pydantic schemas for answer submission endpoints."""

from pydantic import BaseModel, Field, field_validator


class AnswerSubmissionRequest(BaseModel):
    """Request model for saving the answer to one question."""

    question_id: int = Field(..., description="Question being answered")
    selected_option_ids: list[int] | None = Field(
        None,
        description="Selected option IDs, for multiple-choice questions",
    )
    text_answer: str | None = Field(
        None,
        description="Answer text, for free-text questions",
    )


class AnswerResponse(BaseModel):
    """A user's current answer to a question."""

    question_id: int = Field(..., description="Answered question ID")
    selected_option_ids: list[int] | None = Field(None, description="Selected options")
    text_answer: str | None = Field(None, description="Answer text")

    model_config = {"from_attributes": True}

    @field_validator("selected_option_ids", mode="before")
    @classmethod
    def sort_selected_option_ids(cls, v: frozenset[int] | list[int] | None) -> list[int] | None:
        """Render the stored selection as a sorted list."""
        if v is None:
            return None
        return sorted(v)
