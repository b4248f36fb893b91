"""Question and answer option models."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizapp.models.base import Base

if TYPE_CHECKING:
    from quizapp.models.quiz import Quiz


class QuestionType(StrEnum):
    """Kind of question, which decides how it is answered and scored."""

    MULTIPLE_CHOICE = "multiple_choice"
    FREE_TEXT = "free_text"


class Question(Base):
    """A single question belonging to a quiz."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[QuestionType] = mapped_column(Enum(QuestionType), nullable=False)
    order: Mapped[int] = mapped_column(nullable=False, default=0)
    # Canonical answer for free-text questions
    correct_text: Mapped[str | None] = mapped_column(Text)

    # Relationships
    quiz: Mapped[Quiz] = relationship("Quiz", back_populates="questions")
    options: Mapped[list[AnswerOption]] = relationship(
        "AnswerOption",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by=lambda: (AnswerOption.order, AnswerOption.id),
        lazy="selectin",
    )

    @property
    def correct_option_ids(self) -> frozenset[int]:
        """Ids of the options marked correct."""
        return frozenset(option.id for option in self.options if option.is_correct)


class AnswerOption(Base):
    """A selectable option of a multiple-choice question."""

    __tablename__ = "answer_options"

    id: Mapped[int] = mapped_column(primary_key=True)
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), index=True, nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    order: Mapped[int] = mapped_column(nullable=False, default=0)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    question: Mapped[Question] = relationship("Question", back_populates="options")
