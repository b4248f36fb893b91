"""UserAnswer model for a user's in-progress answer to one question."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from quizapp.models.base import Base
from quizapp.models.types import OptionIdSet, UTCDateTime


class AnswerCorrectness(StrEnum):
    """Scoring state of a stored answer."""

    UNKNOWN = "unknown"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class UserAnswer(Base):
    """The current answer of one user to one question of a quiz."""

    __tablename__ = "user_answers"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "quiz_id", "question_id", name="uq_user_answers_user_quiz_question"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id", ondelete="CASCADE"), nullable=False
    )
    selected_option_ids: Mapped[frozenset[int] | None] = mapped_column(OptionIdSet)
    text_answer: Mapped[str | None] = mapped_column(Text)
    correctness: Mapped[AnswerCorrectness] = mapped_column(
        Enum(AnswerCorrectness), default=AnswerCorrectness.UNKNOWN, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )
