"""QuizResult model for a finalized score."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from quizapp.models.base import Base
from quizapp.models.types import UTCDateTime


class QuizResult(Base):
    """The single finalized result of one user on one quiz."""

    __tablename__ = "quiz_results"
    __table_args__ = (
        UniqueConstraint("user_id", "quiz_id", name="uq_quiz_results_user_quiz"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    quiz_id: Mapped[int] = mapped_column(
        ForeignKey("quizzes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    total_questions: Mapped[int] = mapped_column(nullable=False)
    correct_answers: Mapped[int] = mapped_column(nullable=False)
    completed_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )

    @property
    def score_percentage(self) -> float:
        """Share of correct answers in percent, rounded to two decimals."""
        if self.total_questions <= 0:
            return 0.0
        return round(self.correct_answers / self.total_questions * 100, 2)
