"""Quiz model for published quizzes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from quizapp.models.base import Base
from quizapp.models.types import UTCDateTime

if TYPE_CHECKING:
    from quizapp.models.question import Question


class Quiz(Base):
    """A quiz published under a unique access code."""

    __tablename__ = "quizzes"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    access_code: Mapped[str] = mapped_column(
        String(32), unique=True, index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime, server_default=func.now(), nullable=False
    )

    # Relationships
    questions: Mapped[list[Question]] = relationship(
        "Question",
        back_populates="quiz",
        cascade="all, delete-orphan",
        order_by="[Question.order, Question.id]",
        lazy="selectin",
    )
