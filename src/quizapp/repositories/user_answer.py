"""Repository for user answer database operations."""

from collections.abc import Set
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.models.question import QuestionType
from quizapp.models.user_answer import AnswerCorrectness, UserAnswer


@dataclass(frozen=True)
class SubmittedAnswer:
    """A user's current answer to a question, detached from storage."""

    question_id: int
    selected_option_ids: frozenset[int] | None = None
    text_answer: str | None = None


class UserAnswerRepository:
    """Handle user answer persistence with one row per user, quiz and question."""

    @staticmethod
    async def get(
        session: AsyncSession,
        quiz_id: int,
        question_id: int,
        user_id: str,
    ) -> UserAnswer | None:
        """Retrieve the stored answer row for a user and question."""
        result = await session.execute(
            select(UserAnswer).where(
                UserAnswer.quiz_id == quiz_id,
                UserAnswer.question_id == question_id,
                UserAnswer.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert(
        session: AsyncSession,
        quiz_id: int,
        question_id: int,
        user_id: str,
        question_type: QuestionType,
        selected_option_ids: Set[int] | None = None,
        text_answer: str | None = None,
    ) -> UserAnswer:
        """Insert the answer or overwrite the existing one.

        Overwriting resets correctness to UNKNOWN and clears whichever
        representation the question type does not use. When a concurrent
        request inserts the same row first, that row is overwritten instead.
        """
        now = datetime.now(UTC)
        if question_type == QuestionType.MULTIPLE_CHOICE:
            selection = frozenset(selected_option_ids or ())
            text = None
        else:
            selection = None
            text = text_answer

        answer = await UserAnswerRepository.get(session, quiz_id, question_id, user_id)
        if answer is None:
            answer = UserAnswer(
                user_id=user_id,
                quiz_id=quiz_id,
                question_id=question_id,
                selected_option_ids=selection,
                text_answer=text,
                correctness=AnswerCorrectness.UNKNOWN,
                created_at=now,
                updated_at=now,
            )
            try:
                async with session.begin_nested():
                    session.add(answer)
                return answer
            except IntegrityError:
                answer = await UserAnswerRepository.get(
                    session, quiz_id, question_id, user_id
                )
                if answer is None:
                    raise

        answer.selected_option_ids = selection
        answer.text_answer = text
        answer.correctness = AnswerCorrectness.UNKNOWN
        answer.updated_at = now
        await session.flush()
        return answer

    @staticmethod
    async def get_by_quiz_and_user(
        session: AsyncSession,
        quiz_id: int,
        user_id: str,
    ) -> list[UserAnswer]:
        """Retrieve all stored answer rows of a user for a quiz."""
        result = await session.execute(
            select(UserAnswer)
            .where(UserAnswer.quiz_id == quiz_id, UserAnswer.user_id == user_id)
            .order_by(UserAnswer.question_id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_by_quiz_and_user(
        session: AsyncSession,
        quiz_id: int,
        user_id: str,
    ) -> list[SubmittedAnswer]:
        """Return a user's answers for a quiz as plain values."""
        rows = await UserAnswerRepository.get_by_quiz_and_user(session, quiz_id, user_id)
        return [
            SubmittedAnswer(
                question_id=row.question_id,
                selected_option_ids=row.selected_option_ids,
                text_answer=row.text_answer,
            )
            for row in rows
        ]

    @staticmethod
    async def annotate(
        session: AsyncSession,
        quiz_id: int,
        question_id: int,
        user_id: str,
        correctness: AnswerCorrectness,
    ) -> None:
        """Record the scoring outcome on an answer row, if the row exists."""
        await session.execute(
            update(UserAnswer)
            .where(
                UserAnswer.quiz_id == quiz_id,
                UserAnswer.question_id == question_id,
                UserAnswer.user_id == user_id,
            )
            .values(correctness=correctness)
            .execution_options(synchronize_session="fetch")
        )

    @staticmethod
    async def clear(session: AsyncSession, quiz_id: int, user_id: str) -> int:
        """Delete every answer of a user for a quiz and return how many were removed."""
        result = await session.execute(
            delete(UserAnswer)
            .where(UserAnswer.quiz_id == quiz_id, UserAnswer.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0
