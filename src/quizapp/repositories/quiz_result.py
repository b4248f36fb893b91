"""Repository for quiz result database operations."""

from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.exceptions import ConcurrentFinalizeConflict
from quizapp.models.quiz_result import QuizResult


class QuizResultRepository:
    """Handle persistence of the single finalized result per user and quiz."""

    @staticmethod
    async def get_by_quiz_and_user(
        session: AsyncSession,
        quiz_id: int,
        user_id: str,
    ) -> QuizResult | None:
        """Retrieve the stored result of a user for a quiz."""
        result = await session.execute(
            select(QuizResult).where(
                QuizResult.quiz_id == quiz_id,
                QuizResult.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        session: AsyncSession,
        quiz_id: int,
        user_id: str,
        total_questions: int,
        correct_answers: int,
    ) -> QuizResult:
        """Insert the result row.

        Raises:
            ConcurrentFinalizeConflict: If a result for the pair already exists
        """
        quiz_result = QuizResult(
            quiz_id=quiz_id,
            user_id=user_id,
            total_questions=total_questions,
            correct_answers=correct_answers,
            completed_at=datetime.now(UTC),
        )
        try:
            async with session.begin_nested():
                session.add(quiz_result)
        except IntegrityError as exc:
            raise ConcurrentFinalizeConflict(quiz_id=quiz_id, user_id=user_id) from exc
        return quiz_result

    @staticmethod
    async def delete(session: AsyncSession, quiz_id: int, user_id: str) -> None:
        """Delete the stored result of a user for a quiz, if any."""
        await session.execute(
            delete(QuizResult)
            .where(QuizResult.quiz_id == quiz_id, QuizResult.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
