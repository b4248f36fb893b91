"""Repository for quiz database operations."""

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.models.question import AnswerOption, Question
from quizapp.models.quiz import Quiz
from quizapp.models.user_answer import UserAnswer


class QuizRepository:
    """Read quizzes with their ordered questions and options, and persist authored ones."""

    @staticmethod
    async def get_by_access_code(session: AsyncSession, access_code: str) -> Quiz | None:
        """Retrieve a quiz with its questions and options by access code."""
        result = await session.execute(
            select(Quiz).where(Quiz.access_code == access_code)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_id(
        session: AsyncSession,
        quiz_id: int,
        refresh: bool = False,
    ) -> Quiz | None:
        """Retrieve a quiz by its ID, optionally reloading an already loaded instance."""
        statement = select(Quiz).where(Quiz.id == quiz_id)
        if refresh:
            statement = statement.execution_options(populate_existing=True)
        result = await session.execute(statement)
        return result.scalar_one_or_none()

    @staticmethod
    async def access_code_exists(session: AsyncSession, access_code: str) -> bool:
        """Check whether any quiz already uses the access code."""
        result = await session.execute(
            select(exists().where(Quiz.access_code == access_code))
        )
        return bool(result.scalar())

    @staticmethod
    async def create(
        session: AsyncSession,
        title: str,
        description: str | None,
        access_code: str,
        questions: list[Question],
    ) -> Quiz:
        """Create a quiz together with its questions and options."""
        quiz = Quiz(
            title=title,
            description=description,
            access_code=access_code,
            questions=questions,
        )
        session.add(quiz)
        await session.flush()
        return await QuizRepository.get_by_id(session, quiz.id, refresh=True)

    @staticmethod
    async def replace_content(
        session: AsyncSession,
        quiz: Quiz,
        title: str,
        description: str | None,
        questions: list[Question],
    ) -> Quiz:
        """Overwrite title, description and the full question list of a quiz.

        Answers given to the old questions are deleted with them; stored
        results are kept.
        """
        question_ids = select(Question.id).where(Question.quiz_id == quiz.id)
        await session.execute(
            delete(UserAnswer).where(UserAnswer.question_id.in_(question_ids))
        )
        await session.execute(
            delete(AnswerOption).where(AnswerOption.question_id.in_(question_ids))
        )
        await session.execute(delete(Question).where(Question.quiz_id == quiz.id))

        quiz.title = title
        quiz.description = description
        for question in questions:
            question.quiz_id = quiz.id
        session.add_all(questions)
        await session.flush()
        return await QuizRepository.get_by_id(session, quiz.id, refresh=True)
