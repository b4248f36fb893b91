"""Shared fixtures: in-memory database and a sample quiz."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from quizapp.models import AnswerOption, Base, Question, QuestionType, Quiz
from quizapp.repositories.quiz import QuizRepository

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create an async SQLite engine for testing."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Create a test session."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def sample_quiz(test_session: AsyncSession) -> Quiz:
    """Quiz with Q1 (multiple choice, A correct) and Q2 (free text, "42")."""
    return await QuizRepository.create(
        session=test_session,
        title="General knowledge",
        description="Two quick questions",
        access_code="GK2024AB",
        questions=[
            Question(
                text="Pick the capital of France",
                type=QuestionType.MULTIPLE_CHOICE,
                order=1,
                options=[
                    AnswerOption(text="Paris", is_correct=True, order=1),
                    AnswerOption(text="Lyon", is_correct=False, order=2),
                    AnswerOption(text="Nice", is_correct=False, order=3),
                ],
            ),
            Question(
                text="The answer to everything",
                type=QuestionType.FREE_TEXT,
                order=2,
                correct_text="42",
            ),
        ],
    )
