"""Quiz-taking session service.

A session is the derived state of one user on one quiz: the user's answer
rows plus, once finalized, the single result row. Nothing else is stored.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.exceptions import (
    ConcurrentFinalizeConflict,
    DomainValidationError,
    NotFoundError,
)
from quizapp.models.question import Question, QuestionType
from quizapp.models.quiz import Quiz
from quizapp.models.quiz_result import QuizResult
from quizapp.models.user_answer import AnswerCorrectness, UserAnswer
from quizapp.repositories.quiz import QuizRepository
from quizapp.repositories.quiz_result import QuizResultRepository
from quizapp.repositories.user_answer import SubmittedAnswer, UserAnswerRepository
from quizapp.services.scoring import QuestionResult, ScoringEngine, build_question_result


@dataclass(frozen=True)
class QuizOutcome:
    """Finalized result of a user on a quiz, with per-question detail."""

    quiz_id: int
    title: str
    total_questions: int
    correct_answers: int
    score_percentage: float
    completed_at: datetime
    questions: list[QuestionResult] = field(default_factory=list)


@dataclass(frozen=True)
class SessionSnapshot:
    """Current view of a user's progress on a quiz."""

    user_id: str
    access_code: str
    started_at: datetime
    last_updated_at: datetime
    is_completed: bool
    answers: list[SubmittedAnswer] = field(default_factory=list)
    results: QuizOutcome | None = None


def _require_user_id(user_id: str | None) -> str:
    if user_id is None or not user_id.strip():
        raise DomainValidationError("A user_id is required", field="user_id")
    return user_id


def _to_submitted(row: UserAnswer) -> SubmittedAnswer:
    return SubmittedAnswer(
        question_id=row.question_id,
        selected_option_ids=row.selected_option_ids,
        text_answer=row.text_answer,
    )


class QuizSessionService:
    """Serve answer saving, listing, finalization and clearing for a user on a quiz."""

    def __init__(self, scoring_engine: ScoringEngine) -> None:
        self.scoring_engine = scoring_engine

    async def get_quiz(self, session: AsyncSession, access_code: str) -> Quiz:
        """Resolve a quiz by access code or raise NotFoundError."""
        quiz = await QuizRepository.get_by_access_code(session, access_code)
        if quiz is None:
            raise NotFoundError(resource="Quiz", resource_id=access_code)
        return quiz

    async def get_session_snapshot(
        self,
        session: AsyncSession,
        access_code: str,
        user_id: str,
    ) -> SessionSnapshot:
        """Compose the user's answers and, if finalized, the stored result."""
        user_id = _require_user_id(user_id)
        quiz = await self.get_quiz(session, access_code)

        rows = await UserAnswerRepository.get_by_quiz_and_user(session, quiz.id, user_id)
        stored = await QuizResultRepository.get_by_quiz_and_user(session, quiz.id, user_id)

        now = datetime.now(UTC)
        return SessionSnapshot(
            user_id=user_id,
            access_code=quiz.access_code,
            started_at=min((row.created_at for row in rows), default=now),
            last_updated_at=max((row.updated_at for row in rows), default=now),
            is_completed=stored is not None,
            answers=[_to_submitted(row) for row in rows],
            results=self._restore_outcome(quiz, stored, rows) if stored else None,
        )

    async def save_answer(
        self,
        session: AsyncSession,
        access_code: str,
        user_id: str,
        question_id: int,
        selected_option_ids: Sequence[int] | None = None,
        text_answer: str | None = None,
    ) -> UserAnswer:
        """Store or overwrite the user's answer to one question.

        Saving after finalization is allowed and leaves the stored result
        in place until the session is cleared.
        """
        user_id = _require_user_id(user_id)
        quiz = await self.get_quiz(session, access_code)

        question = next((q for q in quiz.questions if q.id == question_id), None)
        if question is None:
            raise NotFoundError(
                resource="Question",
                resource_id=question_id,
                details={"access_code": access_code},
            )
        self._validate_payload(question, selected_option_ids, text_answer)

        answer = await UserAnswerRepository.upsert(
            session=session,
            quiz_id=quiz.id,
            question_id=question.id,
            user_id=user_id,
            question_type=question.type,
            selected_option_ids=frozenset(selected_option_ids or ()),
            text_answer=text_answer,
        )

        logger.info(
            "Answer saved",
            quiz_id=quiz.id,
            question_id=question.id,
            user_id=user_id,
        )
        return answer

    async def list_answers(
        self,
        session: AsyncSession,
        access_code: str,
        user_id: str,
    ) -> list[SubmittedAnswer]:
        """Return the user's current answers for a quiz."""
        user_id = _require_user_id(user_id)
        quiz = await self.get_quiz(session, access_code)
        return await UserAnswerRepository.list_by_quiz_and_user(session, quiz.id, user_id)

    async def finalize(
        self,
        session: AsyncSession,
        access_code: str,
        user_id: str,
    ) -> QuizOutcome:
        """Score the user's answers once and return the stored outcome thereafter."""
        user_id = _require_user_id(user_id)
        quiz = await self.get_quiz(session, access_code)

        stored = await QuizResultRepository.get_by_quiz_and_user(session, quiz.id, user_id)
        if stored is not None:
            logger.info("Returning stored result", quiz_id=quiz.id, user_id=user_id)
            return await self._load_stored_outcome(session, quiz, stored, user_id)

        answers = await UserAnswerRepository.list_by_quiz_and_user(session, quiz.id, user_id)
        scored = self.scoring_engine.score(quiz.questions, answers)

        try:
            async with session.begin_nested():
                quiz_result = await QuizResultRepository.create(
                    session=session,
                    quiz_id=quiz.id,
                    user_id=user_id,
                    total_questions=scored.total_questions,
                    correct_answers=scored.correct_answers,
                )
                for question_result in scored.questions:
                    await UserAnswerRepository.annotate(
                        session=session,
                        quiz_id=quiz.id,
                        question_id=question_result.id,
                        user_id=user_id,
                        correctness=(
                            AnswerCorrectness.CORRECT
                            if question_result.is_correct
                            else AnswerCorrectness.INCORRECT
                        ),
                    )
        except ConcurrentFinalizeConflict:
            logger.info(
                "Result already finalized by a concurrent request",
                quiz_id=quiz.id,
                user_id=user_id,
            )
            stored = await QuizResultRepository.get_by_quiz_and_user(
                session, quiz.id, user_id
            )
            if stored is None:
                raise
            return await self._load_stored_outcome(session, quiz, stored, user_id)

        logger.info(
            "Quiz finalized",
            quiz_id=quiz.id,
            user_id=user_id,
            total_questions=scored.total_questions,
            correct_answers=scored.correct_answers,
        )

        return QuizOutcome(
            quiz_id=quiz.id,
            title=quiz.title,
            total_questions=quiz_result.total_questions,
            correct_answers=quiz_result.correct_answers,
            score_percentage=quiz_result.score_percentage,
            completed_at=quiz_result.completed_at,
            questions=scored.questions,
        )

    async def clear_session(
        self,
        session: AsyncSession,
        access_code: str,
        user_id: str,
    ) -> None:
        """Delete the user's answers and result so the quiz can be taken again."""
        user_id = _require_user_id(user_id)
        quiz = await self.get_quiz(session, access_code)

        removed = await UserAnswerRepository.clear(session, quiz.id, user_id)
        await QuizResultRepository.delete(session, quiz.id, user_id)

        logger.info(
            "Session cleared",
            quiz_id=quiz.id,
            user_id=user_id,
            removed_answers=removed,
        )

    def _validate_payload(
        self,
        question: Question,
        selected_option_ids: Sequence[int] | None,
        text_answer: str | None,
    ) -> None:
        """Reject an answer whose shape does not fit the question type."""
        if question.type == QuestionType.MULTIPLE_CHOICE:
            if text_answer:
                raise DomainValidationError(
                    "Multiple-choice questions take selected option ids, not text",
                    field="text_answer",
                    details={"question_id": question.id},
                )
            unknown = set(selected_option_ids or ()) - {o.id for o in question.options}
            if unknown:
                raise DomainValidationError(
                    "Selected options do not belong to the question",
                    field="selected_option_ids",
                    details={"question_id": question.id, "option_ids": sorted(unknown)},
                )
        elif selected_option_ids:
            raise DomainValidationError(
                "Free-text questions take a text answer, not selected options",
                field="selected_option_ids",
                details={"question_id": question.id},
            )

    async def _load_stored_outcome(
        self,
        session: AsyncSession,
        quiz: Quiz,
        stored: QuizResult,
        user_id: str,
    ) -> QuizOutcome:
        rows = await UserAnswerRepository.get_by_quiz_and_user(session, quiz.id, user_id)
        return self._restore_outcome(quiz, stored, rows)

    def _restore_outcome(
        self,
        quiz: Quiz,
        stored: QuizResult,
        rows: Sequence[UserAnswer],
    ) -> QuizOutcome:
        """Rebuild the outcome from persisted rows without rescoring."""
        rows_by_question = {row.question_id: row for row in rows}
        questions = []
        for question in quiz.questions:
            row = rows_by_question.get(question.id)
            questions.append(
                build_question_result(
                    question,
                    _to_submitted(row) if row else None,
                    row is not None and row.correctness == AnswerCorrectness.CORRECT,
                )
            )

        return QuizOutcome(
            quiz_id=quiz.id,
            title=quiz.title,
            total_questions=stored.total_questions,
            correct_answers=stored.correct_answers,
            score_percentage=stored.score_percentage,
            completed_at=stored.completed_at,
            questions=questions,
        )
