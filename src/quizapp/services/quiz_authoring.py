"""Quiz authoring: publish new quizzes and replace their content."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.exceptions import DomainValidationError, NotFoundError
from quizapp.models.question import AnswerOption, Question, QuestionType
from quizapp.models.quiz import Quiz
from quizapp.repositories.quiz import QuizRepository
from quizapp.schemas.quiz import QuestionCreate, QuizCreateRequest
from quizapp.services.access_code import AccessCodeGenerator


class QuizAuthoringService:
    """Create quizzes under a fresh access code and update them in place."""

    def __init__(self, access_code_generator: AccessCodeGenerator) -> None:
        self.access_code_generator = access_code_generator

    async def create_quiz(
        self,
        session: AsyncSession,
        request: QuizCreateRequest,
    ) -> Quiz:
        """Validate and store a new quiz with a unique access code."""
        questions = self._build_questions(request.questions)
        access_code = await self.access_code_generator.generate(session)

        quiz = await QuizRepository.create(
            session=session,
            title=request.title,
            description=request.description,
            access_code=access_code,
            questions=questions,
        )

        logger.info(
            "Quiz created",
            quiz_id=quiz.id,
            access_code=access_code,
            question_count=len(questions),
        )
        return quiz

    async def update_quiz(
        self,
        session: AsyncSession,
        quiz_id: int,
        request: QuizCreateRequest,
    ) -> Quiz:
        """Replace the title, description and questions of an existing quiz.

        The access code is kept. Answers to the replaced questions are
        removed together with them.
        """
        quiz = await QuizRepository.get_by_id(session, quiz_id)
        if quiz is None:
            raise NotFoundError(resource="Quiz", resource_id=quiz_id)

        questions = self._build_questions(request.questions)
        quiz = await QuizRepository.replace_content(
            session=session,
            quiz=quiz,
            title=request.title,
            description=request.description,
            questions=questions,
        )

        logger.info(
            "Quiz updated",
            quiz_id=quiz.id,
            question_count=len(questions),
        )
        return quiz

    def _build_questions(self, payload: list[QuestionCreate]) -> list[Question]:
        """Turn request questions into models, defaulting order to position."""
        questions = []
        for index, item in enumerate(payload, start=1):
            self._validate_question(index, item)
            question = Question(
                text=item.text,
                type=item.type,
                order=item.order if item.order > 0 else index,
                correct_text=(
                    item.correct_text if item.type == QuestionType.FREE_TEXT else None
                ),
            )
            if item.type == QuestionType.MULTIPLE_CHOICE:
                question.options = [
                    AnswerOption(
                        text=option.text,
                        is_correct=option.is_correct,
                        order=option.order if option.order > 0 else option_index,
                    )
                    for option_index, option in enumerate(item.options or [], start=1)
                ]
            questions.append(question)
        return questions

    def _validate_question(self, position: int, item: QuestionCreate) -> None:
        if item.type == QuestionType.MULTIPLE_CHOICE:
            if not item.options:
                raise DomainValidationError(
                    "Multiple-choice questions need at least one option",
                    field="options",
                    details={"position": position},
                )
        else:
            if item.options:
                raise DomainValidationError(
                    "Free-text questions cannot have options",
                    field="options",
                    details={"position": position},
                )
            if not (item.correct_text or "").strip():
                raise DomainValidationError(
                    "Free-text questions need a correct answer text",
                    field="correct_text",
                    details={"position": position},
                )
