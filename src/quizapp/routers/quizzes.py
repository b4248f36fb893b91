"""Quiz authoring and quiz-taking endpoints."""

from fastapi import APIRouter, Depends, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from quizapp.db import get_db
from quizapp.exceptions import DomainValidationError
from quizapp.schemas.answer import AnswerResponse, AnswerSubmissionRequest
from quizapp.schemas.common import AckResponse
from quizapp.schemas.quiz import QuizAuthorResponse, QuizCreateRequest, QuizResponse
from quizapp.schemas.result import QuizResultResponse
from quizapp.schemas.session import SessionResponse
from quizapp.services.access_code import AccessCodeGenerator
from quizapp.services.quiz_authoring import QuizAuthoringService
from quizapp.services.quiz_session import QuizSessionService
from quizapp.services.scoring import ScoringEngine

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])


def require_user_id(
    user_id: str | None = Query(None, description="Caller-supplied user identifier"),
) -> str:
    """Reject requests without a usable user_id before they reach the services."""
    if user_id is None or not user_id.strip():
        raise DomainValidationError("A user_id is required", field="user_id")
    return user_id


@router.post(
    "/",
    response_model=QuizAuthorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a quiz",
    description="Publish a new quiz under a freshly generated access code.",
)
async def create_quiz(
    request: QuizCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> QuizAuthorResponse:
    """Create a quiz and return it with its answer key."""
    authoring_service = QuizAuthoringService(AccessCodeGenerator())
    quiz = await authoring_service.create_quiz(session=session, request=request)
    return QuizAuthorResponse.model_validate(quiz)


@router.put(
    "/{quiz_id}",
    response_model=QuizAuthorResponse,
    summary="Replace a quiz",
    description="Replace title, description and questions of an existing quiz.",
)
async def update_quiz(
    quiz_id: int,
    request: QuizCreateRequest,
    session: AsyncSession = Depends(get_db),
) -> QuizAuthorResponse:
    """Replace the content of a quiz, keeping its access code."""
    authoring_service = QuizAuthoringService(AccessCodeGenerator())
    quiz = await authoring_service.update_quiz(
        session=session, quiz_id=quiz_id, request=request
    )
    return QuizAuthorResponse.model_validate(quiz)


@router.get(
    "/{access_code}",
    response_model=QuizResponse,
    summary="Get a quiz by access code",
    description="Return the quiz with its ordered questions and options, without answers.",
)
async def get_quiz(
    access_code: str,
    session: AsyncSession = Depends(get_db),
) -> QuizResponse:
    """Return the public view of a quiz."""
    session_service = QuizSessionService(ScoringEngine())
    quiz = await session_service.get_quiz(session, access_code)
    return QuizResponse.model_validate(quiz)


@router.get(
    "/{access_code}/session",
    response_model=SessionResponse,
    summary="Get the caller's session",
    description="Return saved answers and, once submitted, the stored result.",
)
async def get_session(
    access_code: str,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_db),
) -> SessionResponse:
    """Return the user's progress on a quiz."""
    session_service = QuizSessionService(ScoringEngine())
    snapshot = await session_service.get_session_snapshot(session, access_code, user_id)
    return SessionResponse.model_validate(snapshot)


@router.delete(
    "/{access_code}/session",
    response_model=AckResponse,
    summary="Clear the caller's session",
    description="Delete saved answers and the stored result so the quiz can be retaken.",
)
async def clear_session(
    access_code: str,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_db),
) -> AckResponse:
    """Clear the user's answers and result for a quiz."""
    session_service = QuizSessionService(ScoringEngine())
    await session_service.clear_session(session, access_code, user_id)
    return AckResponse(message="Session cleared")


@router.post(
    "/{access_code}/answers",
    response_model=AckResponse,
    summary="Save an answer",
    description="Store or overwrite the caller's answer to one question.",
)
async def save_answer(
    access_code: str,
    request: AnswerSubmissionRequest,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_db),
) -> AckResponse:
    """Save the user's answer to a question."""
    session_service = QuizSessionService(ScoringEngine())
    await session_service.save_answer(
        session=session,
        access_code=access_code,
        user_id=user_id,
        question_id=request.question_id,
        selected_option_ids=request.selected_option_ids,
        text_answer=request.text_answer,
    )
    return AckResponse(message="Answer saved")


@router.get(
    "/{access_code}/answers",
    response_model=list[AnswerResponse],
    summary="List saved answers",
    description="Return the caller's current answers for a quiz.",
)
async def list_answers(
    access_code: str,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[AnswerResponse]:
    """List the user's saved answers."""
    session_service = QuizSessionService(ScoringEngine())
    answers = await session_service.list_answers(session, access_code, user_id)
    return [AnswerResponse.model_validate(answer) for answer in answers]


@router.post(
    "/{access_code}/submit",
    response_model=QuizResultResponse,
    summary="Submit the quiz",
    description=(
        "Score the caller's answers and store the result. Repeated calls "
        "return the stored result until the session is cleared."
    ),
)
async def submit_quiz(
    access_code: str,
    user_id: str = Depends(require_user_id),
    session: AsyncSession = Depends(get_db),
) -> QuizResultResponse:
    """Finalize the user's attempt and return the result."""
    session_service = QuizSessionService(ScoringEngine())
    outcome = await session_service.finalize(session, access_code, user_id)

    logger.info(
        "Quiz submission completed",
        quiz_id=outcome.quiz_id,
        correct_answers=outcome.correct_answers,
        total_questions=outcome.total_questions,
    )

    return QuizResultResponse.model_validate(outcome)
