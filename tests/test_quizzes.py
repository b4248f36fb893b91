"""Tests for quiz endpoints with the service layer mocked out."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from quizapp.db import get_db
from quizapp.exceptions import DomainValidationError, NotFoundError
from quizapp.main import app
from quizapp.models import AnswerOption, Question, QuestionType, Quiz
from quizapp.repositories.user_answer import SubmittedAnswer
from quizapp.services.quiz_session import QuizOutcome
from quizapp.services.scoring import OptionResult, QuestionResult

CREATED_AT = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def mock_db_session() -> MagicMock:
    """Create a mock async database session."""
    return MagicMock()


@pytest.fixture
def client(mock_db_session: MagicMock) -> TestClient:
    """Create test client with mocked DB dependency."""
    app.dependency_overrides[get_db] = lambda: mock_db_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def quiz() -> Quiz:
    """Transient quiz with one multiple-choice and one free-text question."""
    return Quiz(
        id=7,
        title="Capitals",
        description=None,
        access_code="CAPS2026",
        created_at=CREATED_AT,
        questions=[
            Question(
                id=1,
                text="Capital of Italy?",
                type=QuestionType.MULTIPLE_CHOICE,
                order=1,
                options=[
                    AnswerOption(id=10, text="Rome", order=1, is_correct=True),
                    AnswerOption(id=11, text="Milan", order=2, is_correct=False),
                ],
            ),
            Question(
                id=2,
                text="Capital of Spain?",
                type=QuestionType.FREE_TEXT,
                order=2,
                correct_text="Madrid",
            ),
        ],
    )


class TestGetQuiz:
    """Tests for GET /api/quizzes/{access_code}."""

    def test_public_view_hides_answer_key(self, client: TestClient, quiz: Quiz) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.get_quiz = AsyncMock(return_value=quiz)

            response = client.get("/api/quizzes/CAPS2026")

        assert response.status_code == 200
        data = response.json()
        assert data["access_code"] == "CAPS2026"
        assert [q["type"] for q in data["questions"]] == ["multiple_choice", "free_text"]
        assert data["questions"][0]["options"][0] == {"id": 10, "text": "Rome", "order": 1}
        assert "correct_text" not in data["questions"][1]

    def test_unknown_access_code_returns_404(self, client: TestClient) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.get_quiz = AsyncMock(
                side_effect=NotFoundError(resource="Quiz", resource_id="NOPE")
            )

            response = client.get("/api/quizzes/NOPE")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"


class TestCreateQuiz:
    """Tests for POST /api/quizzes/."""

    def test_create_returns_author_view(self, client: TestClient, quiz: Quiz) -> None:
        with patch("quizapp.routers.quizzes.QuizAuthoringService") as mock_service_class:
            mock_service_class.return_value.create_quiz = AsyncMock(return_value=quiz)

            response = client.post(
                "/api/quizzes/",
                json={
                    "title": "Capitals",
                    "questions": [
                        {
                            "text": "Capital of Spain?",
                            "type": "free_text",
                            "correct_text": "Madrid",
                        }
                    ],
                },
            )

        assert response.status_code == 201
        data = response.json()
        assert data["questions"][0]["options"][0]["is_correct"] is True
        assert data["questions"][1]["correct_text"] == "Madrid"

    def test_create_with_invalid_body_returns_422(self, client: TestClient) -> None:
        response = client.post("/api/quizzes/", json={"questions": []})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestAnswers:
    """Tests for saving and listing answers."""

    def test_save_answer_acknowledges(
        self, client: TestClient, mock_db_session: MagicMock
    ) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            save_answer = AsyncMock()
            mock_service_class.return_value.save_answer = save_answer

            response = client.post(
                "/api/quizzes/CAPS2026/answers",
                params={"user_id": "user-1"},
                json={"question_id": 1, "selected_option_ids": [10]},
            )

        assert response.status_code == 200
        assert response.json() == {"message": "Answer saved"}
        save_answer.assert_awaited_once_with(
            session=mock_db_session,
            access_code="CAPS2026",
            user_id="user-1",
            question_id=1,
            selected_option_ids=[10],
            text_answer=None,
        )

    @pytest.mark.parametrize("params", [{}, {"user_id": ""}, {"user_id": "   "}])
    def test_save_answer_without_user_id_returns_400(
        self, client: TestClient, params: dict
    ) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            response = client.post(
                "/api/quizzes/CAPS2026/answers",
                params=params,
                json={"question_id": 2, "text_answer": "Madrid"},
            )

            mock_service_class.return_value.save_answer.assert_not_called()

        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["field"] == "user_id"

    def test_mismatched_payload_returns_400(self, client: TestClient) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.save_answer = AsyncMock(
                side_effect=DomainValidationError(
                    "Free-text questions take a text answer, not selected options",
                    field="selected_option_ids",
                )
            )

            response = client.post(
                "/api/quizzes/CAPS2026/answers",
                params={"user_id": "user-1"},
                json={"question_id": 2, "selected_option_ids": [10]},
            )

        assert response.status_code == 400
        assert response.json()["field"] == "selected_option_ids"

    def test_list_answers_sorts_selection(self, client: TestClient) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.list_answers = AsyncMock(
                return_value=[
                    SubmittedAnswer(question_id=1, selected_option_ids=frozenset({11, 10})),
                    SubmittedAnswer(question_id=2, text_answer="Madrid"),
                ]
            )

            response = client.get(
                "/api/quizzes/CAPS2026/answers", params={"user_id": "user-1"}
            )

        assert response.status_code == 200
        assert response.json() == [
            {"question_id": 1, "selected_option_ids": [10, 11], "text_answer": None},
            {"question_id": 2, "selected_option_ids": None, "text_answer": "Madrid"},
        ]


class TestSubmitAndClear:
    """Tests for submitting and clearing a session."""

    def test_submit_returns_result(self, client: TestClient) -> None:
        outcome = QuizOutcome(
            quiz_id=7,
            title="Capitals",
            total_questions=2,
            correct_answers=1,
            score_percentage=50.0,
            completed_at=CREATED_AT,
            questions=[
                QuestionResult(
                    id=1,
                    text="Capital of Italy?",
                    type=QuestionType.MULTIPLE_CHOICE,
                    is_correct=True,
                    options=[
                        OptionResult(id=10, text="Rome", is_correct=True, is_selected=True),
                        OptionResult(id=11, text="Milan", is_correct=False, is_selected=False),
                    ],
                ),
                QuestionResult(
                    id=2,
                    text="Capital of Spain?",
                    type=QuestionType.FREE_TEXT,
                    is_correct=False,
                    user_answer="Barcelona",
                    correct_text="Madrid",
                ),
            ],
        )
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.finalize = AsyncMock(return_value=outcome)

            response = client.post(
                "/api/quizzes/CAPS2026/submit", params={"user_id": "user-1"}
            )

        assert response.status_code == 200
        data = response.json()
        assert data["total_questions"] == 2
        assert data["correct_answers"] == 1
        assert data["score_percentage"] == 50.0
        assert data["questions"][0]["options"][0]["is_selected"] is True
        assert data["questions"][1]["user_answer"] == "Barcelona"

    def test_clear_session_acknowledges(self, client: TestClient) -> None:
        with patch("quizapp.routers.quizzes.QuizSessionService") as mock_service_class:
            mock_service_class.return_value.clear_session = AsyncMock()

            response = client.delete(
                "/api/quizzes/CAPS2026/session", params={"user_id": "user-1"}
            )

        assert response.status_code == 200
        assert response.json() == {"message": "Session cleared"}
