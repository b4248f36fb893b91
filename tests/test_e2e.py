"""End-to-end test for the full quiz flow.

Flow: Create -> View -> Answer -> Submit -> Submit again -> Clear -> Retake
through the ASGI app with an in-memory SQLite database.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quizapp.db import get_db
from quizapp.main import app

USER = {"user_id": "student-1"}


@pytest.fixture
def override_get_db(test_engine):
    """Route the app's sessions to the in-memory test database."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


class TestE2EHappyPath:
    """Full end-to-end path through the quiz API."""

    async def test_full_flow(self, override_get_db) -> None:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            # 1. Author publishes a quiz
            create_resp = await client.post(
                "/api/quizzes/",
                json={
                    "title": "Mixed bag",
                    "questions": [
                        {
                            "text": "Pick A",
                            "type": "multiple_choice",
                            "options": [
                                {"text": "A", "is_correct": True},
                                {"text": "B"},
                                {"text": "C"},
                            ],
                        },
                        {
                            "text": "Six times seven?",
                            "type": "free_text",
                            "correct_text": "42",
                        },
                    ],
                },
            )
            assert create_resp.status_code == 201
            created = create_resp.json()
            access_code = created["access_code"]
            q1, q2 = created["questions"]
            option_a = q1["options"][0]["id"]

            # 2. Taker views the quiz
            view_resp = await client.get(f"/api/quizzes/{access_code}")
            assert view_resp.status_code == 200
            assert [q["id"] for q in view_resp.json()["questions"]] == [q1["id"], q2["id"]]

            # 3. Taker answers, changing their mind on Q2
            for payload in [
                {"question_id": q1["id"], "selected_option_ids": [option_a]},
                {"question_id": q2["id"], "text_answer": "41"},
                {"question_id": q2["id"], "text_answer": " 42 "},
            ]:
                save_resp = await client.post(
                    f"/api/quizzes/{access_code}/answers", params=USER, json=payload
                )
                assert save_resp.status_code == 200

            answers_resp = await client.get(
                f"/api/quizzes/{access_code}/answers", params=USER
            )
            assert len(answers_resp.json()) == 2

            # 4. Submit twice: the second call returns the stored result
            first = await client.post(f"/api/quizzes/{access_code}/submit", params=USER)
            second = await client.post(f"/api/quizzes/{access_code}/submit", params=USER)
            assert first.status_code == 200
            assert first.json()["total_questions"] == 2
            assert first.json()["correct_answers"] == 2
            assert first.json()["score_percentage"] == 100.0
            assert second.json() == first.json()
            assert [q["is_correct"] for q in second.json()["questions"]] == [True, True]

            session_resp = await client.get(
                f"/api/quizzes/{access_code}/session", params=USER
            )
            assert session_resp.json()["is_completed"] is True
            assert session_resp.json()["results"] == first.json()

            # 5. Clear and retake with no answers
            clear_resp = await client.delete(
                f"/api/quizzes/{access_code}/session", params=USER
            )
            assert clear_resp.status_code == 200

            retake = await client.post(f"/api/quizzes/{access_code}/submit", params=USER)
            assert retake.json()["correct_answers"] == 0
            assert retake.json()["total_questions"] == 2

            # 6. Another user is unaffected by the first one's session
            other = await client.get(
                f"/api/quizzes/{access_code}/session", params={"user_id": "student-2"}
            )
            assert other.json()["is_completed"] is False
            assert other.json()["answers"] == []
