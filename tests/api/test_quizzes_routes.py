from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient

from quizfest.api.routes import quizzes as quizzes_routes
from quizfest.game.errors import QuizAccessForbiddenError, QuizNotFoundError
from quizfest.game.quizzes import management
from quizfest.game.quizzes.types import (
    PlayableQuiz,
    QuizDetail,
    QuizParticipantsOutcome,
    QuizStatsOutcome,
    QuizSummary,
)
from quizfest.game.scoring.types import (
    MostMissedQuestion,
    ParticipantSummary,
    QuestionView,
    QuizStats,
)
from quizfest.main import app
from tests.api.route_helpers import NOW_UTC, OWNER_HEADERS, OWNER_USER_ID, install_route_env


def _summary(**overrides) -> QuizSummary:
    values = {
        "quiz_id": uuid4(),
        "title": "Pub quiz",
        "question_count": 2,
        "participant_count": 3,
        "created_at": NOW_UTC,
        "updated_at": NOW_UTC,
    }
    values.update(overrides)
    return QuizSummary(**values)


def _question(question_id: str, *, correct: int, order_index: int) -> QuestionView:
    return QuestionView(
        question_id=question_id,
        text=f"Question {question_id}?",
        options=("Alpha", "Bravo", "Charlie", "Delta"),
        correct_option_index=correct,
        order_index=order_index,
    )


def _participant(name: str, *, score: int, total: int, percentage: float) -> ParticipantSummary:
    return ParticipantSummary(
        participation_id=str(uuid4()),
        participant_name=name,
        score=score,
        total_questions=total,
        percentage=percentage,
        completed_at=NOW_UTC,
    )


def test_owner_routes_require_gateway_headers(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    client = TestClient(app)
    quiz_id = uuid4()

    responses = [
        client.get("/api/quizzes"),
        client.post("/api/quizzes", json={"title": "New quiz"}),
        client.get(f"/api/quizzes/{quiz_id}"),
        client.put(f"/api/quizzes/{quiz_id}", json={"title": "Renamed"}),
        client.delete(f"/api/quizzes/{quiz_id}"),
        client.get(f"/api/quizzes/{quiz_id}/stats"),
        client.get(f"/api/quizzes/{quiz_id}/participants"),
        client.get(
            f"/api/quizzes/{quiz_id}/stats",
            headers={"X-Internal-Token": OWNER_HEADERS["X-Internal-Token"], "X-User-Id": "abc"},
        ),
    ]

    assert [response.status_code for response in responses] == [401] * len(responses)


def test_list_and_create_quizzes(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    created_titles: list[str] = []
    listed = _summary(title="Existing")

    async def _fake_list(session, *, owner_user_id):  # noqa: ANN001
        assert owner_user_id == OWNER_USER_ID
        return [listed]

    async def _fake_create(session, *, owner_user_id, title, now_utc):  # noqa: ANN001
        created_titles.append(title)
        return _summary(title=title, question_count=0, participant_count=0)

    monkeypatch.setattr(management, "list_owner_quizzes", _fake_list)
    monkeypatch.setattr(management, "create_quiz", _fake_create)

    client = TestClient(app)
    list_response = client.get("/api/quizzes", headers=OWNER_HEADERS)
    create_response = client.post("/api/quizzes", json={"title": "Fresh quiz"}, headers=OWNER_HEADERS)
    short_title = client.post("/api/quizzes", json={"title": "Hi"}, headers=OWNER_HEADERS)

    assert list_response.status_code == 200
    assert list_response.json()["quizzes"][0]["id"] == str(listed.quiz_id)
    assert list_response.json()["quizzes"][0]["participant_count"] == 3
    assert create_response.status_code == 201
    assert create_response.json()["quiz"]["title"] == "Fresh quiz"
    assert create_response.json()["quiz"]["question_count"] == 0
    assert short_title.status_code == 422
    assert created_titles == ["Fresh quiz"]


def test_show_quiz_includes_answer_key_for_owner(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    summary = _summary()

    async def _fake_show(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        return QuizDetail(
            summary=summary,
            questions=[_question("q1", correct=2, order_index=0)],
        )

    monkeypatch.setattr(management, "get_owner_quiz", _fake_show)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{summary.quiz_id}", headers=OWNER_HEADERS)

    assert response.status_code == 200
    body = response.json()["quiz"]
    assert body["title"] == "Pub quiz"
    assert body["questions"][0]["correct_option_index"] == 2


def test_update_and_delete_map_ownership_errors(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_update(session, **kwargs):  # noqa: ANN001
        raise QuizAccessForbiddenError

    async def _fake_delete(session, **kwargs):  # noqa: ANN001
        raise QuizNotFoundError

    monkeypatch.setattr(management, "update_quiz", _fake_update)
    monkeypatch.setattr(management, "delete_quiz", _fake_delete)

    client = TestClient(app)
    update_response = client.put(
        f"/api/quizzes/{uuid4()}",
        json={"title": "Renamed"},
        headers=OWNER_HEADERS,
    )
    delete_response = client.delete(f"/api/quizzes/{uuid4()}", headers=OWNER_HEADERS)

    assert update_response.status_code == 403
    assert update_response.json() == {"detail": {"code": "E_FORBIDDEN"}}
    assert delete_response.status_code == 404
    assert delete_response.json() == {"detail": {"code": "E_QUIZ_NOT_FOUND"}}


def test_delete_quiz_reports_deleted_id(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    deleted: list[object] = []

    async def _fake_delete(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        deleted.append(quiz_id)

    monkeypatch.setattr(management, "delete_quiz", _fake_delete)

    quiz_id = uuid4()
    client = TestClient(app)
    response = client.delete(f"/api/quizzes/{quiz_id}", headers=OWNER_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"id": str(quiz_id), "deleted": True}
    assert deleted == [quiz_id]


def test_stats_round_percentages_for_display(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    quiz_id = uuid4()

    async def _fake_stats(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        return QuizStatsOutcome(
            quiz_id=quiz_id,
            quiz_title="Pub quiz",
            stats=QuizStats(
                participant_count=3,
                average_score=4 / 3,
                average_percentage=200 / 3,
                most_missed_question=MostMissedQuestion(
                    question_id="q2",
                    question_text="Question q2?",
                    miss_count=2,
                ),
                participants=(
                    _participant("Ada", score=2, total=2, percentage=100.0),
                    _participant("Bob", score=1, total=3, percentage=100 / 3),
                ),
            ),
        )

    monkeypatch.setattr(quizzes_routes, "get_quiz_stats", _fake_stats)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{quiz_id}/stats", headers=OWNER_HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["quiz"] == {"id": str(quiz_id), "title": "Pub quiz"}
    assert body["participant_count"] == 3
    assert body["average_score"] == 1.33
    assert body["average_percentage"] == 66.67
    assert body["most_missed_question"] == {
        "id": "q2",
        "question_text": "Question q2?",
        "miss_count": 2,
    }
    assert [row["percentage"] for row in body["participants"]] == [100.0, 33.33]


def test_stats_without_participants_have_no_most_missed(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_stats(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        return QuizStatsOutcome(
            quiz_id=quiz_id,
            quiz_title="Empty quiz",
            stats=QuizStats(
                participant_count=0,
                average_score=0.0,
                average_percentage=0.0,
                most_missed_question=None,
                participants=(),
            ),
        )

    monkeypatch.setattr(quizzes_routes, "get_quiz_stats", _fake_stats)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{uuid4()}/stats", headers=OWNER_HEADERS)

    assert response.status_code == 200
    assert response.json()["most_missed_question"] is None
    assert response.json()["participants"] == []


def test_stats_for_other_owner_quiz_is_not_found(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_stats(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        raise QuizNotFoundError

    monkeypatch.setattr(quizzes_routes, "get_quiz_stats", _fake_stats)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{uuid4()}/stats", headers=OWNER_HEADERS)

    assert response.status_code == 404
    assert response.json() == {"detail": {"code": "E_QUIZ_NOT_FOUND"}}


def test_participants_listed_in_service_order(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_participants(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        return QuizParticipantsOutcome(
            quiz_id=quiz_id,
            participants=[
                _participant("First", score=0, total=2, percentage=0.0),
                _participant("Second", score=2, total=2, percentage=100.0),
            ],
        )

    monkeypatch.setattr(quizzes_routes, "list_quiz_participants", _fake_participants)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{uuid4()}/participants", headers=OWNER_HEADERS)

    assert response.status_code == 200
    assert [row["participant_name"] for row in response.json()["participants"]] == [
        "First",
        "Second",
    ]


def test_play_quiz_is_public_and_hides_answer_key(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_play(session, *, quiz_id):  # noqa: ANN001
        return PlayableQuiz(
            quiz_id=quiz_id,
            title="Pub quiz",
            creator_name="Unknown",
            questions=[_question("q1", correct=3, order_index=0)],
        )

    monkeypatch.setattr(management, "get_playable_quiz", _fake_play)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{uuid4()}/play")

    assert response.status_code == 200
    body = response.json()["quiz"]
    assert body["creator_name"] == "Unknown"
    assert body["questions"] == [
        {
            "id": "q1",
            "question_text": "Question q1?",
            "options": ["Alpha", "Bravo", "Charlie", "Delta"],
        }
    ]


def test_stats_round_exact_halves_up(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)

    async def _fake_stats(session, *, quiz_id, owner_user_id):  # noqa: ANN001
        return QuizStatsOutcome(
            quiz_id=quiz_id,
            quiz_title="Long quiz",
            stats=QuizStats(
                participant_count=1,
                average_score=0.125,
                average_percentage=100 / 32,
                most_missed_question=None,
                participants=(_participant("Ada", score=5, total=32, percentage=500 / 32),),
            ),
        )

    monkeypatch.setattr(quizzes_routes, "get_quiz_stats", _fake_stats)

    client = TestClient(app)
    response = client.get(f"/api/quizzes/{uuid4()}/stats", headers=OWNER_HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["average_score"] == 0.13
    assert body["average_percentage"] == 3.13
    assert body["participants"][0]["percentage"] == 15.63


def test_oversized_user_id_is_unauthorized(monkeypatch) -> None:
    install_route_env(monkeypatch, quizzes_routes)
    client = TestClient(app)

    response = client.get(
        "/api/quizzes",
        headers={"X-Internal-Token": OWNER_HEADERS["X-Internal-Token"], "X-User-Id": "9" * 40},
    )

    assert response.status_code == 401
    assert response.json() == {"detail": {"code": "E_UNAUTHORIZED"}}
