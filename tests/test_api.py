# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import pytest
from fastapi.testclient import TestClient

from horizon.main import create_app
from horizon.services.exercises import ExerciseKind
from horizon.utils.jwt_utils import verify_access_token
from horizon.utils.prompt_templates import DELETE_CHAT_PROMPT
from horizon.utils.wellness_content import AFFIRMATIONS, CRISIS_RESOURCES, LEARN_CARDS, MOOD_QUESTIONS

from tests.conftest import PASSWORD

SIGNUP = {
    "name": "Ravi",
    "age": "21",
    "email": "ravi@example.com",
    "password": PASSWORD,
    "confirm_password": PASSWORD,
}


@pytest.fixture
def client(backend):
    with TestClient(create_app(backend=backend)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client):
    response = client.post("/auth/signup", json=SIGNUP)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["details"]["store"] == "memory"


def test_signup_lands_on_home(client):
    body = client.post("/auth/signup", json=SIGNUP).json()
    assert body["screen"] == "home"
    assert body["user"]["name"] == "Ravi"


def test_signup_validation_errors(client):
    response = client.post("/auth/signup", json={**SIGNUP, "confirm_password": "other"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Passwords do not match."


def test_login_and_me(client, auth_headers):
    response = client.post("/auth/login", json={"email": SIGNUP["email"], "password": PASSWORD})
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    me = client.get("/auth/me", headers=headers).json()
    assert me["welcome_name"] == "Ravi"
    assert me["screen"] == "home"


def test_bad_login(client, auth_headers):
    response = client.post("/auth/login", json={"email": SIGNUP["email"], "password": "wrong-one"})
    assert response.status_code == 401
    assert response.json()["detail"] == "INVALID_LOGIN_CREDENTIALS"


def test_protected_routes_need_token(client):
    assert client.get("/mood/logs").status_code == 422
    assert client.get("/mood/logs", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_logout_ends_session(client, auth_headers):
    assert client.post("/auth/logout", headers=auth_headers).json()["screen"] == "login"
    response = client.get("/auth/me", headers=auth_headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Session expired. Please log in again."


def test_navigation(client, auth_headers):
    state = client.get("/navigation", headers=auth_headers).json()
    assert state["screen"] == "home"
    assert "crisis" in state["allowed"]

    assert client.post("/navigation/mood-check", headers=auth_headers).json()["screen"] == "mood-check"
    assert client.post("/navigation/login", headers=auth_headers).status_code == 409


def test_mood_flow(client, auth_headers):
    assert client.get("/mood/prompts").json()["questions"] == MOOD_QUESTIONS

    saved = client.post("/mood/logs", json={"mood_value": 85, "answers": {"q": "a"}}, headers=auth_headers).json()
    assert saved["saved"] is True

    logs = client.get("/mood/logs", headers=auth_headers).json()
    assert [(log["mood"], log["mood_value"]) for log in logs] == [("Great", 85)]

    calendar = client.get("/mood/calendar", headers=auth_headers).json()
    marked = [day for day in calendar["days"] if day["marked"]]
    assert len(marked) == 1

    day = marked[0]["day"]
    path = f"/mood/calendar/{calendar['year']}/{calendar['month']}/{day}"
    assert client.get(path, headers=auth_headers).json()["mood"] == "Great"


def test_mood_value_out_of_range(client, auth_headers):
    assert client.post("/mood/logs", json={"mood_value": 120}, headers=auth_headers).status_code == 422


def test_empty_day_is_not_found(client, auth_headers):
    assert client.get("/mood/calendar/2020/1/1", headers=auth_headers).status_code == 404
    assert client.get("/journal/calendar/2020/13/1", headers=auth_headers).status_code == 400


def test_calendar_rejects_years_outside_date_range(client, auth_headers):
    assert client.get("/mood/calendar?year=0&month=1", headers=auth_headers).status_code == 422
    assert client.get("/journal/calendar?year=10000&month=1", headers=auth_headers).status_code == 422
    assert client.get("/mood/calendar/0/1/1", headers=auth_headers).status_code == 400
    assert client.get("/journal/calendar/10000/1/1", headers=auth_headers).status_code == 400

    edge = client.get("/mood/calendar?year=1&month=1", headers=auth_headers)
    assert edge.status_code == 200
    assert edge.json()["title"] == "January 1"


def test_journal_flow(client, auth_headers, prompt_generator):
    assert client.post("/journal/entries", json={"text": "  "}, headers=auth_headers).status_code == 400

    prompt_generator.replies = ['"What are you proud of?"']
    assert client.post("/journal/prompt", headers=auth_headers).json()["draft"] == "What are you proud of?\n\n"

    client.put("/journal/draft", json={"text": "I am proud of finishing my exams."}, headers=auth_headers)
    assert client.post("/journal/entries", json={}, headers=auth_headers).status_code == 200
    assert client.get("/journal/draft", headers=auth_headers).json()["draft"] == ""

    entries = client.get("/journal/entries", headers=auth_headers).json()
    assert [e["text"] for e in entries] == ["I am proud of finishing my exams."]


def test_chat_flow(client, auth_headers, chat_generator):
    chat_generator.replies = ["I'm glad you reached out."]

    state = client.get("/chat/state", headers=auth_headers).json()
    assert state["assistant_name"] == "Echo"
    assert len(state["messages"]) == 1

    sent = client.post("/chat/send", json={"text": "I feel anxious"}, headers=auth_headers).json()
    assert sent["sent"] is True
    assert [m["sender"] for m in sent["messages"]] == ["user", "ai"]
    chat_id = sent["active_chat_id"]

    fresh = client.post("/chat/new", headers=auth_headers).json()
    assert fresh["active_chat_id"] is None

    reopened = client.post(f"/chat/sessions/{chat_id}/open", headers=auth_headers).json()
    assert reopened["messages"][1]["text"] == "I'm glad you reached out."
    assert client.post("/chat/sessions/missing/open", headers=auth_headers).status_code == 404

    armed = client.post(f"/chat/sessions/{chat_id}/delete", headers=auth_headers).json()
    assert armed["delete_prompt"] == DELETE_CHAT_PROMPT
    assert client.post("/chat/delete/cancel", headers=auth_headers).json()["delete_prompt"] is None

    client.post(f"/chat/sessions/{chat_id}/delete", headers=auth_headers)
    deleted = client.post("/chat/delete/confirm", headers=auth_headers).json()
    assert deleted["deleted"] is True
    assert deleted["sessions"] == []


def test_profile_summary(client, auth_headers):
    client.post("/mood/logs", json={"mood_value": 40}, headers=auth_headers)
    client.post("/journal/entries", json={"text": "hello"}, headers=auth_headers)

    summary = client.get("/profile/summary", headers=auth_headers).json()
    assert summary == {
        "name": "Ravi",
        "email": "ravi@example.com",
        "age": "21",
        "mood_log_count": 1,
        "journal_entry_count": 1,
    }


def test_static_content(client, auth_headers):
    affirmations = client.get("/content/affirmations", headers=auth_headers).json()
    assert affirmations["current"] == AFFIRMATIONS[0]
    assert client.get("/content/learn").json() == LEARN_CARDS
    assert client.get("/content/crisis").json() == CRISIS_RESOURCES
    kinds = [e["kind"] for e in client.get("/content/exercises").json()]
    assert kinds == ["box", "478", "paced", "grounding", "meditation"]


def test_exercise_socket(client, auth_headers):
    token = auth_headers["Authorization"].split(" ")[1]
    with client.websocket_connect(f"/ws/exercises/box?token={token}") as ws:
        assert ws.receive_json()["step"] == "Start"

        ws.send_json({"action": "start"})
        assert ws.receive_json() == {"step": "Inhale", "index": 0, "is_active": True, "duration": 4}

        ws.send_json({"action": "duration", "value": 1200})
        assert "error" in ws.receive_json()

        ws.send_json({"action": "stop"})
        assert ws.receive_json()["is_active"] is False


def test_grounding_socket(client, auth_headers):
    token = auth_headers["Authorization"].split(" ")[1]
    with client.websocket_connect(f"/ws/exercises/grounding?token={token}") as ws:
        assert ws.receive_json()["count"] == 5
        ws.send_json({"action": "next"})
        assert ws.receive_json()["count"] == 4


def test_socket_rejects_bad_token(client):
    with client.websocket_connect("/ws/exercises/box?token=bad") as ws:
        assert ws.receive_json() == {"error": "Invalid auth token"}


def test_record_socket_pushes_new_logs(client, auth_headers):
    token = auth_headers["Authorization"].split(" ")[1]
    with client.websocket_connect(f"/ws/records/mood-logs?token={token}") as ws:
        assert ws.receive_json() == []
        client.post("/mood/logs", json={"mood_value": 10}, headers=auth_headers)
        logs = ws.receive_json()
        assert [log["mood"] for log in logs] == ["Very Bad"]


def test_each_exercise_socket_owns_its_exercise(client, auth_headers):
    token = auth_headers["Authorization"].split(" ")[1]
    uid = verify_access_token(token, "test-secret")["sub"]
    workspace = client.app.state.registry.get(uid)

    with client.websocket_connect(f"/ws/exercises/box?token={token}") as second:
        assert second.receive_json()["step"] == "Start"
        with client.websocket_connect(f"/ws/exercises/box?token={token}") as first:
            assert first.receive_json()["step"] == "Start"
            assert len(workspace.open_exercises(ExerciseKind.box)) == 2

        # Closing one socket leaves the other's exercise running and tracked
        second.send_json({"action": "start"})
        assert second.receive_json()["step"] == "Inhale"
        remaining = workspace.open_exercises(ExerciseKind.box)
        assert len(remaining) == 1
        assert remaining[0].is_active

    assert workspace.open_exercises(ExerciseKind.box) == []
    assert not remaining[0].is_active


def test_chat_input_round_trips(client, auth_headers):
    state = client.put("/chat/input", json={"text": "still typing"}, headers=auth_headers).json()
    assert state["input"] == "still typing"
    assert client.get("/chat/state", headers=auth_headers).json()["input"] == "still typing"

    assert client.post("/chat/new", headers=auth_headers).json()["input"] == ""
