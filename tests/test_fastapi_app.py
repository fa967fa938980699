"""Tests for the HTTP entrypoint with the agent dependency overridden."""

import json

import pytest
from fastapi.testclient import TestClient

from finagent.domain.errors import EmptyToolCallsError
from finagent.infrastructure.entrypoints.fastapi_app import app, get_run_use_case


class FakeRunUseCase:
    def __init__(self, events, error=None):
        self.events = events
        self.error = error
        self.calls = []

    async def execute(self, query, user_id=None, session_id=None):
        self.calls.append((query, user_id, session_id))
        for event in self.events:
            yield event
        if self.error is not None:
            raise self.error


def _data_lines(body: str) -> list[str]:
    return [line[len("data: "):] for line in body.splitlines() if line.startswith("data: ")]


@pytest.fixture
def client_for():
    def _make(use_case):
        app.dependency_overrides[get_run_use_case] = lambda: use_case
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health(client_for):
    response = client_for(FakeRunUseCase([])).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_query_streams_events_then_done(client_for):
    use_case = FakeRunUseCase([{"node": "llm", "content": "Hello", "type": "AIMessage"}])

    response = client_for(use_case).post(
        "/query", json={"prompt": "hi", "session_id": "s1", "user_id": "u1"}
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    lines = _data_lines(response.text)
    assert json.loads(lines[0]) == {"node": "llm", "content": "Hello", "type": "AIMessage"}
    assert lines[-1] == "[DONE]"
    assert use_case.calls == [("hi", "u1", "s1")]


def test_orchestration_failure_becomes_error_event(client_for):
    use_case = FakeRunUseCase([], error=EmptyToolCallsError("no tool calls"))

    response = client_for(use_case).post("/query", json={"prompt": "hi"})

    lines = _data_lines(response.text)
    assert json.loads(lines[0]) == {"node": None, "content": "no tool calls", "type": "error"}
    assert lines[-1] == "[DONE]"


def test_prompt_is_required(client_for):
    response = client_for(FakeRunUseCase([])).post("/query", json={})

    assert response.status_code == 422
