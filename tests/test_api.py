"""HTTP tests for the FastAPI app built by create_app()."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from src.application.agent.prompts import EXAMPLE_QUESTIONS
from src.domain.errors import BackendWriteError
from src.infrastructure.entrypoints.api import create_app
from src.infrastructure.observability.langfuse_adapter import NullObservabilityHandler
from src.infrastructure.persistence.in_memory_repository import InMemoryStockRepository

from conftest import FakeLanguageModel


class RejectingWriteRepository(InMemoryStockRepository):
    def upsert_stock_records(self, records):
        raise BackendWriteError("new row violates row-level security policy")


class LoopRecordingRepository(InMemoryStockRepository):
    """Notes, per call, whether it ran on the event loop thread."""

    def __init__(self):
        super().__init__()
        self.on_loop: dict[str, bool] = {}

    def _note(self, name):
        try:
            asyncio.get_running_loop()
            self.on_loop[name] = True
        except RuntimeError:
            self.on_loop[name] = False

    def upsert_stock_records(self, records):
        self._note("upsert")
        return super().upsert_stock_records(records)

    def ping(self):
        self._note("ping")
        return super().ping()


class CountingObservability(NullObservabilityHandler):
    def __init__(self):
        self.flushes = 0

    def flush(self):
        self.flushes += 1


@pytest.fixture
def store() -> InMemoryStockRepository:
    return InMemoryStockRepository()


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store, FakeLanguageModel(), NullObservabilityHandler()))


def _upload(client, text: str):
    return client.post("/api/upload", files={"file": ("prices.csv", text.encode(), "text/csv")})


def test_health_reports_database(client):
    assert client.get("/health").json() == {"status": "ok", "database": True}


def test_upload_then_stats(client):
    response = _upload(client, "Date,Close Price\n2024-01-02,1610\n2024-01-03,1650\n")

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "message": "Successfully uploaded 2 records",
        "count": 2,
    }
    stats = client.get("/api/stats").json()
    assert stats["stock_records"] == 2
    assert client.get("/api/stocks/available").json() == {"has_data": True}


def test_upload_without_usable_rows_is_400(client):
    response = _upload(client, "Date,Close Price\n2024-01-02,abc\n")

    assert response.status_code == 400
    assert "Expected columns" in response.json()["detail"]


def test_upload_write_failure_is_502_with_backend_message():
    client = TestClient(
        create_app(RejectingWriteRepository(), FakeLanguageModel(), NullObservabilityHandler())
    )

    response = _upload(client, "date,open,high,low,close\n2024-01-02,1,2,0.5,1.5\n")

    assert response.status_code == 502
    assert "row-level security" in response.json()["detail"]


def test_chat_round_trip_and_history(client):
    _upload(client, "date,open,high,low,close\n2024-01-02,1,2,0.5,1.5\n")

    reply = client.post("/api/chat/abc", json={"question": "latest price"})

    assert reply.status_code == 200
    body = reply.json()
    assert body["role"] == "assistant"
    assert body["content"] == "Prices rose steadily."
    assert body["sources"] == ["Stock Price Database"]
    history = client.get("/api/chat/abc/messages").json()
    assert [m["role"] for m in history] == ["user", "assistant"]
    assert client.get("/api/chat/other/messages").json() == []


def test_blank_question_is_400(client):
    assert client.post("/api/chat/abc", json={"question": "  "}).status_code == 400


def test_busy_session_is_409(client):
    client.app.state.sessions.get("abc")._busy = True

    response = client.post("/api/chat/abc", json={"question": "latest"})

    assert response.status_code == 409
    assert client.get("/api/chat/abc/messages").json() == []


def test_model_failure_is_returned_as_assistant_message(store):
    llm = FakeLanguageModel(error=ConnectionError("Could not connect to the endpoint URL"))
    client = TestClient(create_app(store, llm, NullObservabilityHandler()))

    body = client.post("/api/chat/abc", json={"question": "latest"}).json()

    assert body["role"] == "assistant"
    assert body["content"].startswith("Network error.")


def test_example_questions(client):
    assert client.get("/api/chat/examples").json() == {"questions": list(EXAMPLE_QUESTIONS)}


def test_store_calls_run_off_the_event_loop():
    store = LoopRecordingRepository()
    client = TestClient(create_app(store, FakeLanguageModel(), NullObservabilityHandler()))

    assert _upload(client, "Date,Close Price\n2024-01-02,1610\n").status_code == 200
    assert client.get("/health").status_code == 200

    assert store.on_loop == {"upsert": False, "ping": False}


def test_traces_are_flushed_on_shutdown():
    observability = CountingObservability()
    app = create_app(InMemoryStockRepository(), FakeLanguageModel(), observability)

    with TestClient(app) as client:
        client.get("/health")
        assert observability.flushes == 0

    assert observability.flushes == 1
