import pytest

from atelier import gemini, pipeline, retry
from tests.helpers import FakeClient, FakeModels


@pytest.fixture
def delays(monkeypatch):
    """Record backoff waits instead of sleeping."""
    recorded: list[float] = []

    async def fake_wait(seconds: float) -> None:
        recorded.append(seconds)

    monkeypatch.setattr(retry, "_wait", fake_wait)
    return recorded


@pytest.fixture
def fake_gemini(delays):
    """Install a scripted Gemini client; returns a factory taking the responses."""
    def install(*responses) -> FakeModels:
        client = FakeClient(responses)
        gemini.set_client(client)
        return client.models

    yield install
    gemini.reset_client()


@pytest.fixture(autouse=True)
def clear_sessions():
    pipeline._sessions.clear()
    yield
    pipeline._sessions.clear()
