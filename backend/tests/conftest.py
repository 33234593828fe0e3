"""
Shared pytest fixtures for backend tests.
Replaces the Anthropic client with a fake so no test reaches the network.
"""
import pytest
import sys
import os
from types import SimpleNamespace

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from task_prioritizer import gateway


class FakeMessages:
    """Stands in for client.messages; records calls and replays a canned reply or error."""

    def __init__(self):
        self.text = ""
        self.error = None
        self.stop_reason = "end_turn"
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=self.text)],
            stop_reason=self.stop_reason,
        )


@pytest.fixture
def fake_messages(monkeypatch):
    """
    Route gateway calls to a FakeMessages instance.
    Set .text for the model reply or .error to make the call raise.
    """
    messages = FakeMessages()
    monkeypatch.setattr(gateway, "ANTHROPIC_API_KEY", "test-key")
    monkeypatch.setattr(gateway, "_client", SimpleNamespace(messages=messages))
    return messages


@pytest.fixture
def app_client(fake_messages):
    """
    Create a test client for the FastAPI app.
    The context manager runs the lifespan, giving each test a fresh board.
    """
    from fastapi.testclient import TestClient
    from task_prioritizer import main

    with TestClient(main.app) as client:
        yield client
