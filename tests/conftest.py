"""Pytest configuration and shared fixtures."""

import json
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add tests directory to path so helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from webhook_helpers import WEBHOOK_SECRET, FakeUserStore, sign  # noqa: E402

# Settings are read at import time, so the environment must be ready first
os.environ["SIGNING_SECRET"] = WEBHOOK_SECRET
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"

from fastapi.testclient import TestClient  # noqa: E402

from app.server import app  # noqa: E402
from app.services.config import settings  # noqa: E402


@pytest.fixture
def user_store(monkeypatch):
    """Route every reconciler write into an in-memory store."""
    store = FakeUserStore()
    monkeypatch.setattr("app.services.reconciler.User", store)
    monkeypatch.setattr("app.services.reconciler.ensure_db_initialized", AsyncMock())
    return store


@pytest.fixture
def client():
    """Create a test client (startup hooks are not run)."""
    return TestClient(app)


@pytest.fixture
def post_event(client):
    """POST a signed event to the webhook endpoint."""

    def _post(event, msg_id: str = "msg_2abc", headers=None, path: str = "/api/webhooks"):
        body = event if isinstance(event, str) else json.dumps(event)
        return client.post(
            path,
            content=body,
            headers=headers if headers is not None else sign(body, msg_id=msg_id),
        )

    return _post


@pytest.fixture
def no_signing_secret(monkeypatch):
    monkeypatch.setattr(settings, "SIGNING_SECRET", None)
