"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from web.app import create_app


@pytest.fixture(autouse=True)
def no_webhook_token(monkeypatch):
    monkeypatch.delenv("VYLOBOT_WEBHOOK_TOKEN", raising=False)


@pytest.fixture
def client(components):
    with TestClient(create_app(components)) as c:
        yield c
