"""Shared fixtures. Nothing here talks to AWS."""

import pytest
from fastapi.testclient import TestClient

from agents import safety


class FakeGenerator:
    """Stands in for the Bedrock call; records every prompt it receives."""

    def __init__(self, reply="A calm sea under a silver moon.", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_generate():
    return FakeGenerator()


@pytest.fixture
def failing_generate():
    return FakeGenerator(error=RuntimeError("ThrottlingException: account 1234 quota exceeded"))


@pytest.fixture
def api_client(fake_generate):
    from api.main import app, get_generator

    app.dependency_overrides[get_generator] = lambda: fake_generate
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def clear_guardrail_cache():
    safety._find_or_create.cache_clear()
    yield
    safety._find_or_create.cache_clear()
