"""
Shared fixtures: a deterministic fake backend and an API client wired to it.
"""

import json

import pytest
from fastapi.testclient import TestClient

import main
from prompts import get_template
from models import TemplateName


class FakeBackend:
    """Backend double returning canned text and recording every call."""

    def __init__(self, payload=None, text=None, error=None):
        self.payload = payload
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, prompt, output_schema, safety_settings):
        self.calls.append(
            {"prompt": prompt, "output_schema": output_schema, "safety_settings": safety_settings}
        )
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return self.text
        return json.dumps(self.payload)


def structured_prediction(college, percent):
    return {
        "college_name": college,
        "admission_chance_percent": percent,
        "reasoning": {
            "strengths": "Strong debate record.",
            "weaknesses": "No AP scores reported.",
            "advice": "Take one AP exam in a core subject.",
        },
    }


@pytest.fixture
def backend_factory():
    return FakeBackend


@pytest.fixture
def make_prediction():
    return structured_prediction


@pytest.fixture
def profile_data():
    return {"gpa": 3.8, "sat": 1450, "ecs": ["Debate"], "awards": []}


@pytest.fixture
def fake_backend():
    return FakeBackend(payload=[structured_prediction("Tufts", 42)])


@pytest.fixture
def client(fake_backend):
    """API client with the fake backend and canonical template injected."""
    main.app.dependency_overrides[main.get_backend] = lambda: fake_backend
    main.app.dependency_overrides[main.get_prompt_template] = lambda: get_template(TemplateName.MISSING_DATA)
    yield TestClient(main.app, raise_server_exceptions=False)
    main.app.dependency_overrides.clear()
