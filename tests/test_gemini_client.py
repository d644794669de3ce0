"""
Unit tests for the Gemini backend with the SDK model replaced by a stub.
"""

from types import SimpleNamespace

import pytest
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import HarmBlockThreshold, HarmCategory

import gemini_client
from errors import BackendInvocationFailure, EmptyBackendResponse
from models import ReasoningStyle, SafetyThreshold


class StubResponse:
    def __init__(self, text=None, block_reason=0):
        self._text = text
        self.prompt_feedback = SimpleNamespace(block_reason=block_reason)

    @property
    def text(self):
        if self._text is None:
            raise ValueError("The response has no parts.")
        return self._text


class StubModel:
    def __init__(self, model_name):
        self.model_name = model_name
        self.result = StubResponse('[{"college_name": "Tufts"}]')
        self.kwargs = None

    async def generate_content_async(self, prompt, **kwargs):
        self.kwargs = kwargs
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def backend(monkeypatch):
    monkeypatch.setattr(gemini_client.genai, "configure", lambda api_key: None)
    monkeypatch.setattr(gemini_client.genai, "GenerativeModel", StubModel)
    return gemini_client.GeminiBackend(api_key="test-key", model_name="gemini-2.5-pro", timeout=30)


def test_requires_api_key():
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        gemini_client.GeminiBackend(api_key="", model_name="gemini-2.5-pro")


def test_structured_schema_requires_all_reasoning_parts():
    schema = gemini_client.build_response_schema(ReasoningStyle.STRUCTURED)

    assert schema["type"] == "ARRAY"
    item = schema["items"]
    assert item["required"] == ["college_name", "admission_chance_percent", "reasoning"]
    assert item["properties"]["admission_chance_percent"] == {"type": "INTEGER"}
    assert item["properties"]["reasoning"]["required"] == ["strengths", "weaknesses", "advice"]


def test_text_schema_uses_string_reasoning():
    schema = gemini_client.build_response_schema(ReasoningStyle.TEXT)

    assert schema["items"]["properties"]["reasoning"] == {"type": "STRING"}


def test_safety_settings_cover_every_category():
    safety = gemini_client.build_safety_settings(SafetyThreshold.BLOCK_ONLY_HIGH)

    assert set(safety) == {
        HarmCategory.HARM_CATEGORY_HARASSMENT,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    }
    assert set(safety.values()) == {HarmBlockThreshold.BLOCK_ONLY_HIGH}


@pytest.mark.asyncio
async def test_generate_requests_json_output(backend):
    schema = gemini_client.build_response_schema(ReasoningStyle.TEXT)
    safety = gemini_client.build_safety_settings()

    text = await backend.generate("prompt", schema, safety)

    assert text == '[{"college_name": "Tufts"}]'
    assert backend.model.kwargs["generation_config"] == {
        "response_mime_type": "application/json",
        "response_schema": schema,
    }
    assert backend.model.kwargs["safety_settings"] is safety
    assert backend.model.kwargs["request_options"] == {"timeout": 30}


@pytest.mark.asyncio
async def test_deadline_is_empty_response(backend):
    backend.model.result = google_exceptions.DeadlineExceeded("too slow")

    with pytest.raises(EmptyBackendResponse):
        await backend.generate("prompt", {}, {})


@pytest.mark.asyncio
async def test_api_error_is_invocation_failure(backend):
    backend.model.result = google_exceptions.ResourceExhausted("quota")

    with pytest.raises(BackendInvocationFailure):
        await backend.generate("prompt", {}, {})


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    StubResponse(text=None),
    StubResponse(text="  "),
    StubResponse(text="[]", block_reason=2),
])
async def test_filtered_or_blank_output_is_empty_response(backend, response):
    backend.model.result = response

    with pytest.raises(EmptyBackendResponse):
        await backend.generate("prompt", {}, {})


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [ConnectionError("socket reset"), ValueError("bad request payload")])
async def test_transport_and_sdk_errors_are_invocation_failures(backend, error):
    backend.model.result = error

    with pytest.raises(BackendInvocationFailure) as excinfo:
        await backend.generate("prompt", {}, {})

    assert excinfo.value.__cause__ is error
