import logging
from typing import Dict, Optional, Protocol

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from config import settings
from errors import BackendInvocationFailure, EmptyBackendResponse
from models import ReasoningStyle, SafetyThreshold

logger = logging.getLogger(__name__)

HARM_CATEGORIES = (
    HarmCategory.HARM_CATEGORY_HARASSMENT,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


class PredictionBackend(Protocol):
    """Anything that turns a prompt plus output schema into JSON text."""

    async def generate(self, prompt: str, output_schema: Dict, safety_settings: Dict) -> str:
        ...


def build_response_schema(style: ReasoningStyle) -> Dict:
    """
    Output schema the backend must follow: an array with one object per college.

    Args:
        style: TEXT for a free-text reasoning, STRUCTURED for strengths/weaknesses/advice

    Returns:
        Gemini response schema dict
    """
    if style == ReasoningStyle.STRUCTURED:
        reasoning = {
            "type": "OBJECT",
            "properties": {
                "strengths": {"type": "STRING"},
                "weaknesses": {"type": "STRING"},
                "advice": {"type": "STRING"},
            },
            "required": ["strengths", "weaknesses", "advice"],
        }
    else:
        reasoning = {"type": "STRING"}

    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {
                "college_name": {"type": "STRING"},
                "admission_chance_percent": {"type": "INTEGER"},
                "reasoning": reasoning,
            },
            "required": ["college_name", "admission_chance_percent", "reasoning"],
        },
    }


def build_safety_settings(threshold: SafetyThreshold = SafetyThreshold.BLOCK_MEDIUM_AND_ABOVE) -> Dict:
    """Same filtering sensitivity for every harm category."""
    block = HarmBlockThreshold[SafetyThreshold(threshold).value]
    return {category: block for category in HARM_CATEGORIES}


class GeminiBackend:
    """Prediction backend served by a Gemini model."""

    def __init__(self, api_key: str, model_name: str, timeout: Optional[float] = None):
        if not api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")

        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)
        self.timeout = timeout

    async def generate(self, prompt: str, output_schema: Dict, safety_settings: Dict) -> str:
        generation_config = {
            "response_mime_type": "application/json",
            "response_schema": output_schema,
        }
        request_options = {"timeout": self.timeout} if self.timeout else None

        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=generation_config,
                safety_settings=safety_settings,
                request_options=request_options,
            )
        except google_exceptions.DeadlineExceeded as e:
            raise EmptyBackendResponse(f"{self.model_name} timed out") from e
        except google_exceptions.GoogleAPIError as e:
            raise BackendInvocationFailure(f"{self.model_name} call failed: {e}") from e
        except Exception as e:
            # Transport, auth and SDK request-building errors
            raise BackendInvocationFailure(f"{self.model_name} call failed: {type(e).__name__}: {e}") from e

        feedback = getattr(response, "prompt_feedback", None)
        if feedback is not None and getattr(feedback, "block_reason", None):
            logger.warning("Prompt blocked by safety filter: %s", feedback.block_reason)
            raise EmptyBackendResponse("Prompt blocked by safety filter")

        try:
            text = response.text
        except ValueError as e:
            # Raised when the only candidate was filtered and carries no parts
            raise EmptyBackendResponse("Backend returned no content") from e

        if not text or not text.strip():
            raise EmptyBackendResponse("Backend returned no content")
        return text


def get_gemini_backend() -> GeminiBackend:
    """Initialize and return the configured Gemini backend."""
    return GeminiBackend(
        api_key=settings.GEMINI_API_KEY,
        model_name=settings.GEMINI_MODEL,
        timeout=settings.BACKEND_TIMEOUT_SECONDS,
    )
