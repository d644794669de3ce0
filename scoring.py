"""
Normalization of backend predictions.
"""

import json
from typing import List

from pydantic import ValidationError

from errors import EmptyBackendResponse, MalformedBackendResponse
from models import ReasoningStyle
from prompts import CHANCE_CEILING, CHANCE_FLOOR
from schemas import PredictionResult, StructuredReasoning

def clamp_chance(value: int, low: int = CHANCE_FLOOR, high: int = CHANCE_CEILING) -> int:
    """Force value into the closed interval [low, high]."""
    return max(low, min(high, value))

def parse_predictions(
    text: str,
    style: ReasoningStyle,
    expected_count: int
) -> List[PredictionResult]:
    """
    Parse and normalize raw backend output.

    The backend is not trusted to respect the percentage range stated in the
    prompt, so every chance is clamped here regardless of what came back.

    Args:
        text: Raw JSON text from the backend
        style: Reasoning shape the deployed template asks for
        expected_count: Number of colleges in the request

    Returns:
        Predictions in backend order, chances clamped

    Raises:
        EmptyBackendResponse: text is empty
        MalformedBackendResponse: text does not match the declared schema
    """
    if not text or not text.strip():
        raise EmptyBackendResponse("Backend returned no content")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedBackendResponse(f"Backend output is not JSON: {e}") from e

    if not isinstance(payload, list):
        raise MalformedBackendResponse(f"Expected a JSON array, got {type(payload).__name__}")

    if len(payload) != expected_count:
        raise MalformedBackendResponse(
            f"Expected {expected_count} predictions, backend returned {len(payload)}"
        )

    predictions = []
    for index, item in enumerate(payload):
        try:
            prediction = PredictionResult.model_validate(item)
        except ValidationError as e:
            raise MalformedBackendResponse(f"Prediction {index} does not match schema: {e}") from e

        expected_type = StructuredReasoning if style == ReasoningStyle.STRUCTURED else str
        if not isinstance(prediction.reasoning, expected_type):
            raise MalformedBackendResponse(
                f"Prediction {index} reasoning is not {style.value.lower()}"
            )

        prediction.admission_chance_percent = clamp_chance(prediction.admission_chance_percent)
        predictions.append(prediction)

    return predictions
