import asyncio
import logging
from typing import List, Optional

from errors import EmptyBackendResponse, FieldAccessFailure, MissingInput
from gemini_client import PredictionBackend, build_response_schema, build_safety_settings
from models import SafetyThreshold
from prompts import PromptTemplate, build_prompt, get_template
from schemas import PredictionResult, StudentProfile
from scoring import parse_predictions

logger = logging.getLogger(__name__)

async def predict(
    profile: Optional[StudentProfile],
    colleges: Optional[List[str]],
    backend: PredictionBackend,
    template: Optional[PromptTemplate] = None,
    safety_threshold: SafetyThreshold = SafetyThreshold.BLOCK_MEDIUM_AND_ABOVE,
    timeout: Optional[float] = None
) -> List[PredictionResult]:
    """
    Predict admission chances for every college in the list.

    validate -> build prompt -> call backend -> parse -> clamp. All or nothing:
    any failure raises and no partial predictions are returned.

    Args:
        profile: Student profile
        colleges: Target colleges
        backend: Generative backend to delegate to
        template: Prompt template, canonical revision when omitted
        safety_threshold: Filtering sensitivity applied to every harm category
        timeout: Seconds to wait for the backend, unbounded when None

    Returns:
        One clamped prediction per college
    """
    if profile is None or not colleges:
        raise MissingInput("Missing student profile or college list.")

    template = template or get_template()

    try:
        prompt = build_prompt(profile, colleges, template)
    except (AttributeError, TypeError, ValueError) as e:
        raise FieldAccessFailure(f"Could not render profile into prompt: {e}") from e

    schema = build_response_schema(template.reasoning_style)
    safety_settings = build_safety_settings(safety_threshold)

    logger.info(
        "Requesting predictions for %d colleges with template %s",
        len(colleges), template.name.value
    )
    try:
        text = await asyncio.wait_for(
            backend.generate(prompt, schema, safety_settings),
            timeout=timeout
        )
    except asyncio.TimeoutError as e:
        raise EmptyBackendResponse(f"Backend did not answer within {timeout}s") from e

    predictions = parse_predictions(text, template.reasoning_style, expected_count=len(colleges))
    logger.info("Returning %d predictions", len(predictions))
    return predictions
