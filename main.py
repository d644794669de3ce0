import logging

from fastapi import FastAPI, Depends, Request
from fastapi.responses import PlainTextResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import MissingInput, PredictionError
from gemini_client import PredictionBackend, get_gemini_backend
from prompts import PromptTemplate, get_template
import schemas
import service

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Missing student profile or college list."
PREDICTION_ERROR_MESSAGE = "An error occurred while getting predictions."

# Create FastAPI app
app = FastAPI(title="Admission Chance Predictor")

# Fail fast on bad configuration and build the backend once
@app.on_event("startup")
def startup_event():
    settings.validate()
    app.state.backend = get_gemini_backend()
    logger.info(
        "Backend ready: model=%s template=%s", settings.GEMINI_MODEL, settings.PROMPT_TEMPLATE
    )

# Global Custom Error Handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing body -> 400, any other malformed input -> generic 500."""
    for error in exc.errors():
        if tuple(error.get("loc", ())) == ("body",) and error.get("type") == "missing":
            return PlainTextResponse(MISSING_INPUT_MESSAGE, status_code=400)
    logger.error("Request validation failed: %s", exc.errors())
    return PlainTextResponse(PREDICTION_ERROR_MESSAGE, status_code=500)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions."""
    logger.exception("Unhandled error: %s", exc)
    return PlainTextResponse(PREDICTION_ERROR_MESSAGE, status_code=500)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

def get_backend(request: Request) -> PredictionBackend:
    """Dependency returning the backend built at startup."""
    return request.app.state.backend

def get_prompt_template() -> PromptTemplate:
    """Dependency returning the configured prompt template."""
    return get_template(settings.template_name())

# ============================================
# ENDPOINTS
# ============================================

@app.get("/", response_model=schemas.HealthResponse)
async def health():
    """Health check endpoint."""
    return schemas.HealthResponse(service="admission-chance-predictor", template=settings.PROMPT_TEMPLATE)

@app.post("/get-predictions", response_model=schemas.PredictionsResponse)
async def get_predictions(
    request: schemas.PredictionRequest,
    backend: PredictionBackend = Depends(get_backend),
    template: PromptTemplate = Depends(get_prompt_template)
):
    """
    Predict admission chances for each requested college.
    Returns 400 if profile or college list is missing.
    Returns 500 with a generic message on any other failure.
    """
    try:
        predictions = await service.predict(
            request.profile,
            request.colleges,
            backend=backend,
            template=template,
            safety_threshold=settings.safety_threshold(),
            timeout=settings.BACKEND_TIMEOUT_SECONDS
        )
    except MissingInput:
        return PlainTextResponse(MISSING_INPUT_MESSAGE, status_code=400)
    except PredictionError as e:
        logger.error("Prediction failed: %s: %s", type(e).__name__, e, exc_info=True)
        return PlainTextResponse(PREDICTION_ERROR_MESSAGE, status_code=500)
    except Exception as e:
        # Answered here, inside CORSMiddleware, so the 500 keeps its CORS headers
        logger.exception("Unexpected prediction error: %s", e)
        return PlainTextResponse(PREDICTION_ERROR_MESSAGE, status_code=500)

    return schemas.PredictionsResponse(predictions=predictions)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
