"""
Pydantic schemas for API requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Optional, Union

def _as_list(value) -> list:
    """Wrap a bare value into a list; None becomes an empty list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]

# Student Profile Schemas
class APScore(BaseModel):
    model_config = ConfigDict(extra="ignore")

    subject: Any = ""
    score: Any = None

class StudentProfile(BaseModel):
    """
    Caller-supplied profile. Every field is optional and read permissively:
    values keep the shape the caller sent and are rendered as-is.
    """
    model_config = ConfigDict(extra="ignore")

    # Demographics
    gender: Optional[Any] = None
    is_citizen: Optional[Any] = None
    attends_us_school: Optional[Any] = None

    # Academics
    gpa: Optional[Any] = None
    gpa_9: Optional[Any] = None
    gpa_10: Optional[Any] = None
    gpa_11: Optional[Any] = None
    sat: Optional[Any] = None
    ap_scores: List[APScore] = []

    # Activities
    ecs: List[str] = []
    awards: List[str] = []

    @field_validator("ecs", "awards", mode="before")
    @classmethod
    def coerce_text_list(cls, value):
        # JSON null or a bare string must not reach the prompt builder's join
        return [item if isinstance(item, str) else str(item) for item in _as_list(value)]

    @field_validator("ap_scores", mode="before")
    @classmethod
    def coerce_ap_scores(cls, value):
        if isinstance(value, dict) and "subject" not in value:
            # {"Calculus BC": 5} style mapping
            value = [{"subject": subject, "score": score} for subject, score in value.items()]
        return [item if isinstance(item, dict) else {"subject": item} for item in _as_list(value)]

    def grade_gpas(self) -> List[tuple]:
        """Per-grade GPAs that were actually supplied, oldest first."""
        grades = [("9th", self.gpa_9), ("10th", self.gpa_10), ("11th", self.gpa_11)]
        return [(grade, value) for grade, value in grades if value is not None]

class PredictionRequest(BaseModel):
    profile: Optional[StudentProfile] = None
    colleges: Optional[List[str]] = None

# Prediction Schemas
class StructuredReasoning(BaseModel):
    strengths: str
    weaknesses: str
    advice: str

class PredictionResult(BaseModel):
    # Backend may add keys of its own; they pass through untouched
    model_config = ConfigDict(extra="allow")

    college_name: str
    admission_chance_percent: int
    reasoning: Union[StructuredReasoning, str]

class PredictionsResponse(BaseModel):
    predictions: List[PredictionResult] = Field(default_factory=list)

# Health Schema
class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
    template: str
