import os

from models import SafetyThreshold, TemplateName

class Settings:
    """Application settings loaded from environment variables."""

    # API Keys
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

    # Model
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-pro")
    PROMPT_TEMPLATE: str = os.getenv("PROMPT_TEMPLATE", TemplateName.MISSING_DATA.value)
    SAFETY_THRESHOLD: str = os.getenv("SAFETY_THRESHOLD", SafetyThreshold.BLOCK_MEDIUM_AND_ABOVE.value)
    BACKEND_TIMEOUT_SECONDS: float = float(os.getenv("BACKEND_TIMEOUT_SECONDS", "60"))

    # Server
    PORT: int = int(os.getenv("PORT", "3000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # CORS - public prediction form, every origin allowed
    ALLOWED_ORIGINS: list = ["*"]

    @classmethod
    def validate(cls):
        """Validate required environment variables."""
        if not cls.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if cls.PROMPT_TEMPLATE not in TemplateName.values():
            raise ValueError(
                f"PROMPT_TEMPLATE must be one of {TemplateName.values()}, got {cls.PROMPT_TEMPLATE!r}"
            )
        if cls.SAFETY_THRESHOLD not in SafetyThreshold.values():
            raise ValueError(
                f"SAFETY_THRESHOLD must be one of {SafetyThreshold.values()}, got {cls.SAFETY_THRESHOLD!r}"
            )
        if cls.BACKEND_TIMEOUT_SECONDS <= 0:
            raise ValueError("BACKEND_TIMEOUT_SECONDS must be positive")

    @classmethod
    def template_name(cls) -> TemplateName:
        return TemplateName(cls.PROMPT_TEMPLATE)

    @classmethod
    def safety_threshold(cls) -> SafetyThreshold:
        return SafetyThreshold(cls.SAFETY_THRESHOLD)

settings = Settings()
