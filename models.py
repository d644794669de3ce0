import enum

class ValuesMixin:
    @classmethod
    def values(cls):
        return [member.value for member in cls]

# Enums
class ReasoningStyle(str, enum.Enum):
    TEXT = "TEXT"
    STRUCTURED = "STRUCTURED"

class TemplateName(ValuesMixin, str, enum.Enum):
    PLAIN = "plain"
    STRUCTURED = "structured"
    GPA_TREND = "gpa_trend"
    ACTIVITY_QUALITY = "activity_quality"
    MISSING_DATA = "missing_data"

class SafetyThreshold(ValuesMixin, str, enum.Enum):
    BLOCK_NONE = "BLOCK_NONE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
