"""
Unit tests for startup configuration checks.
"""

import pytest

from config import Settings
from models import SafetyThreshold, TemplateName


@pytest.fixture
def valid_settings(monkeypatch):
    monkeypatch.setattr(Settings, "GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(Settings, "PROMPT_TEMPLATE", "missing_data")
    monkeypatch.setattr(Settings, "SAFETY_THRESHOLD", "BLOCK_MEDIUM_AND_ABOVE")
    monkeypatch.setattr(Settings, "BACKEND_TIMEOUT_SECONDS", 60.0)
    return Settings


def test_valid_settings_pass(valid_settings):
    valid_settings.validate()

    assert valid_settings.template_name() == TemplateName.MISSING_DATA
    assert valid_settings.safety_threshold() == SafetyThreshold.BLOCK_MEDIUM_AND_ABOVE


@pytest.mark.parametrize("attr,value,message", [
    ("GEMINI_API_KEY", "", "GEMINI_API_KEY"),
    ("PROMPT_TEMPLATE", "v6", "PROMPT_TEMPLATE"),
    ("SAFETY_THRESHOLD", "BLOCK_EVERYTHING", "SAFETY_THRESHOLD"),
    ("BACKEND_TIMEOUT_SECONDS", 0, "BACKEND_TIMEOUT_SECONDS"),
])
def test_invalid_settings_fail_fast(valid_settings, monkeypatch, attr, value, message):
    monkeypatch.setattr(Settings, attr, value)

    with pytest.raises(ValueError, match=message):
        valid_settings.validate()


def test_no_origin_restriction():
    assert Settings.ALLOWED_ORIGINS == ["*"]


def test_enum_values_listed_for_validation_messages():
    assert TemplateName.values() == ["plain", "structured", "gpa_trend", "activity_quality", "missing_data"]
    assert SafetyThreshold.values() == [
        "BLOCK_NONE", "BLOCK_ONLY_HIGH", "BLOCK_MEDIUM_AND_ABOVE", "BLOCK_LOW_AND_ABOVE",
    ]
