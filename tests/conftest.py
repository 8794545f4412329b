"""Shared fixtures for the review core tests."""

from datetime import datetime, timedelta, timezone

import pytest

from lqa_review.domain.models import JobData, Placeholder, PlaceholderKind, TranslationUnit
from lqa_review.logging.context import clear_log_context
from lqa_review.quality.loader import parse_quality_model
from lqa_review.versioning import VersionedJob

REVIEW_TIME = datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)

QUALITY_MODEL_DATA = {
    "id": "test-model",
    "name": "Test Model",
    "version": "1.0",
    "description": "Model used by the test suite",
    "severities": [
        {"id": "minor", "label": "Minor", "weight": 1, "description": "Small issue"},
        {"id": "major", "label": "Major", "weight": 5, "description": "Meaning affected"},
    ],
    "errorCategories": [
        {
            "id": "accuracy",
            "label": "Accuracy",
            "description": "Target does not match source",
            "subcategories": [
                {"id": "mistranslation", "label": "Mistranslation", "description": "Wrong meaning"},
                {"id": "omission", "label": "Omission", "description": "Missing content"},
            ],
        },
        {
            "id": "fluency",
            "label": "Fluency",
            "description": "Target is not well formed",
            "subcategories": [
                {"id": "grammar", "label": "Grammar", "description": "Grammar errors"},
            ],
        },
    ],
}


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def name_placeholder():
    """Standalone variable placeholder rendered as 'World'."""
    return Placeholder(kind=PlaceholderKind.STANDALONE, code="name", sample="World")


@pytest.fixture
def bold_tags():
    """Start/end tag pair for <b>...</b>."""
    return (
        Placeholder(kind=PlaceholderKind.START_TAG, code="<b>"),
        Placeholder(kind=PlaceholderKind.END_TAG, code="</b>"),
    )


@pytest.fixture
def make_unit():
    """Factory for translation units with sensible defaults."""

    def _make_unit(guid="tu-1", target=None, source=None, **kwargs):
        return TranslationUnit(
            guid=guid,
            rid=kwargs.pop("rid", "app.json"),
            sid=kwargs.pop("sid", guid),
            source_content=source if source is not None else ["Source text"],
            target_content=target if target is not None else ["Target text"],
            **kwargs,
        )

    return _make_unit


@pytest.fixture
def sample_job(make_unit, name_placeholder):
    """Three-unit job: a placeholder greeting, a plain sentence and a button label."""
    return JobData(
        source_lang="en",
        target_lang="fr",
        tus=[
            make_unit(
                "tu-1",
                source=["Hello ", name_placeholder, "!"],
                target=["Bonjour ", name_placeholder, " !"],
            ),
            make_unit(
                "tu-2",
                source=["The cat sat on the mat"],
                target=["Le chat est assis sur le tapis"],
            ),
            make_unit("tu-3", source=["Save"], target=["Enregistrer"]),
        ],
    )


@pytest.fixture
def versioned_job(sample_job):
    """Fresh two-state versioned job."""
    return VersionedJob.from_job(sample_job)


@pytest.fixture
def fixed_clock():
    """Clock returning REVIEW_TIME, advancing one second per call."""
    calls = {"count": 0}

    def _clock():
        value = REVIEW_TIME + timedelta(seconds=calls["count"])
        calls["count"] += 1
        return value

    return _clock


@pytest.fixture
def quality_model():
    return parse_quality_model(QUALITY_MODEL_DATA, source="test")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove review core environment variables for isolation."""
    for name in ("LOG_LEVEL", "LQA_QUALITY_MODEL_PATH", "LQA_ENVIRONMENT"):
        # setenv records the prior state so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield monkeypatch
