"""Tests for wire (de)serialization of jobs and units."""

from datetime import datetime, timezone

import pytest

from lqa_review.domain.exceptions import JobDataError
from lqa_review.domain.models import Placeholder, PlaceholderKind
from lqa_review.domain.wire import (
    item_from_wire,
    item_to_wire,
    job_from_wire,
    job_to_wire,
    unit_from_wire,
    unit_to_wire,
)

RECORD = {
    "guid": "tu-1",
    "rid": "home.json",
    "sid": "greeting",
    "nsrc": ["Hello ", {"t": "x", "v": "name", "s": "World"}, "!"],
    "ntgt": ["Bonjour ", {"t": "x", "v": "name", "s": "World"}, " !"],
    "ts": 1762257600000,
    "qa": {"sev": "major", "cat": "accuracy.mistranslation", "w": 5, "notes": "wrong"},
    "notes": {"desc": "Greeting on the home page"},
    "prj": "web",
}


class TestItemConversion:
    """Tests for normalized item conversion."""

    def test_string_passthrough(self):
        assert item_from_wire("text") == "text"

    def test_placeholder_from_wire(self):
        item = item_from_wire({"t": "bx", "v": "<b>", "v1": "<strong>"})

        assert item == Placeholder(kind=PlaceholderKind.START_TAG, code="<b>", alt_code="<strong>")

    def test_unknown_shapes_preserved(self):
        assert item_from_wire({"t": "zz", "v": "?"}) == {"t": "zz", "v": "?"}
        assert item_from_wire({"t": "x"}) == {"t": "x"}
        assert item_from_wire(42) == 42

    def test_placeholder_to_wire_omits_absent_fields(self):
        placeholder = Placeholder(kind="x", code="{0}")

        assert item_to_wire(placeholder) == {"t": "x", "v": "{0}"}


class TestUnitConversion:
    """Tests for translation unit records."""

    def test_unit_from_wire(self):
        unit = unit_from_wire(RECORD)

        assert unit.guid == "tu-1"
        assert isinstance(unit.target_content[1], Placeholder)
        assert unit.reviewed_at == datetime(2025, 11, 4, 12, 0, 0, tzinfo=timezone.utc)
        assert unit.quality_assessment.severity_id == "major"
        assert unit.quality_assessment.weight == 5.0
        assert unit.notes_text == "Greeting on the home page"
        assert unit.extra == {"prj": "web"}

    def test_zero_timestamp_means_unreviewed(self):
        unit = unit_from_wire({**RECORD, "ts": 0})

        assert unit.reviewed_at is None

    def test_unit_round_trip_preserves_record(self):
        assert unit_to_wire(unit_from_wire(RECORD)) == RECORD

    def test_missing_guid_raises(self):
        with pytest.raises(JobDataError) as exc_info:
            unit_from_wire({"ntgt": ["x"]})

        assert "guid" in str(exc_info.value)

    def test_non_mapping_record_raises(self):
        with pytest.raises(JobDataError):
            unit_from_wire(["not", "a", "record"])

    def test_candidates_converted(self):
        unit = unit_from_wire({**RECORD, "candidates": [["A ", {"t": "x", "v": "name"}]]})

        assert isinstance(unit.candidates[0][1], Placeholder)


class TestJobConversion:
    """Tests for job documents."""

    def test_job_from_wire(self):
        job = job_from_wire(
            {"sourceLang": "en", "targetLang": "fr", "tus": [RECORD], "updatedAt": "2025-11-04"}
        )

        assert job.source_lang == "en"
        assert job.target_lang == "fr"
        assert len(job.tus) == 1
        assert job.extra == {"updatedAt": "2025-11-04"}

    def test_duplicate_guids_raise_job_data_error(self):
        with pytest.raises(JobDataError) as exc_info:
            job_from_wire({"tus": [RECORD, RECORD]})

        assert "Duplicate" in str(exc_info.value)

    def test_tus_must_be_list(self):
        with pytest.raises(JobDataError):
            job_from_wire({"tus": {"guid": "x"}})

    def test_job_to_wire_with_subset(self):
        job = job_from_wire({"sourceLang": "en", "targetLang": "fr", "tus": [RECORD]})

        document = job_to_wire(job, units=[])

        assert document == {"sourceLang": "en", "targetLang": "fr", "tus": []}
