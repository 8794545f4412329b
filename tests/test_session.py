"""Tests for review sessions and unit search."""

import json
from pathlib import Path

import pytest

from lqa_review import open_session
from lqa_review.config import AppConfig
from lqa_review.domain.exceptions import JobDataError
from lqa_review.domain.models import JobData
from lqa_review.domain.wire import job_to_wire
from lqa_review.quality import QualityModelError
from lqa_review.session import ReviewSession, filter_units
from lqa_review.versioning import FileStatus, VersionedJob

DEFAULT_MODEL = Path(__file__).parent.parent / "quality_models" / "default.json"


def ticking(*values):
    """Monotonic clock stub returning the given readings in order."""
    readings = iter(values)
    return lambda: next(readings)


@pytest.fixture
def session(sample_job, quality_model, fixed_clock):
    return open_session(sample_job, quality_model=quality_model, clock=fixed_clock)


class TestOpenSession:
    """Tests for session construction."""

    def test_from_job_data(self, sample_job):
        session = open_session(sample_job)

        assert isinstance(session, ReviewSession)
        assert session.job.status == FileStatus.NEW
        assert session.quality_model is None
        assert session.timers is not None

    def test_from_wire_document(self, sample_job):
        session = open_session(job_to_wire(sample_job))

        assert session.job.guids == ["tu-1", "tu-2", "tu-3"]
        assert session.job.metadata.target_lang == "fr"

    def test_with_saved_translations(self, sample_job):
        saved = job_to_wire(sample_job)
        saved["tus"] = [
            {"guid": "tu-3", "ntgt": ["Sauvegarder"], "ts": 1762257600000},
        ]

        session = open_session(job_to_wire(sample_job), saved)

        assert session.job.status == FileStatus.LOADED
        assert session.job.unit("tu-3").target_content == ["Sauvegarder"]
        assert session.job.unit("tu-3").is_reviewed
        assert session.job.original["tu-3"].target_content == ["Enregistrer"]

    def test_malformed_document(self):
        with pytest.raises(JobDataError):
            open_session({"tus": [{"ntgt": ["no guid"]}]})

    def test_model_loaded_from_config(self, sample_job):
        config = AppConfig(quality_model_path=str(DEFAULT_MODEL))

        session = open_session(sample_job, config=config)

        assert session.quality_model.id == "default"
        assert session.quality_model.severity_weight("critical") == 10

    def test_missing_model_file(self, sample_job, tmp_path):
        config = AppConfig(quality_model_path=str(tmp_path / "absent.json"))

        with pytest.raises(QualityModelError):
            open_session(sample_job, config=config)

    def test_explicit_model_wins_over_config(self, sample_job, quality_model):
        config = AppConfig(quality_model_path=str(DEFAULT_MODEL))

        session = open_session(sample_job, config=config, quality_model=quality_model)

        assert session.quality_model is quality_model


class TestEditingAndFocus:
    """Tests for review transitions driven through the session."""

    def test_focus_loss_auto_marks_edited_unit(self, session):
        session.focus("tu-2")
        session.edit("tu-2", ["Le chat dort"])

        auto_marked = session.focus("tu-3")

        assert auto_marked == "tu-2"
        assert session.job.unit("tu-2").is_reviewed

    def test_focus_loss_skips_unit_matching_original(self, session):
        session.focus("tu-2")
        session.edit("tu-2", ["Le chat ", "est assis sur le tapis"])

        assert session.focus("tu-3") is None
        assert not session.job.unit("tu-2").is_reviewed

    def test_auto_mark_disabled(self, sample_job):
        config = AppConfig.model_validate({"review": {"auto_mark_on_focus_loss": False}})
        session = open_session(sample_job, config=config)
        session.focus("tu-2")
        session.edit("tu-2", ["Le chat dort"])

        assert session.focus(None) is None
        assert not session.job.unit("tu-2").is_reviewed

    def test_segment_time_recorded_for_edited_unit(self, sample_job):
        session = ReviewSession(VersionedJob.from_job(sample_job), timer_clock=ticking(10.0, 25.0, 30.0))

        session.focus("tu-2")
        session.edit("tu-2", ["Le chat dort"])
        session.focus("tu-3")

        assert session.segment_times == {"tu-2": 15.0}

    def test_time_on_untouched_unit_discarded(self, sample_job):
        session = ReviewSession(VersionedJob.from_job(sample_job), timer_clock=ticking(10.0))

        session.focus("tu-3")
        session.focus(None)

        assert session.segment_times == {}

    def test_page_timing(self, sample_job):
        session = ReviewSession(VersionedJob.from_job(sample_job), timer_clock=ticking(100.0, 160.0))

        session.start_page(2)
        timing = session.stop_page()

        assert timing.page_index == 2
        assert timing.elapsed == 60.0
        assert session.page_times == [timing]

    def test_timing_disabled(self, sample_job):
        config = AppConfig.model_validate({"review": {"track_review_time": False}})
        session = ReviewSession(VersionedJob.from_job(sample_job), config=config)

        session.focus("tu-2")
        session.edit("tu-2", ["Le chat dort"])
        session.focus("tu-3")
        session.start_page(0)

        assert session.timers is None
        assert session.stop_page() is None
        assert session.segment_times == {}

    def test_mark_all_visible(self, session):
        assert session.mark_all_visible(["tu-1", "tu-2"]) == ["tu-1", "tu-2"]
        assert session.mark_all_visible(["tu-1", "tu-2", "tu-3"]) == ["tu-3"]

    def test_select_candidate(self, make_unit):
        session = open_session(JobData(tus=[make_unit("tu-1", target=["A"], candidates=[["A"], ["B"]])]))

        unit = session.select_candidate("tu-1", 1)

        assert unit.target_content == ["B"]
        assert unit.candidate_selected is True


class TestAssessment:
    """Tests for quality assessment through the session."""

    def test_weight_taken_from_model(self, session):
        unit = session.assess("tu-2", "major", "accuracy.omission", notes="Dropped 'sur le tapis'")

        assert unit.quality_assessment.weight == 5
        assert unit.quality_assessment.notes == "Dropped 'sur le tapis'"

    def test_unknown_severity_weighs_nothing(self, session):
        assert session.assess("tu-2", "blocker", "accuracy.omission").quality_assessment.weight == 0

    def test_validation_flags_unassessed_correction(self, session):
        session.edit("tu-3", ["Sauvegarder"])

        results = session.validation()

        assert not results["tu-3"].valid
        assert results["tu-3"].message == "missing assessment"
        assert session.invalid_units() == ["tu-3"]

        session.assess("tu-3", "minor", "fluency.grammar")
        assert session.invalid_units() == []

    def test_validation_without_model(self, sample_job):
        session = open_session(sample_job)
        session.edit("tu-3", ["Sauvegarder"])

        assert session.validation() == {}

    def test_swapping_model_keeps_assessments(self, session):
        session.edit("tu-3", ["Sauvegarder"])
        session.assess("tu-3", "minor", "fluency.grammar")

        session.set_quality_model(session.quality_model.model_copy(update={"severities": ()}))

        assert session.job.unit("tu-3").quality_assessment.severity_id == "minor"
        assert "severity not in current model" in session.validation()["tu-3"].message

    def test_clear_assessment(self, session):
        session.assess("tu-2", "major", "accuracy.omission")

        assert session.clear_assessment("tu-2").quality_assessment is None


class TestStatisticsAndExport:
    """Tests for session metrics, summary and export."""

    def test_statistics(self, session):
        session.focus("tu-3")
        session.edit("tu-3", ["Sauvegarder"])
        session.assess("tu-3", "minor", "fluency.grammar")
        session.focus(None)

        stats = session.statistics()

        assert stats.ter.ter == 1.0
        assert stats.ept.ept == 1000.0
        assert stats.counts.reviewed_segments == 1
        assert stats.qa.severity_breakdown == {"minor": 1}

    def test_render_summary(self, session):
        session.edit("tu-3", ["Sauvegarder"])
        session.set_reviewed("tu-3")

        report = session.render_summary()

        assert "Segments reviewed: 1 / 3" in report["text"]
        assert "Test Model" in report["html"]

    def test_export_holds_changed_or_reviewed_units(self, session):
        session.edit("tu-3", ["Sauvegarder"])
        session.set_reviewed("tu-2")

        document = session.export()

        assert [tu["guid"] for tu in document["tus"]] == ["tu-2", "tu-3"]
        assert document["tus"][0]["ts"] == 1762257600000
        assert document["targetLang"] == "fr"
        json.dumps(document)

    def test_save_resets_status(self, session):
        session.edit("tu-3", ["Sauvegarder"])
        assert session.job.status == FileStatus.CHANGED

        session.save()

        assert session.job.status == FileStatus.SAVED
        assert session.job.saved["tu-3"].target_content == ["Sauvegarder"]


class TestFilterUnits:
    """Tests for unit search."""

    @pytest.fixture
    def units(self, make_unit):
        return [
            make_unit("tu-1", source=["Checkout"], target=["Paiement"], rid="checkout.json"),
            make_unit("tu-2", source=["Save"], target=["Enregistrer"], notes={"desc": "Button label"}),
            make_unit("tu-3", source=["Cancel"], target=["Annuler"], notes="Shown in dialogs"),
        ]

    def test_blank_query_keeps_all(self, units):
        assert filter_units(units, "") == units
        assert filter_units(units, None) == units
        assert filter_units(units, "   ") == units

    def test_case_insensitive_target(self, units):
        assert [tu.guid for tu in filter_units(units, "PAIEMENT")] == ["tu-1"]

    def test_notes(self, units):
        assert [tu.guid for tu in filter_units(units, "button")] == ["tu-2"]
        assert [tu.guid for tu in filter_units(units, "dialogs")] == ["tu-3"]

    def test_restricted_fields(self, units):
        assert [tu.guid for tu in filter_units(units, "checkout", fields=("rid",))] == ["tu-1"]
        assert filter_units(units, "checkout", fields=("target",)) == []

    def test_guid_search(self, units):
        assert [tu.guid for tu in filter_units(units, "tu-3", fields=("guid",))] == ["tu-3"]

    def test_unknown_field(self, units):
        with pytest.raises(ValueError, match="Unknown search fields: comment"):
            filter_units(units, "x", fields=("comment",))

    def test_session_search(self, session):
        assert [tu.guid for tu in session.search("chat")] == ["tu-2"]
