"""Template context for the quality summary report.

Builds a flat dictionary from a versioned job and an optional quality model,
pre-formatting every number so templates stay free of logic.
"""

from typing import Dict, List, Optional

from lqa_review.metrics import (
    calculate_ept,
    calculate_qa_summary,
    calculate_segment_word_counts,
    calculate_ter_statistics,
)
from lqa_review.metrics.models import QASummary
from lqa_review.quality.models import QualityModel
from lqa_review.utils.timestamps import format_timestamp, utc_now
from lqa_review.versioning.engine import VersionedJob


def _severity_rows(summary: QASummary, model: QualityModel) -> List[Dict]:
    rows = []
    for severity in model.severities:
        count = summary.severity_breakdown.get(severity.id, 0)
        if count:
            rows.append(
                {"label": severity.label or severity.id, "count": count, "share": f"{summary.share(count):.1f}%"}
            )
    return rows


def _category_rows(summary: QASummary, model: QualityModel) -> List[Dict]:
    rows = []
    for category in model.categories:
        for subcategory in category.subcategories:
            count = summary.category_breakdown.get(f"{category.id}.{subcategory.id}", 0)
            if count:
                rows.append(
                    {
                        "category": category.label or category.id,
                        "subcategory": subcategory.label or subcategory.id,
                        "count": count,
                        "share": f"{summary.share(count):.1f}%",
                    }
                )
    return rows


def build_summary_context(
    job: VersionedJob,
    model: Optional[QualityModel] = None,
    title: str = "Quality Summary",
) -> Dict:
    """Build the summary report context.

    Args:
        job: Versioned job whose current and original snapshots are measured
        model: Active quality model; the QA section is omitted without one
        title: Report heading

    Returns:
        Dictionary with keys:
        - title, generated_at, source_lang, target_lang, status
        - counts: segment/word progress with reviewed_percentage
        - ter: formatted TER and its input statistics
        - ept: EPT formatted to one decimal
        - has_model, model: model name/version (empty when absent)
        - qa: totals, severity_rows, category_rows and unassessed counts
    """
    counts = calculate_segment_word_counts(job)
    ter_stats = calculate_ter_statistics(job)
    ept = calculate_ept(job)
    summary = calculate_qa_summary(job)

    context = {
        "title": title,
        "generated_at": format_timestamp(utc_now()),
        "source_lang": job.metadata.source_lang or "",
        "target_lang": job.metadata.target_lang or "",
        "status": job.status.value,
        "counts": {
            "total_segments": counts.total_segments,
            "total_words": counts.total_words,
            "reviewed_segments": counts.reviewed_segments,
            "reviewed_words": counts.reviewed_words,
            "reviewed_percentage": f"{counts.reviewed_percentage:.0f}%",
        },
        "ter": {
            "value": f"{ter_stats.ter * 100:.0f}%",
            "segments": ter_stats.total_segments,
            "words": ter_stats.total_words,
            "changed_segments": ter_stats.changed_segments,
            "edit_distance": ter_stats.edit_distance,
        },
        "ept": f"{ept:.1f}",
        "has_model": model is not None,
        "model": {
            "name": model.name if model else "",
            "version": model.version if model else "",
        },
        "qa": {
            "total_errors": summary.total_errors,
            "total_weight": f"{summary.total_weight:g}",
            "severity_rows": _severity_rows(summary, model) if model else [],
            "category_rows": _category_rows(summary, model) if model else [],
            "unassessed_severity": summary.unassessed_severity,
            "unassessed_category": summary.unassessed_category,
            "show_severity": bool(summary.total_errors or summary.unassessed_severity),
            "show_category": bool(summary.total_errors or summary.unassessed_category),
        },
    }
    return context
