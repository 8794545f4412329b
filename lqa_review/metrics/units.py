"""Accepted input shapes for the metric functions.

Metrics are called with plain data: a job document, a guid-keyed mapping
(such as ``VersionedJob.current``) or any iterable of units. A
``VersionedJob`` may also be passed on its own, in which case its current
and original snapshots are used.
"""

from typing import Iterable, List, Mapping, Optional, Tuple, Union

from lqa_review.domain.models import JobData, TranslationUnit
from lqa_review.versioning.engine import VersionedJob

Units = Union[VersionedJob, JobData, Mapping[str, TranslationUnit], Iterable[TranslationUnit]]


def as_unit_list(units: Units) -> List[TranslationUnit]:
    if units is None:
        return []
    if isinstance(units, VersionedJob):
        return units.current_units()
    if isinstance(units, JobData):
        return list(units.tus)
    if isinstance(units, Mapping):
        return list(units.values())
    return list(units)


def as_unit_index(units: Units) -> Mapping[str, TranslationUnit]:
    if units is None:
        return {}
    if isinstance(units, VersionedJob):
        return units.original
    if isinstance(units, JobData):
        return units.units_by_guid()
    if isinstance(units, Mapping):
        return units
    return {tu.guid: tu for tu in units}


def resolve_snapshots(
    current: Units, original: Optional[Units]
) -> Tuple[List[TranslationUnit], Mapping[str, TranslationUnit]]:
    """Return (current units, original index), defaulting original to the job's own."""
    if original is None and isinstance(current, VersionedJob):
        return current.current_units(), current.original
    return as_unit_list(current), as_unit_index(original)
