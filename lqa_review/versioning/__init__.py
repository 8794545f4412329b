"""Version state engine: original / saved / current snapshots of a job.

This module provides:
- classify: ORIGINAL / SAVED / MODIFIED classification of one unit
- VersionedJob: snapshot holder with edits, save, candidate selection and export selection
- apply_loaded_translations: overlay of a saved companion document onto a job
"""

from .engine import VersionedJob, apply_loaded_translations, classify
from .exceptions import MissingUnitError, VersioningError
from .models import FileStatus, Snapshot, VersionState

__all__ = [
    "VersionedJob",
    "apply_loaded_translations",
    "classify",
    "MissingUnitError",
    "VersioningError",
    "FileStatus",
    "Snapshot",
    "VersionState",
]
