"""State enums for the versioning engine."""

from enum import Enum


class VersionState(str, Enum):
    """Classification of a unit's current target against its snapshots.

    ORIGINAL: current equals the content first loaded
    SAVED: current equals the last saved content (but not the original)
    MODIFIED: current differs from both
    """

    ORIGINAL = "original"
    SAVED = "saved"
    MODIFIED = "modified"


class FileStatus(str, Enum):
    """Job-level status shown next to the file name.

    NEW: freshly loaded job, compared against the original
    LOADED: job loaded together with previously saved translations
    CHANGED: unsaved edits exist relative to the baseline
    SAVED: the working copy was just saved
    """

    NEW = "NEW"
    LOADED = "LOADED"
    CHANGED = "CHANGED"
    SAVED = "SAVED"


class Snapshot(str, Enum):
    """Names of the three snapshot collections of a versioned job."""

    ORIGINAL = "original"
    SAVED = "saved"
    CURRENT = "current"
