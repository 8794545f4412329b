"""Normalized content model and placeholder protection.

This package provides:
- Segmentation-tolerant comparison (equivalent, to_comparable_string, content_hash)
- The word tokenization used by the metrics (words_of, count_words)
- Display renderings of sequences
- PlaceholderGuard: the rule that ordinary edits never delete placeholders
"""

from .normalized import (
    content_hash,
    count_words,
    editable_text,
    equivalent,
    merge_text_runs,
    placeholders_of,
    to_comparable_string,
    to_display_string,
    to_plain_string,
    words_of,
)
from .protection import (
    BACKWARD,
    FORWARD,
    PlaceholderGuard,
    find_placeholder_position,
    sequence_length,
    token_boundary,
)

__all__ = [
    "content_hash",
    "count_words",
    "editable_text",
    "equivalent",
    "merge_text_runs",
    "placeholders_of",
    "to_comparable_string",
    "to_display_string",
    "to_plain_string",
    "words_of",
    "BACKWARD",
    "FORWARD",
    "PlaceholderGuard",
    "find_placeholder_position",
    "sequence_length",
    "token_boundary",
]
