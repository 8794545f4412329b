"""Utility functions for hashing and time handling."""

from .hashing import hash_string
from .timestamps import (
    coerce_review_timestamp,
    ensure_utc,
    format_timestamp,
    parse_iso_datetime,
    timestamp_to_unix_ms,
    unix_ms_to_timestamp,
    utc_now,
)

__all__ = [
    # Hashing
    "hash_string",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "format_timestamp",
    "timestamp_to_unix_ms",
    "unix_ms_to_timestamp",
    "coerce_review_timestamp",
]
