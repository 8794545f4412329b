"""Hashing utilities for content versioning.

Hosts use content hashes as a cheap "last known content" marker to decide
whether an externally supplied update must be reapplied to an editor.
"""

import hashlib


def hash_string(value: str) -> str:
    """Compute SHA256 hash of a string value.

    Args:
        value: String to hash

    Returns:
        Hexadecimal string representation of SHA256 hash (64 characters)
    """
    hash_obj = hashlib.sha256(value.encode("utf-8", errors="surrogatepass"))
    return hash_obj.hexdigest()
