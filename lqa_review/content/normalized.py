"""Normalized content operations: comparison, tokenization and display.

A normalized sequence mixes literal text (``str``) with :class:`Placeholder`
items. How text is split into runs carries no meaning: ``["a\\n", "b"]`` and
``["a", "\\n", "b"]`` are the same content. Everything here is total: items
that are neither text nor placeholders never raise, they compare by a stable
marker and contribute no words.
"""

import json
import re
from typing import Any, Iterable, List, Optional

from lqa_review.domain.models import Placeholder, PlaceholderKind
from lqa_review.utils.hashing import hash_string

# Markers use NUL, which is escaped (doubled) inside text so that no text run
# can ever imitate a placeholder marker.
_ESC = "\x00"
_PLACEHOLDER_OPEN = _ESC + "["
_UNKNOWN_OPEN = _ESC + "?"
_MARKER_CLOSE = _ESC + "]"

_TAG_NAME = re.compile(r"</?([a-zA-Z][a-zA-Z0-9]*)")


def _escape_text(text: str) -> str:
    return text.replace(_ESC, _ESC + _ESC)


def _placeholder_marker(item: Placeholder) -> str:
    fields = [item.kind.value, item.code, item.alt_code, item.sample]
    return _PLACEHOLDER_OPEN + json.dumps(fields, ensure_ascii=False) + _MARKER_CLOSE


def _unknown_marker(item: Any) -> str:
    try:
        body = json.dumps(item, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError):
        body = repr(item)
    return _UNKNOWN_OPEN + type(item).__name__ + ":" + body.replace(_ESC, "\\0") + _MARKER_CLOSE


def to_comparable_string(items: Optional[Iterable[Any]]) -> str:
    """Render a sequence as a string that is equal iff the content is equal.

    Text runs are concatenated verbatim; each placeholder becomes a marker
    encoding kind, code, alt_code and sample. Unrecognized items become a
    distinct, stable marker.
    """
    if items is None:
        return ""

    parts: List[str] = []
    for item in items:
        if isinstance(item, str):
            parts.append(_escape_text(item))
        elif isinstance(item, Placeholder):
            parts.append(_placeholder_marker(item))
        else:
            parts.append(_unknown_marker(item))
    return "".join(parts)


def _items_identical(a: Any, b: Any) -> bool:
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, Placeholder) and isinstance(b, Placeholder):
        return a == b
    return False


def equivalent(a: Optional[List[Any]], b: Optional[List[Any]]) -> bool:
    """Compare two sequences for content equality.

    Same-length sequences are first compared element by element; on any
    mismatch (or differing lengths) the comparable strings decide, so that
    sequences differing only in text-run segmentation compare equal.

    Example:
        >>> equivalent(["a\\n", "b"], ["a", "\\n", "b"])
        True
    """
    a = a or []
    b = b or []

    if len(a) == len(b) and all(_items_identical(x, y) for x, y in zip(a, b)):
        return True

    return to_comparable_string(a) == to_comparable_string(b)


def content_hash(items: Optional[Iterable[Any]]) -> str:
    """Segmentation-insensitive SHA256 of a sequence.

    Equivalent sequences always share a hash, so hosts can compare it with the
    hash of the content they last pushed into an editor before reapplying.
    """
    return hash_string(to_comparable_string(items))


def words_of(items: Optional[Iterable[Any]]) -> List[str]:
    """Lower-cased whitespace-delimited words drawn from text items only.

    Placeholders and unrecognized items contribute no words but do separate
    the words on either side of them. Adjacent text runs are joined before
    splitting, so segmentation never changes the result.
    """
    if items is None:
        return []

    buffer: List[str] = []
    for item in items:
        if isinstance(item, str):
            buffer.append(item)
        else:
            buffer.append(" ")
    return "".join(buffer).lower().split()


def count_words(items: Optional[Iterable[Any]]) -> int:
    """Number of words in a sequence (see :func:`words_of`)."""
    return len(words_of(items))


def editable_text(items: Optional[Iterable[Any]]) -> List[str]:
    """Only the text runs of a sequence, in order."""
    if items is None:
        return []
    return [item for item in items if isinstance(item, str)]


def _tag_name(code: str) -> Optional[str]:
    match = _TAG_NAME.search(code)
    return match.group(1) if match else None


def to_plain_string(items: Optional[Iterable[Any]]) -> str:
    """Render a sequence as reader-facing plain text.

    Standalone variables show their sample value when present, tags show a
    simplified ``<name>``/``</name>`` form, anything else shows its code.
    """
    if items is None:
        return ""

    parts: List[str] = []
    for item in items:
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Placeholder):
            if item.kind == PlaceholderKind.STANDALONE and item.sample:
                parts.append(item.sample)
            elif item.is_tag:
                name = _tag_name(item.code) or "tag"
                parts.append(f"<{name}>" if item.kind == PlaceholderKind.START_TAG else f"</{name}>")
            else:
                parts.append(item.code)
    return "".join(parts)


def to_display_string(items: Optional[Iterable[Any]], brackets: bool = True) -> str:
    """Render a sequence with placeholders visibly marked.

    Standalone variables render as ``{sample}`` (or ``{code}``), tags as
    ``<name>``/``</name>``. Other placeholders render as ``[code]``, or bare
    ``code`` when ``brackets`` is False (the target-side rendering).
    """
    if items is None:
        return ""

    parts: List[str] = []
    for item in items:
        if isinstance(item, str):
            parts.append(item)
            continue
        if not isinstance(item, Placeholder):
            continue

        if item.kind == PlaceholderKind.STANDALONE:
            parts.append("{" + (item.sample or item.code) + "}")
            continue

        name = _tag_name(item.code) if item.is_tag else None
        if name:
            parts.append(f"<{name}>" if item.kind == PlaceholderKind.START_TAG else f"</{name}>")
        elif brackets:
            parts.append(f"[{item.code}]")
        else:
            parts.append(item.code)
    return "".join(parts)


def placeholders_of(items: Optional[Iterable[Any]]) -> List[Placeholder]:
    """The placeholders of a sequence, in order."""
    if items is None:
        return []
    return [item for item in items if isinstance(item, Placeholder)]


def merge_text_runs(items: Iterable[Any]) -> List[Any]:
    """Canonical segmentation: adjacent text runs joined, empty runs dropped."""
    merged: List[Any] = []
    for item in items:
        if isinstance(item, str):
            if not item:
                continue
            if merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + item
                continue
        merged.append(item)
    return merged
