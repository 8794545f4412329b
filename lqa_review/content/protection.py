"""Placeholder protection policy for editing surfaces.

Editors address a sequence by *positions*: every text character occupies one
position and every non-text item (placeholder) occupies exactly one position,
so a cursor step or a delete keystroke at a placeholder boundary always treats
the placeholder as a single token.

Ordinary deletions never remove a placeholder. The only way to take one out
of a sequence is the remove half of a move, performed while
:meth:`PlaceholderGuard.move_transaction` is active. Refused removals are
silent no-ops: bulk operations that are not placeholder-aware (cut, select
all and replace) simply leave the placeholders where they are.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from lqa_review.domain.models import Placeholder
from lqa_review.logging import get_logger

from .normalized import merge_text_runs

logger = get_logger(__name__, component="protection")

# Direction constants for cursor movement and single-token deletion.
BACKWARD = -1
FORWARD = 1


def _explode(items: Sequence[Any]) -> List[Any]:
    """One atom per position: single characters for text, items otherwise."""
    atoms: List[Any] = []
    for item in items:
        if isinstance(item, str):
            atoms.extend(item)
        else:
            atoms.append(_Token(item))
    return atoms


def _implode(atoms: Sequence[Any]) -> List[Any]:
    return merge_text_runs(atom.item if isinstance(atom, _Token) else atom for atom in atoms)


class _Token:
    """Wraps a non-text item so that a one-character string is never mistaken for it."""

    __slots__ = ("item",)

    def __init__(self, item: Any):
        self.item = item


def sequence_length(items: Sequence[Any]) -> int:
    """Number of cursor positions in a sequence."""
    return sum(len(item) if isinstance(item, str) else 1 for item in items)


def token_boundary(items: Sequence[Any], position: int, direction: int) -> int:
    """Cursor position after one step from ``position`` in ``direction``.

    A placeholder is stepped over in a single move. The result is clamped to
    ``[0, sequence_length(items)]``.
    """
    length = sequence_length(items)
    target = position + (FORWARD if direction >= 0 else BACKWARD)
    return max(0, min(length, target))


class PlaceholderGuard:
    """Gatekeeper for placeholder removal on one editing surface.

    ``placeholder_removal_permitted`` is False except while a move transaction
    is open; the transaction always resets it, even if the move fails.
    """

    def __init__(self):
        self._removal_permitted = False

    @property
    def placeholder_removal_permitted(self) -> bool:
        return self._removal_permitted

    @contextmanager
    def move_transaction(self) -> Iterator["PlaceholderGuard"]:
        """Permit placeholder removal for the duration of one move.

        Raises:
            RuntimeError: If a move transaction is already open
        """
        if self._removal_permitted:
            raise RuntimeError("A placeholder move transaction is already in progress")
        self._removal_permitted = True
        try:
            yield self
        finally:
            self._removal_permitted = False

    def remove(self, items: Sequence[Any], index: int) -> Tuple[List[Any], Any]:
        """Remove the item at list ``index``.

        Returns:
            ``(new_sequence, item)``. When the item is a placeholder and
            removal is not permitted, the sequence is returned unchanged along
            with the item. An out-of-range index returns ``(copy, None)``.
        """
        result = list(items)
        if index < 0 or index >= len(result):
            return result, None

        item = result[index]
        if isinstance(item, Placeholder) and not self._removal_permitted:
            logger.debug(
                "Refused placeholder removal outside a move",
                extra={"event": "protection.removal.refused", "code": item.code},
            )
            return result, item

        del result[index]
        return result, item

    def delete_range(self, items: Sequence[Any], start: int, end: int) -> List[Any]:
        """Delete positions ``[start, end)``, keeping every protected placeholder.

        Covers cut of a selection and forward/backward deletion of a range.
        """
        atoms = _explode(items)
        start = max(0, min(start, len(atoms)))
        end = max(start, min(end, len(atoms)))

        kept: List[Any] = []
        refused = 0
        for position, atom in enumerate(atoms):
            if start <= position < end:
                if self._is_protected(atom):
                    refused += 1
                    kept.append(atom)
                continue
            kept.append(atom)

        if refused:
            logger.debug(
                "Kept protected placeholders during range deletion",
                extra={"event": "protection.removal.refused", "count": refused},
            )
        return _implode(kept)

    def delete_token(self, items: Sequence[Any], position: int, direction: int) -> List[Any]:
        """Single keystroke deletion: backspace (BACKWARD) or delete (FORWARD).

        Deletes exactly one position next to the cursor. A placeholder there is
        one token and, being protected, is left in place.
        """
        if direction < 0:
            return self.delete_range(items, position - 1, position)
        return self.delete_range(items, position, position + 1)

    def insert_text(self, items: Sequence[Any], position: int, text: str) -> List[Any]:
        """Insert ``text`` at a cursor position."""
        atoms = _explode(items)
        position = max(0, min(position, len(atoms)))
        atoms[position:position] = list(text)
        return _implode(atoms)

    def replace_range(self, items: Sequence[Any], start: int, end: int, text: str) -> List[Any]:
        """Typing or pasting over a selection: delete then insert at ``start``."""
        return self.insert_text(self.delete_range(items, start, end), max(0, start), text)

    def replace_all(self, items: Sequence[Any], text: str) -> List[Any]:
        """Select-all-and-replace: all text goes, placeholders stay in order after the new text."""
        return self.replace_range(items, 0, sequence_length(items), text)

    def move_placeholder(self, items: Sequence[Any], from_position: int, to_position: int) -> List[Any]:
        """Atomically move the placeholder at ``from_position`` to ``to_position``.

        ``to_position`` is a cursor position in the sequence as it is before
        the move. Moving anything that is not a placeholder is a no-op.
        """
        atoms = _explode(items)
        if not 0 <= from_position < len(atoms):
            return _implode(atoms)
        atom = atoms[from_position]
        if not (isinstance(atom, _Token) and isinstance(atom.item, Placeholder)):
            return _implode(atoms)

        with self.move_transaction():
            del atoms[from_position]
            target = max(0, min(to_position, len(atoms) + 1))
            if target > from_position:
                target -= 1
            atoms.insert(target, atom)

        logger.debug(
            "Moved placeholder",
            extra={
                "event": "protection.placeholder.moved",
                "code": atom.item.code,
                "from_position": from_position,
                "to_position": target,
            },
        )
        return _implode(atoms)

    def _is_protected(self, atom: Any) -> bool:
        return (
            isinstance(atom, _Token)
            and isinstance(atom.item, Placeholder)
            and not self._removal_permitted
        )


def find_placeholder_position(items: Sequence[Any], placeholder: Placeholder) -> Optional[int]:
    """Cursor position of the first occurrence of ``placeholder``, if any."""
    position = 0
    for item in items:
        if isinstance(item, str):
            position += len(item)
            continue
        if isinstance(item, Placeholder) and item == placeholder:
            return position
        position += 1
    return None
