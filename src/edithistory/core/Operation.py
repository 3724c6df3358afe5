# edithistory/core/Operation.py
"""Operation Module for the edithistory engine
==============================================
This module defines the value types that describe a single edit of a text buffer.
An edit is one of three closed variants, each carrying the half-open range it touched
and the text needed to reverse it:

- `Insert`: text was inserted at ``range.start``.
- `Delete`: text was removed from ``range`` (its span before deletion).
- `Replace`: ``old_text`` occupying ``range`` was replaced by ``new_text``.

Operations are immutable. Every operation can produce its inverse, and two adjacent
operations of the same kind can be coalesced into one (typing forward, backspacing),
which is what lets the history collapse runs of keystrokes into a single undo step.

Offsets are buffer units: characters are recommended, bytes work as long as the host
buffer is indexed the same way throughout.

Classes:
--------
- TextRange: Half-open ``[start, end)`` span of buffer units.
- OperationKind: Classification used for merge eligibility.
- Operation: Common base of the three variants (invert, merge, apply).
- Insert, Delete, Replace: The concrete variants.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ==================== Range ====================
@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open span ``[start, end)`` over buffer units.

    Raises:
        ValueError: If ``start`` is negative or greater than ``end``.
    """
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    @classmethod
    def collapsed(cls, offset: int) -> "TextRange":
        """Returns the empty range sitting at ``offset``."""
        return cls(offset, offset)

    @classmethod
    def spanning(cls, start: int, text: str) -> "TextRange":
        """Returns the range covering ``text`` placed at ``start``."""
        return cls(start, start + len(text))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


class OperationKind(Enum):
    INSERT = "insert"
    DELETE = "delete"
    REPLACE = "replace"


# ==================== Operation sum type ====================
@dataclass(frozen=True, slots=True)
class Operation:
    """Base of the closed set of edit variants.

    Never instantiated directly: use `Insert`, `Delete` or `Replace`. All dispatch
    over the variants is done with exhaustive structural matching here, so the
    subclasses stay plain data.
    """
    range: TextRange

    def kind(self) -> OperationKind:
        """Returns the variant tag of this operation."""
        match self:
            case Insert():
                return OperationKind.INSERT
            case Delete():
                return OperationKind.DELETE
            case Replace():
                return OperationKind.REPLACE
        raise TypeError(f"Unknown operation variant: {type(self).__name__}")

    def invert(self) -> "Operation":
        """Returns the operation that reverses this one.

        Applying an operation and then its inverse restores the buffer. The inverse of
        a `Delete` is an `Insert` with a collapsed range at the deletion point; inverting
        that again yields the original `Delete`.
        """
        match self:
            case Insert(range=rng, text=text):
                return Delete(TextRange.spanning(rng.start, text), text)
            case Delete(range=rng, deleted_text=deleted):
                return Insert(TextRange.collapsed(rng.start), deleted)
            case Replace(range=rng, old_text=old, new_text=new):
                return Replace(TextRange.spanning(rng.start, new), new, old)
        raise TypeError(f"Unknown operation variant: {type(self).__name__}")

    def can_merge_with(self, other: "Operation", max_gap: int = 0) -> bool:
        """Checks whether ``other``, performed right after ``self``, coalesces with it.

        Args:
            other: The operation that followed this one.
            max_gap: Number of untouched units allowed between two inserts that
                still count as typing forward. ``0`` requires strict contiguity.

        Returns:
            bool: True for forward-typed inserts and for deletes that extend the
            deleted span on either side. Replacements never merge.
        """
        if self.kind() != other.kind():
            return False

        match (self, other):
            case (Insert(range=first), Insert(range=second)):
                return 0 <= second.start - first.end <= max_gap
            case (Delete(range=first), Delete(range=second)):
                return second.end == first.start or first.end == second.start
            case _:
                return False

    def merge_with(self, other: "Operation", max_gap: int = 0) -> Optional["Operation"]:
        """Returns one operation equivalent to ``self`` followed by ``other``.

        The adjacency rules of `can_merge_with` are checked again here; ``None`` is
        returned whenever the pair does not coalesce. Inserts separated by a gap are
        never merged, even within ``max_gap``: the skipped units are not part of either
        payload, so a merged insert could not be inverted.
        """
        match (self, other):
            case (Insert(range=first, text=first_text), Insert(range=second, text=second_text)):
                if second.start == first.end:
                    return Insert(TextRange(first.start, second.end), first_text + second_text)
            case (Delete(range=first, deleted_text=first_text), Delete(range=second, deleted_text=second_text)):
                # Backspace: the new span sits to the left of the previous one.
                if second.end == first.start:
                    return Delete(TextRange(second.start, first.end), second_text + first_text)
                if first.end == second.start:
                    return Delete(TextRange(first.start, second.end), first_text + second_text)
        return None

    @property
    def resulting_range(self) -> TextRange:
        """Range the host's cursor/selection should cover once this operation is applied."""
        match self:
            case Insert(range=rng, text=text):
                return TextRange.spanning(rng.start, text)
            case Delete(range=rng):
                return TextRange.collapsed(rng.start)
            case Replace(range=rng, new_text=new):
                return TextRange.spanning(rng.start, new)
        raise TypeError(f"Unknown operation variant: {type(self).__name__}")

    def apply(self, buffer: str) -> str:
        """Applies this operation to a plain string buffer and returns the new text.

        The buffer content is not checked against the operation's payload; keeping the
        two in sync is the caller's job.
        """
        start = self.range.start
        match self:
            case Insert(text=text):
                return buffer[:start] + text + buffer[start:]
            case Delete(range=rng):
                return buffer[:start] + buffer[rng.end:]
            case Replace(range=rng, new_text=new):
                return buffer[:start] + new + buffer[rng.end:]
        raise TypeError(f"Unknown operation variant: {type(self).__name__}")


@dataclass(frozen=True, slots=True)
class Insert(Operation):
    text: str

    @classmethod
    def at(cls, start: int, text: str) -> "Insert":
        return cls(TextRange.spanning(start, text), text)


@dataclass(frozen=True, slots=True)
class Delete(Operation):
    deleted_text: str

    @classmethod
    def at(cls, start: int, deleted_text: str) -> "Delete":
        return cls(TextRange.spanning(start, deleted_text), deleted_text)


@dataclass(frozen=True, slots=True)
class Replace(Operation):
    old_text: str
    new_text: str

    @classmethod
    def at(cls, start: int, old_text: str, new_text: str) -> "Replace":
        return cls(TextRange.spanning(start, old_text), old_text, new_text)
