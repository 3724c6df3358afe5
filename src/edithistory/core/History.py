# edithistory/core/History.py
"""History Module for the edithistory engine
============================================
This module provides the `History` class, the operation-based undo/redo engine for a
single text buffer. The host widget reports every committed edit as an `Operation`;
the history records it, coalesces it with the previous edit when the two are adjacent
and of the same kind, and hands back operations to apply on undo and redo.

Key Features:
-------------
- Two LIFO stacks (undo and redo) of `HistoryEntry` values.
- Merge-on-push: consecutive keystrokes and runs of backspaces collapse into a single
  undo step by replacing the top entry with the merged operation.
- Bounded depth: the oldest entry is evicted once `max_size` is exceeded. The undo
  stack is a deque, so eviction from the far end is O(1).
- Any new edit invalidates the redo stack.

The history never touches the buffer itself. It is single-threaded by contract: the
host must call it from the thread that owns the buffer.

Classes:
--------
- HistoryEntry: Immutable stack element wrapping one operation.
- History: The undo/redo engine.

Functions:
----------
- make_history(config): Builds an operation-based or snapshot-based history from
  configuration.
"""
from collections import deque
from dataclasses import dataclass
from typing import Any, Optional, Union

from edithistory.core.Operation import Delete, Insert, Operation, Replace
from edithistory.core.SnapshotHistory import SnapshotHistory
from edithistory.utils.logging_config import OPS_LOGGER, logger
from edithistory.utils.utils import DEFAULT_MAX_SIZE, history_settings


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    operation: Operation


## ==================== History Class (Undo/Redo) ====================
class History:
    """Class History
    ===================
    Manages the undo and redo stacks of operations for one buffer.

    Attributes:
        max_size (int): Maximum number of entries kept on the undo stack.
        insert_merge_gap (int): Units an insert may skip and still pass the adjacency check.
        coalesce (bool): Whether adjacent same-kind edits are merged on push.
        _undo_stack (deque[HistoryEntry]): Applied operations, most recent last.
        _redo_stack (list[HistoryEntry]): Undone operations, most recent last.

    Methods:
        push(operation): Records a committed edit, merging it into the top entry when possible.
        undo() -> Optional[Operation]: Returns the operation that reverses the last edit.
        redo() -> Optional[Operation]: Returns the last undone edit, to be re-applied.
        clear(): Empties both stacks.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE, insert_merge_gap: int = 0, coalesce: bool = True):
        """Initializes an empty history.

        Args:
            max_size (int): Undo depth bound. Defaults to 100.
            insert_merge_gap (int): Tolerated gap between adjacent inserts. Gapped inserts
                are still recorded as separate steps, since their merge would not be
                invertible; ``0`` reads as strict contiguity.
            coalesce (bool): Set to False to record every operation as its own step.
        """
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.max_size = max_size
        self.insert_merge_gap = insert_merge_gap
        self.coalesce = coalesce
        self._undo_stack: deque[HistoryEntry] = deque()
        self._redo_stack: list[HistoryEntry] = []

    @classmethod
    def with_capacity(cls, max_size: int) -> "History":
        """Creates a history bounded to ``max_size`` undo steps."""
        return cls(max_size=max_size)

    @classmethod
    def from_config(cls, config: Optional[dict[str, Any]] = None) -> "History":
        """Creates a history from the ``[history]`` table of an application config."""
        settings = history_settings(config)
        return cls(
            max_size=settings["max_size"],
            insert_merge_gap=settings["insert_merge_gap"],
            coalesce=settings["coalesce"],
        )

    # ---- queries ----
    def __len__(self) -> int:
        return len(self._undo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self._redo_stack)

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def peek_undo(self) -> Optional[Operation]:
        """Returns the operation on top of the undo stack without popping it."""
        return self._undo_stack[-1].operation if self._undo_stack else None

    def peek_redo(self) -> Optional[Operation]:
        """Returns the operation on top of the redo stack without popping it."""
        return self._redo_stack[-1].operation if self._redo_stack else None

    # ---- mutation ----
    def push(self, operation: Operation) -> None:
        """Records an edit the host has just committed to its buffer.

        The redo stack is always cleared. If the top entry's operation merges with
        ``operation``, the top entry is replaced by one holding the merged operation
        and the stack does not grow. Otherwise a new entry is appended and the oldest
        entry is evicted if the stack exceeds `max_size`.
        """
        if not isinstance(operation, (Insert, Delete, Replace)):
            logger.warning(f"History: Attempted to push invalid operation: {operation!r}")
            return

        self._redo_stack.clear()

        if self.coalesce and self._undo_stack:
            top = self._undo_stack[-1].operation
            if top.can_merge_with(operation, self.insert_merge_gap):
                merged = top.merge_with(operation, self.insert_merge_gap)
                if merged is not None:
                    self._undo_stack[-1] = HistoryEntry(merged)
                    OPS_LOGGER.debug(f"merge {operation!r} -> {merged!r}")
                    logger.debug(f"History: Merged '{operation.kind().value}' into top entry.")
                    return

        self._undo_stack.append(HistoryEntry(operation))
        OPS_LOGGER.debug(f"push {operation!r}")

        while len(self._undo_stack) > self.max_size:
            evicted = self._undo_stack.popleft()
            logger.debug(f"History: Evicted oldest '{evicted.operation.kind().value}' entry (max_size={self.max_size}).")

        logger.debug(
            f"History: Operation '{operation.kind().value}' added. History size: {len(self._undo_stack)}"
        )

    def undo(self) -> Optional[Operation]:
        """Undoes the last recorded edit.

        Returns:
            Optional[Operation]: The inverse of the top operation, for the host to apply,
            or None if there is nothing to undo.
        """
        if not self._undo_stack:
            logger.debug("History: Nothing to undo.")
            return None

        entry = self._undo_stack.pop()
        inverse = entry.operation.invert()
        self._redo_stack.append(entry)
        OPS_LOGGER.debug(f"undo {entry.operation!r} -> apply {inverse!r}")
        logger.debug(f"History: Undid '{entry.operation.kind().value}'. Undo depth: {len(self._undo_stack)}")
        return inverse

    def redo(self) -> Optional[Operation]:
        """Redoes the last undone edit.

        Returns:
            Optional[Operation]: The original operation, for the host to re-apply, or None
            if there is nothing to redo.
        """
        if not self._redo_stack:
            logger.debug("History: Nothing to redo.")
            return None

        entry = self._redo_stack.pop()
        # Redo never exceeds the bound: the entry was on the undo stack before.
        self._undo_stack.append(entry)
        OPS_LOGGER.debug(f"redo {entry.operation!r}")
        logger.debug(f"History: Redid '{entry.operation.kind().value}'. Redo depth: {len(self._redo_stack)}")
        return entry.operation

    def clear(self) -> None:
        """Clears both undo and redo stacks."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.debug("History: Undo/Redo stacks cleared.")


def make_history(config: Optional[dict[str, Any]] = None) -> Union[History, SnapshotHistory]:
    """Builds the history implementation selected by ``history.mode``.

    ``"operation"`` (the default) yields a `History`; ``"snapshot"`` yields a
    `SnapshotHistory`, which stores whole-buffer texts and never merges.
    """
    settings = history_settings(config)
    if settings["mode"] == "snapshot":
        logger.debug(f"History: Using snapshot history (max_size={settings['max_size']}).")
        return SnapshotHistory(max_size=settings["max_size"])
    logger.debug(f"History: Using operation history (max_size={settings['max_size']}).")
    return History.from_config(config)
