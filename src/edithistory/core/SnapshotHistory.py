# edithistory/core/SnapshotHistory.py
"""Snapshot history: a simplified undo/redo engine storing whole-buffer texts.

It exposes the same push/undo/redo/clear contract as `History`, but each entry is a
full copy of the buffer. There is no merging and no range bookkeeping, so every push of
a different text is one undo step. Hosts that prefer simplicity over memory use and
undo granularity select it with ``history.mode = "snapshot"``.
"""
from collections import deque
from typing import Optional

from edithistory.utils.logging_config import OPS_LOGGER, logger
from edithistory.utils.utils import DEFAULT_MAX_SIZE


class SnapshotHistory:
    """Undo/redo over buffer snapshots.

    Attributes:
        current (str): The snapshot matching the host buffer right now.
        max_size (int): Maximum number of snapshots kept on the undo stack.
    """

    def __init__(self, initial_text: str = "", max_size: int = DEFAULT_MAX_SIZE):
        if max_size < 0:
            raise ValueError(f"max_size must be non-negative, got {max_size}")
        self.current = initial_text
        self.max_size = max_size
        self._undo_stack: deque[str] = deque()
        self._redo_stack: list[str] = []

    @classmethod
    def with_capacity(cls, max_size: int) -> "SnapshotHistory":
        return cls(max_size=max_size)

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

    def peek_undo(self) -> Optional[str]:
        return self._undo_stack[-1] if self._undo_stack else None

    def peek_redo(self) -> Optional[str]:
        return self._redo_stack[-1] if self._redo_stack else None

    def push(self, text: str) -> None:
        """Records the buffer text after an edit. Pushing the current text is a no-op."""
        if not isinstance(text, str):
            logger.warning(f"SnapshotHistory: Attempted to push non-text snapshot: {text!r}")
            return
        if text == self.current:
            return

        self._undo_stack.append(self.current)
        self.current = text
        self._redo_stack.clear()
        OPS_LOGGER.debug(f"snapshot push ({len(text)} units)")

        while len(self._undo_stack) > self.max_size:
            self._undo_stack.popleft()
            logger.debug(f"SnapshotHistory: Evicted oldest snapshot (max_size={self.max_size}).")

    def undo(self) -> Optional[str]:
        """Steps back one snapshot and returns the text the buffer should now hold."""
        if not self._undo_stack:
            logger.debug("SnapshotHistory: Nothing to undo.")
            return None
        self._redo_stack.append(self.current)
        self.current = self._undo_stack.pop()
        OPS_LOGGER.debug(f"snapshot undo ({len(self.current)} units)")
        return self.current

    def redo(self) -> Optional[str]:
        """Steps forward one snapshot and returns the text the buffer should now hold."""
        if not self._redo_stack:
            logger.debug("SnapshotHistory: Nothing to redo.")
            return None
        self._undo_stack.append(self.current)
        self.current = self._redo_stack.pop()
        OPS_LOGGER.debug(f"snapshot redo ({len(self.current)} units)")
        return self.current

    def clear(self, initial_text: Optional[str] = None) -> None:
        """Empties both stacks, optionally reseeding the current snapshot (e.g. after a reload)."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        if initial_text is not None:
            self.current = initial_text
        logger.debug("SnapshotHistory: Undo/Redo stacks cleared.")
