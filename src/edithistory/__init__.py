# src/edithistory/__init__.py
"""In-memory undo/redo history for a single text buffer."""

from edithistory.core import (  # noqa: F401
    Delete,
    History,
    HistoryEntry,
    Insert,
    Operation,
    OperationKind,
    Replace,
    SnapshotHistory,
    TextRange,
    make_history,
)

__version__ = "0.1.0"

__all__ = [
    "Delete",
    "History",
    "HistoryEntry",
    "Insert",
    "Operation",
    "OperationKind",
    "Replace",
    "SnapshotHistory",
    "TextRange",
    "make_history",
]
